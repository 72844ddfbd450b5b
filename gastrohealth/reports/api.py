# -*- coding: utf-8 -*-
"""Reports — health summary and PDF export endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from ..users.storage import get_user, normalize_email
from .pdf_generator import PDFReportGenerator
from .summary import HealthSummary, build_summary

router = APIRouter(prefix="/api/report", tags=["Reports"])

logger = logging.getLogger(__name__)

pdf_generator = None  # created on first export


def _load_user_or_404(email: str) -> dict:
    try:
        user = get_user(email)
    except Exception as exc:
        logger.exception("Load user for report failed: %s", exc)
        raise HTTPException(status_code=500, detail="Internal server error") from exc
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=HealthSummary, summary="Symptom history summary")
def report_summary(email: str = Query(..., min_length=1)):
    email_norm = normalize_email(email)
    user = _load_user_or_404(email_norm)
    return build_summary(email_norm, user["symptoms"])


@router.get("/pdf", summary="Download the health report as PDF")
def report_pdf(email: str = Query(..., min_length=1)):
    global pdf_generator

    email_norm = normalize_email(email)
    user = _load_user_or_404(email_norm)
    summary = build_summary(email_norm, user["symptoms"])
    try:
        if pdf_generator is None:
            pdf_generator = PDFReportGenerator()
        content = pdf_generator.generate_report(summary, user["symptoms"], profile=user["userProfile"])
    except Exception as exc:
        logger.exception("PDF report generation failed: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to generate report") from exc
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="health-report.pdf"'},
    )
