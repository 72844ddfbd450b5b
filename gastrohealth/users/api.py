# -*- coding: utf-8 -*-
"""Users — login, profile and symptom log endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from .models import LoginRequest, LoginResponse, ProfileSaveRequest, SymptomAddRequest, SymptomLog, UserProfile
from .storage import append_symptom, delete_user, get_or_create_user, get_user, normalize_email, save_profile

router = APIRouter(prefix="/api", tags=["Users"])

logger = logging.getLogger(__name__)


def _internal_error(exc: Exception, what: str) -> HTTPException:
    logger.exception("%s failed: %s", what, exc)
    return HTTPException(status_code=500, detail="Internal server error")


def _require_user(email: str) -> dict:
    try:
        user = get_user(email)
    except Exception as exc:
        raise _internal_error(exc, "Load user") from exc
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/login", response_model=LoginResponse, summary="Login or register by email")
def login(request: LoginRequest):
    email = normalize_email(request.email)
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    if "@" not in email:
        raise HTTPException(status_code=400, detail="Invalid email")
    try:
        user = get_or_create_user(email)
    except Exception as exc:
        raise _internal_error(exc, "Login") from exc
    return LoginResponse(email=email, user_profile=user["userProfile"], symptoms=user["symptoms"])


@router.post("/profile", response_model=UserProfile, summary="Save the onboarding profile")
def save_user_profile(request: ProfileSaveRequest):
    email = normalize_email(request.email)
    if not email or request.profile is None:
        raise HTTPException(status_code=400, detail="Email and profile are required")
    try:
        stored = save_profile(email, request.profile)
    except Exception as exc:
        raise _internal_error(exc, "Save profile") from exc
    if stored is None:
        raise HTTPException(status_code=404, detail="User not found")
    return stored


@router.get("/profile", response_model=Optional[UserProfile], summary="Get the stored profile")
def get_user_profile(email: str = Query(..., min_length=1)):
    return _require_user(normalize_email(email))["userProfile"]


@router.post("/symptoms", response_model=List[SymptomLog], status_code=201, summary="Append a symptom log")
def add_symptom(request: SymptomAddRequest):
    email = normalize_email(request.email)
    if not email or request.symptom is None:
        raise HTTPException(status_code=400, detail="Email and symptom are required")
    try:
        symptoms = append_symptom(email, request.symptom)
    except Exception as exc:
        raise _internal_error(exc, "Add symptom") from exc
    if symptoms is None:
        raise HTTPException(status_code=404, detail="User not found")
    return symptoms


@router.get("/symptoms", response_model=List[SymptomLog], summary="List symptom logs")
def list_symptoms(email: str = Query(..., min_length=1)):
    return _require_user(normalize_email(email))["symptoms"]


@router.delete("/account", summary="Delete all stored data for a user")
def delete_account(email: str = Query(..., min_length=1)):
    try:
        deleted = delete_user(normalize_email(email))
    except Exception as exc:
        raise _internal_error(exc, "Delete account") from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return {"status": "ok"}
