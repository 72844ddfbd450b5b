# -*- coding: utf-8 -*-
"""
PDF health report generator.

Renders the symptom summary and the full symptom log as an A4 PDF.
"""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..users.models import SymptomLog, UserProfile
from .summary import HealthSummary

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


class PDFReportGenerator:
    """Health report PDF generator."""

    def __init__(self, font_path: Optional[str] = None):
        self.font_path = font_path
        self._register_fonts()
        self._setup_styles()

    def _register_fonts(self) -> None:
        """Register a TTF font with Vietnamese glyphs when one is installed."""
        for path in [self.font_path, *_FONT_CANDIDATES]:
            if path and Path(path).exists():
                try:
                    pdfmetrics.registerFont(TTFont("ReportSans", path))
                    self.font_name = "ReportSans"
                    return
                except Exception:
                    continue

        self.font_name = "Helvetica"

    def _setup_styles(self) -> None:
        self.styles = getSampleStyleSheet()

        self.styles.add(ParagraphStyle(
            name="ReportTitle",
            fontName=self.font_name,
            fontSize=18,
            leading=24,
            alignment=1,
            spaceAfter=12,
        ))
        self.styles.add(ParagraphStyle(
            name="ReportHeading",
            fontName=self.font_name,
            fontSize=14,
            leading=18,
            spaceBefore=12,
            spaceAfter=6,
            textColor=colors.HexColor("#312e81"),
        ))
        self.styles.add(ParagraphStyle(
            name="ReportBody",
            fontName=self.font_name,
            fontSize=10,
            leading=14,
            spaceBefore=3,
            spaceAfter=3,
        ))
        self.styles.add(ParagraphStyle(
            name="ReportSmall",
            fontName=self.font_name,
            fontSize=8,
            leading=10,
            textColor=colors.grey,
        ))

    def generate_report(
        self,
        summary: HealthSummary,
        symptoms: List[SymptomLog],
        profile: Optional[UserProfile] = None,
    ) -> bytes:
        """
        Build the PDF.

        Args:
            summary: aggregate numbers shown at the top
            symptoms: logs listed in the table, oldest first
            profile: optional onboarding profile

        Returns:
            bytes: PDF content
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=2*cm,
            leftMargin=2*cm,
            topMargin=2*cm,
            bottomMargin=2*cm,
            title="Báo cáo Sức khỏe",
        )

        story = []
        story.append(Paragraph("Báo cáo Sức khỏe", self.styles["ReportTitle"]))
        story.append(Paragraph(escape(summary.email), self.styles["ReportSmall"]))
        story.append(Spacer(1, 12))

        if profile is not None:
            story.extend(self._build_profile_section(profile))
        story.extend(self._build_summary_section(summary))
        story.extend(self._build_log_section(symptoms))

        story.append(Spacer(1, 18))
        story.append(Paragraph(
            f"Tạo lúc {datetime.now().strftime('%H:%M %d/%m/%Y')}",
            self.styles["ReportSmall"],
        ))

        doc.build(story)
        pdf_content = buffer.getvalue()
        buffer.close()
        return pdf_content

    def _build_profile_section(self, profile: UserProfile) -> List:
        elements = []
        elements.append(Paragraph("Hồ sơ", self.styles["ReportHeading"]))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.grey))
        rows = [
            ("Tình trạng bệnh lý", profile.condition.value),
            ("Mức độ đau ban đầu", f"{profile.pain_level}/10"),
            ("Thực phẩm gây kích ứng", profile.trigger_foods or "Không có"),
            ("Mục tiêu ăn kiêng", profile.dietary_goal.value),
        ]
        for label, value in rows:
            elements.append(Paragraph(f"<b>{escape(label)}:</b> {escape(value)}", self.styles["ReportBody"]))
        return elements

    def _build_summary_section(self, summary: HealthSummary) -> List:
        elements = []
        elements.append(Paragraph("Tổng quan", self.styles["ReportHeading"]))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.grey))

        average = f"{summary.average_pain:.1f}" if summary.average_pain is not None else "N/A"
        data = [
            ["Tổng số ghi nhận", str(summary.total_logs)],
            ["Đau trung bình", average],
            ["Ngày ghi nhận đầu tiên", summary.first_log_date or "N/A"],
            ["Số lần không đau", str(summary.pain_free_logs)],
        ]
        table = Table(data, colWidths=[7*cm, 8*cm])
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (-1, -1), self.font_name),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#eef2ff")),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        elements.append(Spacer(1, 6))
        elements.append(table)
        return elements

    def _build_log_section(self, symptoms: List[SymptomLog]) -> List:
        elements = []
        elements.append(Paragraph("Nhật ký triệu chứng", self.styles["ReportHeading"]))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.grey))

        if not symptoms:
            elements.append(Paragraph("Chưa có dữ liệu triệu chứng.", self.styles["ReportBody"]))
            return elements

        body = self.styles["ReportBody"]
        data = [["Ngày", "Mức đau", "Vị trí", "Đã ăn", "Vận động"]]
        for s in symptoms:
            data.append([
                s.timestamp[:10],
                f"{s.pain_level}/10",
                Paragraph(escape(s.pain_location or "-"), body),
                Paragraph(escape(s.eaten_foods), body),
                Paragraph(escape(s.physical_activity or "-"), body),
            ])
        table = Table(data, colWidths=[2.4*cm, 1.8*cm, 3.4*cm, 5.4*cm, 4*cm], repeatRows=1)
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (-1, -1), self.font_name),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4f46e5")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))
        elements.append(Spacer(1, 6))
        elements.append(table)
        return elements
