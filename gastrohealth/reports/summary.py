# -*- coding: utf-8 -*-
"""Reports — symptom history summary (counts, average pain, pain series)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..users.models import SymptomLog


class PainPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="YYYY-MM-DD")
    pain_level: int = Field(..., alias="painLevel")


class HealthSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    total_logs: int = Field(0, ge=0, alias="totalLogs")
    average_pain: Optional[float] = Field(None, alias="averagePain")
    first_log_date: Optional[str] = Field(None, alias="firstLogDate")
    pain_free_logs: int = Field(0, ge=0, alias="painFreeLogs")
    pain_series: List[PainPoint] = Field(default_factory=list, alias="painSeries")


def _date_prefix(iso8601: str) -> str:
    return (iso8601 or "")[:10]


def _round_half_up(value: float) -> float:
    # Decimal(float) is exact, so 0.25 rounds to 0.3 and 0.15 (0.1499...) to 0.1.
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def build_summary(email: str, symptoms: List[SymptomLog]) -> HealthSummary:
    """Summarise logs in the order they were recorded."""
    if not symptoms:
        return HealthSummary(email=email)

    total = len(symptoms)
    average = _round_half_up(sum(s.pain_level for s in symptoms) / total)
    return HealthSummary(
        email=email,
        total_logs=total,
        average_pain=average,
        first_log_date=_date_prefix(symptoms[0].timestamp),
        pain_free_logs=sum(1 for s in symptoms if s.pain_level == 0),
        pain_series=[PainPoint(date=_date_prefix(s.timestamp), pain_level=s.pain_level) for s in symptoms],
    )
