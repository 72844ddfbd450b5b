# -*- coding: utf-8 -*-
"""Assistant — request and result models for the AI endpoints."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..users.models import SymptomLog, UserProfile


class Meal(BaseModel):
    name: str
    time: str
    portion: str
    note: str = ""


class DailyPlan(BaseModel):
    day: str
    meals: List[Meal] = []


class FoodSafety(str, Enum):
    safe = "An toàn"
    limit = "Hạn chế"
    avoid = "Tránh"


class FoodCheckResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    safety_level: FoodSafety = Field(..., alias="safetyLevel")
    reason: str
    scientific_evidence: Optional[str] = Field(None, alias="scientificEvidence")


class FoodImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field(..., pattern=r"^image/(jpeg|jpg|png|webp|heic|heif)$", alias="mimeType")
    data: str = Field(..., min_length=16, description="Raw base64 without data-url prefix")


class MealPlanRequest(BaseModel):
    profile: Optional[UserProfile] = None
    symptoms: Optional[List[SymptomLog]] = None


class FoodCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile: Optional[UserProfile] = None
    food_name: Optional[str] = Field(None, max_length=500, alias="foodName")
    food_image: Optional[FoodImage] = Field(None, alias="foodImage")


class TriggerAnalysisRequest(BaseModel):
    profile: Optional[UserProfile] = None
    symptoms: Optional[List[SymptomLog]] = None


class RecipeSuggestRequest(BaseModel):
    profile: Optional[UserProfile] = None
    request: Optional[str] = Field(None, max_length=2000)
