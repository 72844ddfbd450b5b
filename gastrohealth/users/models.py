# -*- coding: utf-8 -*-
"""Users — Pydantic models.

Field names follow the browser client's camelCase JSON through aliases.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class Condition(str, Enum):
    ulcer = "Viêm loét dạ dày"
    reflux = "Trào ngược dạ dày thực quản"
    other = "Khác"


class DietaryGoal(str, Enum):
    pain_relief = "Giảm đau"
    heartburn_relief = "Giảm ợ nóng"
    recovery = "Phục hồi"


class UserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    condition: Condition
    pain_level: int = Field(..., ge=0, le=10, alias="painLevel")
    trigger_foods: str = Field("", max_length=2000, alias="triggerFoods")
    dietary_goal: DietaryGoal = Field(..., alias="dietaryGoal")

    @field_validator("trigger_foods", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class SymptomLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)
    pain_level: int = Field(..., ge=0, le=10, alias="painLevel")
    pain_location: str = Field("", max_length=500, alias="painLocation")
    eaten_foods: str = Field(..., min_length=1, max_length=2000, alias="eatenFoods")
    physical_activity: str = Field("", max_length=1000, alias="physicalActivity")
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    timestamp: str = Field(default_factory=utc_now_iso, description="ISO8601 timestamp")

    @field_validator("pain_location", "physical_activity", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class LoginRequest(BaseModel):
    email: Optional[str] = None


class ProfileSaveRequest(BaseModel):
    email: Optional[str] = None
    profile: Optional[UserProfile] = None


class SymptomAddRequest(BaseModel):
    email: Optional[str] = None
    symptom: Optional[SymptomLog] = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    user_profile: Optional[UserProfile] = Field(None, alias="userProfile")
    symptoms: List[SymptomLog] = []
