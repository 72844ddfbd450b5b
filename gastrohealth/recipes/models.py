# -*- coding: utf-8 -*-
"""Recipes — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RecipeCategory(str, Enum):
    pain_relief = "Giảm đau"
    anti_heartburn = "Chống ợ nóng"
    recovery = "Phục hồi"
    ai_custom = "AI Tùy chỉnh"


class Recipe(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str
    category: RecipeCategory
    cook_time: str = Field(..., alias="cookTime")
    ingredients: List[str] = []
    instructions: str
