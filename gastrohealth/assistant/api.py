# -*- coding: utf-8 -*-
"""Assistant — Gemini proxy endpoints (meal plan, food check, triggers, recipes)."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Header, HTTPException
from pydantic import TypeAdapter

from ..gemini import generate_content, generate_json, image_part, text_part
from ..recipes.models import Recipe, RecipeCategory
from .models import (
    DailyPlan,
    FoodCheckRequest,
    FoodCheckResult,
    MealPlanRequest,
    RecipeSuggestRequest,
    TriggerAnalysisRequest,
)
from .prompts import (
    FOOD_CHECK_SCHEMA,
    INSUFFICIENT_DATA_MESSAGE,
    MEAL_PLAN_SCHEMA,
    MIN_SYMPTOMS_FOR_ANALYSIS,
    RECIPE_SCHEMA,
    build_food_check_prompt,
    build_meal_plan_prompt,
    build_recipe_prompt,
    build_trigger_prompt,
)

router = APIRouter(prefix="/api/gemini", tags=["Assistant"])

logger = logging.getLogger(__name__)

_meal_plan_adapter = TypeAdapter(List[DailyPlan])


def _check_base64_or_400(data: str) -> None:
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {exc}") from exc


@router.post("/meal-plan", response_model=List[DailyPlan], summary="Generate a 7-day meal plan")
def meal_plan(
    request: MealPlanRequest,
    x_gemini_api_key: str | None = Header(default=None),
):
    if request.profile is None:
        raise HTTPException(status_code=400, detail="User profile is required")

    prompt = build_meal_plan_prompt(request.profile, request.symptoms or [])
    try:
        raw = generate_json([text_part(prompt)], response_schema=MEAL_PLAN_SCHEMA, api_key=x_gemini_api_key)
        return _meal_plan_adapter.validate_python(raw)
    except Exception as exc:
        logger.exception("Gemini meal plan error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to generate meal plan") from exc


@router.post("/check-food", response_model=FoodCheckResult, summary="Rate a food's safety for the user")
def check_food(
    request: FoodCheckRequest,
    x_gemini_api_key: str | None = Header(default=None),
):
    has_name = bool((request.food_name or "").strip())
    if request.profile is None or (not has_name and request.food_image is None):
        raise HTTPException(status_code=400, detail="Profile and either food name or image are required")

    parts: List[Dict[str, Any]] = []
    if request.food_image is not None:
        _check_base64_or_400(request.food_image.data)
        parts.append(image_part(request.food_image.mime_type, request.food_image.data))
    parts.append(text_part(build_food_check_prompt(request.profile, request.food_name)))

    try:
        raw = generate_json(parts, response_schema=FOOD_CHECK_SCHEMA, api_key=x_gemini_api_key)
        return FoodCheckResult.model_validate(raw)
    except Exception as exc:
        logger.exception("Gemini check food error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to check food safety") from exc


@router.post("/analyze-triggers", response_model=str, summary="Markdown analysis of pain triggers")
def analyze_triggers(
    request: TriggerAnalysisRequest,
    x_gemini_api_key: str | None = Header(default=None),
):
    if request.profile is None or request.symptoms is None:
        raise HTTPException(status_code=400, detail="Profile and symptoms are required")
    if len(request.symptoms) < MIN_SYMPTOMS_FOR_ANALYSIS:
        return INSUFFICIENT_DATA_MESSAGE

    prompt = build_trigger_prompt(request.profile, request.symptoms)
    try:
        return generate_content([text_part(prompt)], api_key=x_gemini_api_key)
    except Exception as exc:
        logger.exception("Gemini analyze triggers error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to analyze triggers") from exc


@router.post("/suggest-recipe", response_model=Recipe, summary="Generate a custom recipe")
def suggest_recipe(
    request: RecipeSuggestRequest,
    x_gemini_api_key: str | None = Header(default=None),
):
    if request.profile is None or not (request.request or "").strip():
        raise HTTPException(status_code=400, detail="Profile and request are required")

    prompt = build_recipe_prompt(request.profile, request.request)
    try:
        raw = generate_json([text_part(prompt)], response_schema=RECIPE_SCHEMA, api_key=x_gemini_api_key)
        if not isinstance(raw, dict):
            raise ValueError("Recipe output is not a JSON object")
        return Recipe.model_validate({**raw, "category": RecipeCategory.ai_custom.value})
    except Exception as exc:
        logger.exception("Gemini suggest recipe error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to suggest recipe") from exc
