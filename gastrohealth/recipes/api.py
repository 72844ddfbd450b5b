# -*- coding: utf-8 -*-
"""Recipes — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from .library import list_recipes
from .models import Recipe, RecipeCategory

router = APIRouter(prefix="/api/recipes", tags=["Recipes"])


@router.get("", response_model=List[Recipe], summary="List built-in recipes")
def recipes(category: Optional[RecipeCategory] = Query(default=None, description="Filter by category")):
    return list_recipes(category)
