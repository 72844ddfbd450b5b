# -*- coding: utf-8 -*-
"""Recipes — built-in library of easy-to-digest recipes."""

from __future__ import annotations

from typing import List, Optional

from .models import Recipe, RecipeCategory

_SEED_RECIPES = [
    {
        "title": "Súp Gà Hầm Gừng Cà Rốt",
        "description": "Một món súp nhẹ nhàng, dễ tiêu hóa, giúp làm ấm bụng và cung cấp dinh dưỡng.",
        "category": "Giảm đau",
        "cookTime": "45 phút",
        "ingredients": ["Ức gà", "Cà rốt", "Gừng", "Hành lá", "Muối, tiêu"],
        "instructions": (
            "1. Rửa sạch ức gà, luộc sơ và xé nhỏ. 2. Cà rốt, gừng gọt vỏ, thái nhỏ. "
            "3. Cho gà, cà rốt, gừng vào nồi hầm với nước dùng trong 30 phút. "
            "4. Nêm gia vị vừa ăn, thêm hành lá và dùng nóng."
        ),
    },
    {
        "title": "Cháo Yến Mạch Chuối",
        "description": "Bữa sáng giàu chất xơ hòa tan, giúp bao bọc niêm mạc dạ dày và giảm acid.",
        "category": "Chống ợ nóng",
        "cookTime": "10 phút",
        "ingredients": ["Yến mạch cán dẹt", "Chuối chín", "Sữa hạnh nhân (hoặc nước)", "Hạt chia"],
        "instructions": (
            "1. Cho yến mạch và sữa/nước vào nồi, đun sôi nhỏ lửa 5 phút. "
            "2. Trong khi đó, nghiền nát chuối. "
            "3. Cho chuối và hạt chia vào cháo, khuấy đều và nấu thêm 2 phút. Dùng ấm."
        ),
    },
    {
        "title": "Cá Hồi Áp Chảo Măng Tây",
        "description": "Cung cấp Omega-3 tốt cho việc phục hồi và măng tây chứa nhiều vitamin.",
        "category": "Phục hồi",
        "cookTime": "20 phút",
        "ingredients": ["Phi lê cá hồi", "Măng tây", "Dầu ô liu", "Chanh", "Muối, thì là"],
        "instructions": (
            "1. Rửa sạch cá và măng tây. 2. Ướp cá với muối, thì là và một ít nước cốt chanh. "
            "3. Áp chảo cá hồi với dầu ô liu cho đến khi chín vàng hai mặt. "
            "4. Xào nhanh măng tây trên cùng chảo. Dùng kèm cơm gạo lứt."
        ),
    },
    {
        "title": "Khoai Lang Nướng Mật Ong",
        "description": "Món ăn nhẹ nhàng, cung cấp carb phức hợp và tốt cho hệ tiêu hóa.",
        "category": "Giảm đau",
        "cookTime": "40 phút",
        "ingredients": ["Khoai lang", "Mật ong", "Dầu ô liu", "Bột quế"],
        "instructions": (
            "1. Rửa sạch khoai, cắt thành từng miếng vừa ăn. "
            "2. Trộn đều khoai với dầu ô liu, mật ong và bột quế. "
            "3. Nướng ở 200°C trong 25-30 phút cho đến khi khoai mềm và có màu vàng đẹp."
        ),
    },
    {
        "title": "Sinh Tố Đu Đủ Gừng",
        "description": "Đu đủ chứa enzyme papain hỗ trợ tiêu hóa, gừng giúp giảm buồn nôn.",
        "category": "Chống ợ nóng",
        "cookTime": "5 phút",
        "ingredients": ["Đu đủ chín", "Một lát gừng nhỏ", "Sữa chua không đường", "Nước lọc"],
        "instructions": (
            "1. Gọt vỏ, bỏ hạt đu đủ và cắt nhỏ. 2. Cho tất cả nguyên liệu vào máy xay sinh tố. "
            "3. Xay nhuyễn mịn và dùng ngay."
        ),
    },
]

RECIPES: List[Recipe] = [Recipe.model_validate(r) for r in _SEED_RECIPES]


def list_recipes(category: Optional[RecipeCategory] = None) -> List[Recipe]:
    if category is None:
        return list(RECIPES)
    return [r for r in RECIPES if r.category == category]
