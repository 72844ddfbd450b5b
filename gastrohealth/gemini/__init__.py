# -*- coding: utf-8 -*-
"""Gemini generative-language API client."""

from .client import GeminiError, generate_content, generate_json, image_part, text_part

__all__ = [
    "GeminiError",
    "generate_content",
    "generate_json",
    "image_part",
    "text_part",
]
