# -*- coding: utf-8 -*-
"""Gemini — generateContent calls over the REST API."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class GeminiError(RuntimeError):
    """The model call failed or returned no usable output."""


@dataclass(frozen=True)
class GeminiSettings:
    base_url: str
    model: str
    api_key: str
    timeout: float


def resolve_gemini_settings(api_key: str | None = None) -> GeminiSettings:
    key = (api_key or "").strip() or (settings.gemini_api_key or "").strip()
    if not key:
        raise GeminiError("GEMINI_API_KEY is not configured")
    return GeminiSettings(
        base_url=settings.gemini_base_url.rstrip("/"),
        model=settings.gemini_model,
        api_key=key,
        timeout=settings.gemini_timeout,
    )


def text_part(text: str) -> Dict[str, Any]:
    return {"text": text}


def image_part(mime_type: str, data_b64: str) -> Dict[str, Any]:
    return {"inlineData": {"mimeType": mime_type, "data": data_b64}}


def build_request_body(
    parts: List[Dict[str, Any]],
    *,
    response_schema: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
    if response_schema is not None:
        body["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": response_schema,
        }
    return body


def _error_message(data: object) -> str | None:
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        status = err.get("status") or err.get("code")
        message = err.get("message") or "unknown error"
        return f"{status}: {message}" if status else str(message)
    if isinstance(err, str) and err.strip():
        return err.strip()
    return None


def extract_text(data: object) -> str:
    """Concatenate the text parts of the first candidate."""
    if not isinstance(data, dict):
        raise GeminiError("Gemini returned a non-object payload")

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        feedback = data.get("promptFeedback")
        reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if reason:
            raise GeminiError(f"Prompt blocked: {reason}")
        raise GeminiError("Gemini returned no candidates")

    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content") if isinstance(first.get("content"), dict) else {}
    parts = content.get("parts") if isinstance(content.get("parts"), list) else []
    out: List[str] = []
    for part in parts:
        if not isinstance(part, dict) or part.get("thought"):
            continue
        text = part.get("text")
        if isinstance(text, str):
            out.append(text)
    text = "".join(out)
    if not text.strip():
        finish = first.get("finishReason")
        raise GeminiError(f"Gemini returned empty output (finishReason={finish})")
    return text


def parse_json_output(text: str) -> Any:
    """Parse structured output, tolerating a markdown code fence around it."""
    cleaned = text.strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned, flags=re.IGNORECASE)
    cleaned = re.sub(r"\s*```$", "", cleaned)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse model JSON: {exc}") from exc


def generate_content(
    parts: List[Dict[str, Any]],
    *,
    response_schema: Optional[Dict[str, Any]] = None,
    api_key: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Run one generateContent call and return the model text. No retries."""
    cfg = resolve_gemini_settings(api_key)
    url = f"{cfg.base_url}/models/{cfg.model}:generateContent"
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": cfg.api_key,
    }
    body = build_request_body(parts, response_schema=response_schema)

    with httpx.Client(timeout=cfg.timeout, transport=transport) as client:
        try:
            resp = client.post(url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc

    try:
        data = resp.json()
    except ValueError:
        data = None

    if resp.status_code >= 400:
        message = _error_message(data) or resp.text.replace("\n", " ").strip()[:200]
        raise GeminiError(f"Gemini API error ({resp.status_code}): {message}")
    if data is None:
        raise GeminiError("Gemini returned a non-JSON response")

    message = _error_message(data)
    if message:
        raise GeminiError(f"Gemini API error: {message}")

    text = extract_text(data)
    logger.debug("gemini %s returned %d chars", cfg.model, len(text))
    return text


def generate_json(
    parts: List[Dict[str, Any]],
    *,
    response_schema: Dict[str, Any],
    api_key: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Any:
    text = generate_content(parts, response_schema=response_schema, api_key=api_key, transport=transport)
    return parse_json_output(text)
