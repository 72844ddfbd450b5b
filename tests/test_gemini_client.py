# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from unittest import mock

import httpx

from gastrohealth.gemini import client as gemini_client
from gastrohealth.gemini.client import (
    GeminiError,
    extract_text,
    generate_content,
    generate_json,
    image_part,
    parse_json_output,
    text_part,
)


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}]}


class TestGenerateContent(unittest.TestCase):
    def test_posts_generate_content_request(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_candidate('{"safetyLevel": "An toàn", "reason": "ok"}'))

        schema = {"type": "OBJECT", "properties": {"reason": {"type": "STRING"}}}
        parts = [image_part("image/png", "aW1hZ2U="), text_part("Phân tích")]
        with mock.patch.object(gemini_client.settings, "gemini_model", "gemini-2.5-flash"):
            out = generate_json(parts, response_schema=schema, api_key="k-123", transport=httpx.MockTransport(handler))

        self.assertEqual(out, {"safetyLevel": "An toàn", "reason": "ok"})
        self.assertTrue(seen["url"].endswith("/models/gemini-2.5-flash:generateContent"))
        self.assertEqual(seen["key"], "k-123")
        self.assertEqual(seen["body"]["contents"][0]["parts"], parts)
        self.assertEqual(seen["body"]["generationConfig"]["responseMimeType"], "application/json")
        self.assertEqual(seen["body"]["generationConfig"]["responseSchema"], schema)

    def test_plain_text_call_has_no_generation_config(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_candidate("**Báo cáo**"))

        out = generate_content([text_part("hi")], api_key="k", transport=httpx.MockTransport(handler))
        self.assertEqual(out, "**Báo cáo**")
        self.assertNotIn("generationConfig", seen["body"])

    def test_api_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}},
            )

        with self.assertRaises(GeminiError) as ctx:
            generate_content([text_part("hi")], api_key="bad", transport=httpx.MockTransport(handler))
        self.assertIn("400", str(ctx.exception))
        self.assertIn("API key not valid", str(ctx.exception))

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(GeminiError):
            generate_content([text_part("hi")], api_key="k", transport=httpx.MockTransport(handler))

    def test_missing_api_key_raises(self) -> None:
        with mock.patch.object(gemini_client.settings, "gemini_api_key", None):
            with self.assertRaises(GeminiError):
                generate_content([text_part("hi")])

    def test_request_key_overrides_configured_key(self) -> None:
        with mock.patch.object(gemini_client.settings, "gemini_api_key", "server-key"):
            self.assertEqual(gemini_client.resolve_gemini_settings().api_key, "server-key")
            self.assertEqual(gemini_client.resolve_gemini_settings("user-key").api_key, "user-key")
            self.assertEqual(gemini_client.resolve_gemini_settings("  ").api_key, "server-key")


class TestResponseParsing(unittest.TestCase):
    def test_blocked_prompt(self) -> None:
        with self.assertRaises(GeminiError) as ctx:
            extract_text({"promptFeedback": {"blockReason": "SAFETY"}})
        self.assertIn("SAFETY", str(ctx.exception))

    def test_skips_thought_parts(self) -> None:
        data = {
            "candidates": [
                {"content": {"parts": [{"text": "suy nghĩ", "thought": True}, {"text": "Kết quả"}]}},
            ]
        }
        self.assertEqual(extract_text(data), "Kết quả")

    def test_empty_output(self) -> None:
        data = {"candidates": [{"content": {"parts": []}, "finishReason": "MAX_TOKENS"}]}
        with self.assertRaises(GeminiError) as ctx:
            extract_text(data)
        self.assertIn("MAX_TOKENS", str(ctx.exception))

    def test_parse_fenced_json(self) -> None:
        self.assertEqual(parse_json_output('```json\n[{"day": "Ngày 1"}]\n```'), [{"day": "Ngày 1"}])
        self.assertEqual(parse_json_output(' {"a": 1} '), {"a": 1})
        with self.assertRaises(ValueError):
            parse_json_output("không phải JSON")


if __name__ == "__main__":
    unittest.main()
