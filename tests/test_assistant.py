# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

PROFILE = {
    "condition": "Viêm loét dạ dày",
    "painLevel": 5,
    "triggerFoods": "",
    "dietaryGoal": "Giảm đau",
}

IMAGE_B64 = "aGVsbG8gd29ybGQgZnJvbSB0ZXN0cw=="


def symptom(pain: int, foods: str, day: int = 1) -> dict:
    return {
        "id": f"log-{day}",
        "painLevel": pain,
        "painLocation": "bụng trên",
        "eatenFoods": foods,
        "physicalActivity": "đi bộ 15 phút" if pain == 0 else "",
        "timestamp": f"2026-10-{day:02d}T12:00:00Z",
    }


class TestAssistantEndpoints(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="gastro-test-"))
        os.environ["GASTRO_DATA_ROOT"] = str(cls._tmp)
        os.environ["GASTRO_DB_PATH"] = str(cls._tmp / "db.json")
        os.environ["GEMINI_API_KEY"] = "test-key"

        for name in list(sys.modules.keys()):
            if name == "gastrohealth" or name.startswith("gastrohealth."):
                sys.modules.pop(name, None)

        from gastrohealth.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        os.environ.pop("GEMINI_API_KEY", None)
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def test_meal_plan_relays_model_output(self) -> None:
        plan = [
            {
                "day": "Ngày 1",
                "meals": [
                    {"name": "Cháo yến mạch", "time": "7:00 AM", "portion": "1 bát nhỏ", "note": "Dịu niêm mạc"},
                ],
            }
        ]
        with mock.patch("gastrohealth.assistant.api.generate_json", return_value=plan) as gen:
            resp = self.client.post(
                "/api/gemini/meal-plan",
                json={"profile": PROFILE, "symptoms": [symptom(6, "bún bò cay")]},
            )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), plan)

        parts = gen.call_args.args[0]
        self.assertEqual(len(parts), 1)
        prompt = parts[0]["text"]
        self.assertIn("Viêm loét dạ dày", prompt)
        self.assertIn("bún bò cay", prompt)
        self.assertIn("Không có", prompt)
        self.assertEqual(gen.call_args.kwargs["response_schema"]["type"], "ARRAY")
        self.assertIsNone(gen.call_args.kwargs["api_key"])

    def test_meal_plan_requires_profile(self) -> None:
        with mock.patch("gastrohealth.assistant.api.generate_json") as gen:
            resp = self.client.post("/api/gemini/meal-plan", json={"symptoms": []})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "User profile is required")
        gen.assert_not_called()

    def test_meal_plan_model_failure_is_500(self) -> None:
        from gastrohealth.gemini import GeminiError

        with mock.patch("gastrohealth.assistant.api.generate_json", side_effect=GeminiError("quota exceeded")):
            resp = self.client.post("/api/gemini/meal-plan", json={"profile": PROFILE})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "Failed to generate meal plan")

    def test_meal_plan_rejects_malformed_output(self) -> None:
        with mock.patch("gastrohealth.assistant.api.generate_json", return_value={"day": "Ngày 1"}):
            resp = self.client.post("/api/gemini/meal-plan", json={"profile": PROFILE})
        self.assertEqual(resp.status_code, 500)

    def test_check_food_by_name(self) -> None:
        verdict = {"safetyLevel": "Hạn chế", "reason": "Nhiều dầu mỡ", "scientificEvidence": "Chất béo làm chậm tiêu hóa."}
        with mock.patch("gastrohealth.assistant.api.generate_json", return_value=verdict) as gen:
            resp = self.client.post("/api/gemini/check-food", json={"profile": PROFILE, "foodName": "bánh xèo"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), verdict)
        parts = gen.call_args.args[0]
        self.assertEqual(len(parts), 1)
        self.assertIn('"bánh xèo"', parts[0]["text"])

    def test_check_food_with_image_puts_image_first(self) -> None:
        verdict = {"safetyLevel": "An toàn", "reason": "Món hấp, ít gia vị"}
        with mock.patch("gastrohealth.assistant.api.generate_json", return_value=verdict) as gen:
            resp = self.client.post(
                "/api/gemini/check-food",
                json={"profile": PROFILE, "foodImage": {"mimeType": "image/jpeg", "data": IMAGE_B64}},
            )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["safetyLevel"], "An toàn")
        self.assertIsNone(resp.json()["scientificEvidence"])

        parts = gen.call_args.args[0]
        self.assertEqual(parts[0], {"inlineData": {"mimeType": "image/jpeg", "data": IMAGE_B64}})
        self.assertIn("thực phẩm trong ảnh", parts[1]["text"])

    def test_check_food_validation(self) -> None:
        with mock.patch("gastrohealth.assistant.api.generate_json") as gen:
            resp = self.client.post("/api/gemini/check-food", json={"profile": PROFILE, "foodName": "  "})
            self.assertEqual(resp.status_code, 400)

            resp = self.client.post("/api/gemini/check-food", json={"foodName": "cà phê"})
            self.assertEqual(resp.status_code, 400)

            resp = self.client.post(
                "/api/gemini/check-food",
                json={"profile": PROFILE, "foodImage": {"mimeType": "image/gif", "data": IMAGE_B64}},
            )
            self.assertEqual(resp.status_code, 400)

            resp = self.client.post(
                "/api/gemini/check-food",
                json={"profile": PROFILE, "foodImage": {"mimeType": "image/png", "data": "not base64 at all!!"}},
            )
            self.assertEqual(resp.status_code, 400)
            self.assertTrue(resp.json()["detail"].startswith("Invalid base64 image"))
        gen.assert_not_called()

    def test_check_food_unknown_safety_level_is_500(self) -> None:
        with mock.patch("gastrohealth.assistant.api.generate_json", return_value={"safetyLevel": "Tốt", "reason": "?"}):
            resp = self.client.post("/api/gemini/check-food", json={"profile": PROFILE, "foodName": "trà gừng"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "Failed to check food safety")

    def test_analyze_triggers_needs_three_logs(self) -> None:
        from gastrohealth.assistant.prompts import INSUFFICIENT_DATA_MESSAGE

        with mock.patch("gastrohealth.assistant.api.generate_content") as gen:
            resp = self.client.post(
                "/api/gemini/analyze-triggers",
                json={"profile": PROFILE, "symptoms": [symptom(3, "cơm rang", 1), symptom(0, "cháo", 2)]},
            )
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json(), INSUFFICIENT_DATA_MESSAGE)

            resp = self.client.post("/api/gemini/analyze-triggers", json={"profile": PROFILE, "symptoms": []})
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json(), INSUFFICIENT_DATA_MESSAGE)
        gen.assert_not_called()

    def test_analyze_triggers_requires_profile_and_symptoms(self) -> None:
        resp = self.client.post("/api/gemini/analyze-triggers", json={"profile": PROFILE})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/gemini/analyze-triggers", json={"symptoms": []})
        self.assertEqual(resp.status_code, 400)

    def test_analyze_triggers_returns_markdown(self) -> None:
        logs = [symptom(7, "lẩu thái", 1), symptom(0, "cháo yến mạch", 2), symptom(4, "cà phê sữa", 3)]
        report = "**NÊN TRÁNH:** đồ chua cay"
        with mock.patch("gastrohealth.assistant.api.generate_content", return_value=report) as gen:
            resp = self.client.post(
                "/api/gemini/analyze-triggers",
                json={"profile": PROFILE, "symptoms": logs},
                headers={"X-Gemini-Api-Key": "user-key"},
            )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), report)
        prompt = gen.call_args.args[0][0]["text"]
        self.assertIn("Không đau", prompt)
        self.assertIn('Vận động: "đi bộ 15 phút"', prompt)
        self.assertIn("Đau mức 7/10 tại bụng trên", prompt)
        self.assertIn("01/10/2026", prompt)
        self.assertEqual(gen.call_args.kwargs["api_key"], "user-key")

    def test_suggest_recipe_forces_custom_category(self) -> None:
        recipe = {
            "title": "Canh bí đỏ thịt bằm",
            "description": "Mềm, dễ tiêu",
            "category": "Giảm đau",
            "cookTime": "30 phút",
            "ingredients": ["Bí đỏ", "Thịt nạc"],
            "instructions": "1. Nấu chín bí. 2. Thêm thịt.",
        }
        with mock.patch("gastrohealth.assistant.api.generate_json", return_value=recipe) as gen:
            resp = self.client.post(
                "/api/gemini/suggest-recipe",
                json={"profile": PROFILE, "request": "món canh cho bữa tối"},
            )

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["category"], "AI Tùy chỉnh")
        self.assertEqual(body["cookTime"], "30 phút")
        self.assertIn("món canh cho bữa tối", gen.call_args.args[0][0]["text"])

    def test_suggest_recipe_validation_and_failure(self) -> None:
        resp = self.client.post("/api/gemini/suggest-recipe", json={"profile": PROFILE, "request": ""})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Profile and request are required")

        with mock.patch("gastrohealth.assistant.api.generate_json", return_value={"title": "Thiếu trường"}):
            resp = self.client.post("/api/gemini/suggest-recipe", json={"profile": PROFILE, "request": "món hấp"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "Failed to suggest recipe")


if __name__ == "__main__":
    unittest.main()
