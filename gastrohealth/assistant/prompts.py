# -*- coding: utf-8 -*-
"""Assistant — prompt templates and structured-output schemas.

Prompts are written in Vietnamese, the language of the app's users. Schemas use
the OpenAPI subset accepted by Gemini's ``responseSchema``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from ..users.models import SymptomLog, UserProfile
from .models import FoodSafety

MIN_SYMPTOMS_FOR_ANALYSIS = 3

INSUFFICIENT_DATA_MESSAGE = (
    "Chưa đủ dữ liệu để phân tích. Hãy ghi lại thêm các triệu chứng của bạn, "
    "bao gồm cả những ngày bạn cảm thấy khỏe (mức đau = 0)."
)

MEAL_PLAN_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "day": {"type": "STRING", "description": "Ngày trong tuần (ví dụ: Ngày 1, Thứ Hai)"},
            "meals": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "name": {"type": "STRING", "description": "Tên món ăn"},
                        "time": {"type": "STRING", "description": "Thời gian ăn gợi ý (ví dụ: 7:00 AM)"},
                        "portion": {"type": "STRING", "description": "Khẩu phần gợi ý (ví dụ: 1 bát nhỏ)"},
                        "note": {"type": "STRING", "description": "Ghi chú ngắn gọn về lợi ích của món ăn"},
                    },
                    "required": ["name", "time", "portion", "note"],
                },
            },
        },
        "required": ["day", "meals"],
    },
}

FOOD_CHECK_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "safetyLevel": {"type": "STRING", "enum": [level.value for level in FoodSafety]},
        "reason": {"type": "STRING", "description": "Lý do giải thích cho đánh giá"},
        "scientificEvidence": {"type": "STRING", "description": "Dẫn chứng khoa học và nguồn trích dẫn nếu có"},
    },
    "required": ["safetyLevel", "reason"],
}

RECIPE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "cookTime": {"type": "STRING"},
        "ingredients": {"type": "ARRAY", "items": {"type": "STRING"}},
        "instructions": {"type": "STRING"},
    },
    "required": ["title", "description", "cookTime", "ingredients", "instructions"],
}


def _parse_iso(iso8601: str) -> datetime | None:
    if not iso8601:
        return None
    try:
        return datetime.fromisoformat(iso8601.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_datetime(iso8601: str) -> str:
    parsed = _parse_iso(iso8601)
    return parsed.strftime("%H:%M %d/%m/%Y") if parsed else iso8601


def format_date(iso8601: str) -> str:
    parsed = _parse_iso(iso8601)
    return parsed.strftime("%d/%m/%Y") if parsed else iso8601


def _trigger_foods(profile: UserProfile) -> str:
    return profile.trigger_foods.strip() or "Không có"


def symptom_history(symptoms: List[SymptomLog]) -> str:
    return "\n".join(
        f"- Vào {format_datetime(s.timestamp)}, đã ăn '{s.eaten_foods}' "
        f"và bị đau mức {s.pain_level}/10 tại {s.pain_location}."
        for s in symptoms
    )


def build_meal_plan_prompt(profile: UserProfile, symptoms: List[SymptomLog]) -> str:
    history = symptom_history(symptoms) or "Chưa có lịch sử triệu chứng."
    return f"""Dựa vào thông tin sức khỏe của người dùng sau đây, hãy tạo một kế hoạch thực đơn chi tiết cho 7 ngày tới.

HỒ SƠ NGƯỜI DÙNG:
- Tình trạng bệnh lý: {profile.condition.value}
- Mức độ đau hiện tại: {profile.pain_level}/10
- Các thực phẩm đã biết gây kích ứng: {_trigger_foods(profile)}
- Mục tiêu ăn kiêng: {profile.dietary_goal.value}

LỊCH SỬ TRIỆU CHỨNG GẦN ĐÂY:
{history}

YÊU CẦU:
- Tạo thực đơn cho 7 ngày, mỗi ngày 3 bữa chính (sáng, trưa, tối) và 2 bữa phụ.
- Các món ăn phải dễ tiêu hóa, phù hợp với tình trạng bệnh lý và mục tiêu của người dùng.
- Tránh hoàn toàn các thực phẩm đã biết gây kích ứng.
- Ghi rõ tên món ăn, thời gian ăn gợi ý, và khẩu phần ăn hợp lý.
- Với mỗi món ăn, thêm một "ghi chú" ngắn gọn giải thích tại sao nó tốt cho tình trạng của người dùng (ví dụ: "Giàu chất xơ hòa tan, giúp làm dịu niêm mạc dạ dày").
- Đảm bảo thực đơn đa dạng và đủ dinh dưỡng.
"""


def build_food_check_prompt(profile: UserProfile, food_name: str | None) -> str:
    food = (food_name or "").strip() or "thực phẩm trong ảnh"
    return f"""Phân tích thực phẩm này cho người dùng có thông tin sức khỏe sau:
- Tình trạng bệnh lý: {profile.condition.value}
- Các thực phẩm đã biết gây kích ứng: {_trigger_foods(profile)}

Thực phẩm cần kiểm tra: "{food}"

YÊU CẦU:
1. Đánh giá mức độ an toàn của thực phẩm này theo 3 cấp độ: "An toàn", "Hạn chế", "Tránh".
2. Giải thích ngắn gọn lý do cho đánh giá của bạn.
3. Cung cấp một "Dẫn chứng khoa học" ngắn gọn cho nhận định trên, nếu có thể, hãy trích dẫn nguồn (ví dụ: tên nghiên cứu, bài báo y khoa). Nếu không có dẫn chứng cụ thể, hãy giải thích dựa trên nguyên tắc dinh dưỡng chung.
"""


def health_log(symptoms: List[SymptomLog]) -> str:
    lines = []
    for s in symptoms:
        activity = f'Vận động: "{s.physical_activity}"' if s.physical_activity.strip() else "Không vận động"
        pain = f"Đau mức {s.pain_level}/10 tại {s.pain_location}" if s.pain_level > 0 else "Không đau"
        lines.append(f'- Ngày {format_date(s.timestamp)}: Ăn "{s.eaten_foods}". {activity}. Kết quả: {pain}.')
    return "\n".join(lines)


def build_trigger_prompt(profile: UserProfile, symptoms: List[SymptomLog]) -> str:
    return f"""Dựa trên hồ sơ người dùng và nhật ký sức khỏe sau đây, hãy thực hiện một phân tích so sánh chi tiết để xác định các yếu tố ảnh hưởng đến tình trạng của họ.

HỒ SƠ NGƯỜI DÙNG:
- Tình trạng bệnh lý: {profile.condition.value}
- Các thực phẩm đã biết gây kích ứng: {_trigger_foods(profile)}

NHẬT KÝ SỨC KHỎE:
{health_log(symptoms)}

YÊU CẦU PHÂN TÍCH:
1. **Phân tích Tác nhân Gây đau (Thủ phạm):**
   * Xác định các loại thực phẩm, đồ uống, hoặc hoạt động thể chất thường xuất hiện TRƯỚC khi người dùng ghi nhận có cơn đau (mức đau > 0).
   * Đưa ra giả thuyết về các "thủ phạm" tiềm tàng. Ví dụ: "Ăn đồ cay và không vận động sau đó có vẻ liên quan đến các cơn đau ở vùng thượng vị."

2. **Phân tích Yếu tố Tích cực (Những gì hiệu quả):**
   * Xác định các loại thực phẩm, đồ uống, hoặc hoạt động thể chất thường xuất hiện khi người dùng ghi nhận KHÔNG đau (mức đau = 0).
   * Tìm ra các "yếu tố bảo vệ" hoặc thói quen tốt. Ví dụ: "Những ngày bạn ăn cháo yến mạch cho bữa sáng và đi bộ nhẹ nhàng, bạn thường không bị đau."

3. **So sánh và Đề xuất:**
   * So sánh hai nhóm phân tích trên để rút ra kết luận.
   * Đưa ra các đề xuất cụ thể, có tính hành động. Phân thành 3 mục:
     * **NÊN TRÁNH:** Liệt kê những thứ cần hạn chế hoặc tránh.
     * **NÊN DUY TRÌ:** Liệt kê những thói quen tốt cần tiếp tục.
     * **NÊN THỬ BỔ SUNG:** Gợi ý những thay đổi hoặc bổ sung mới dựa trên phân tích. Ví dụ: "Hãy thử thay thế cà phê buổi sáng bằng trà gừng, và thêm 15 phút đi bộ sau bữa trưa."

Trình bày kết quả dưới dạng một báo cáo rõ ràng, dễ hiểu, sử dụng markdown với các tiêu đề in đậm.
"""


def build_recipe_prompt(profile: UserProfile, request: str) -> str:
    return f"""Với vai trò là một chuyên gia dinh dưỡng cho người bị bệnh về dạ dày, hãy tạo một công thức nấu ăn mới dựa trên yêu cầu của người dùng và hồ sơ sức khỏe của họ.

HỒ SƠ NGƯỜI DÙNG:
- Tình trạng bệnh lý: {profile.condition.value}
- Các thực phẩm đã biết gây kích ứng: {_trigger_foods(profile)}
- Mục tiêu ăn kiêng: {profile.dietary_goal.value}

YÊU CẦU CỦA NGƯỜI DÙNG:
"{request.strip()}"

YÊU CẦU VỀ CÔNG THỨC:
- Công thức phải tuyệt đối an toàn, dễ tiêu hóa, phù hợp với hồ sơ người dùng.
- Tránh tất cả các thực phẩm gây kích ứng đã biết.
- Cung cấp tên món ăn (title), mô tả ngắn (description), thời gian nấu (cookTime), danh sách nguyên liệu (ingredients) và hướng dẫn chi tiết (instructions).
"""
