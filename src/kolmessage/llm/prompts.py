"""Prompt templates for LLM interactions.

Templates use Python string placeholders ({variable_name}).
"""

FAN_OFFER_POLISH_PROMPT = (
    "請將以下粉絲優惠活動內容，潤飾成更自然、更吸引人的語氣，直接回傳潤飾後的文字即可，"
    "不要包含任何前言或結語。原文：「{offer_text}」"
)

# Returned when the LLM call cannot produce text
FAN_OFFER_FALLBACK = "為您的粉絲提供特別優惠：{offer_text}"
