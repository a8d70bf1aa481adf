from __future__ import annotations

from typing import Any

from mood_relay.analysis.prompt import build_gemini_prompt
from mood_relay.core.llm.base import BaseProvider, first_item


class GeminiProvider(BaseProvider):
    """Google Gemini `models/{model}:generateContent`."""

    display_name = "Gemini"
    vendor_name = "Gemini"
    api_key_env = "GEMINI_API_KEY"

    def build_prompt(self, *, text: str, tone: str) -> str:
        return build_gemini_prompt(text=text, tone=tone)

    def build_url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/models/{self._config.model}:generateContent"

    def build_headers(self) -> dict[str, str]:
        # Header instead of the `?key=` query param keeps the key out of URLs and logs.
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": str(self._config.api_key),
        }

    def build_payload(self, *, prompt: str) -> dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def extract_text(self, data: Any) -> str | None:
        # candidates[0].content.parts[0].text
        if not isinstance(data, dict):
            return None
        candidate = first_item(data.get("candidates"))
        if not isinstance(candidate, dict) or not isinstance(candidate.get("content"), dict):
            return None
        part = first_item(candidate["content"].get("parts"))
        if not isinstance(part, dict):
            return None
        text = part.get("text")
        return text if isinstance(text, str) else None
