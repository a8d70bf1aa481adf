from __future__ import annotations

from typing import Any

import httpx

from mood_relay.analysis.prompt import build_deepseek_prompt
from mood_relay.core.llm.base import BaseProvider, ProviderConfig, first_item


class DeepseakProvider(BaseProvider):
    """
    DeepSeek chat completions (OpenAI-compatible).

    Exposed to API callers as `deepseak` / "Deepseak"; errors name the vendor correctly.
    """

    display_name = "Deepseak"
    vendor_name = "DeepSeek"
    api_key_env = "DEEPSEAK_API_KEY"

    def __init__(
        self,
        *,
        config: ProviderConfig,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config=config, transport=transport)
        self._max_tokens = max_tokens
        self._temperature = temperature

    def build_prompt(self, *, text: str, tone: str) -> str:
        return build_deepseek_prompt(text=text, tone=tone)

    def build_url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/chat/completions"

    def build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, *, prompt: str) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    def extract_text(self, data: Any) -> str | None:
        # choices[0].message.content
        if not isinstance(data, dict):
            return None
        choice = first_item(data.get("choices"))
        if not isinstance(choice, dict) or not isinstance(choice.get("message"), dict):
            return None
        content = choice["message"].get("content")
        return content if isinstance(content, str) else None
