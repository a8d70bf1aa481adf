from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from mood_relay.analysis.schemas import ProviderReply, parse_reply


class ProviderError(Exception):
    """Base error for provider failures; the message is shown to API callers."""


class ProviderNotConfiguredError(ProviderError):
    """Raised when the provider has no API key. No request is sent."""


class ProviderTransportError(ProviderError):
    """Raised when the request never produced an HTTP response (connect error, timeout)."""


class ProviderUpstreamError(ProviderError):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProviderResponseFormatError(ProviderError):
    """Raised when a success response lacks the generated-text field."""


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str | None
    base_url: str
    model: str
    timeout_seconds: float


class BaseProvider:
    """
    One outbound analysis call per `analyze()`: prompt -> POST -> extract text -> parse.

    Subclasses supply the vendor specifics (URL, headers, payload, reply path).
    Stateless: a fresh `httpx.AsyncClient` is opened per call. No retries.
    """

    #: Key in the aggregated response (e.g. "Gemini").
    display_name: str = ""
    #: Vendor name used in error messages.
    vendor_name: str = ""
    #: Environment variable holding the key, for the not-configured hint.
    api_key_env: str = ""

    def __init__(
        self,
        *,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        # Tests pass an httpx.MockTransport here.
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key)

    def build_prompt(self, *, text: str, tone: str) -> str:
        raise NotImplementedError

    def build_url(self) -> str:
        raise NotImplementedError

    def build_headers(self) -> dict[str, str]:
        raise NotImplementedError

    def build_payload(self, *, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: Any) -> str | None:
        """Return the generated text from a decoded reply, or None if absent."""
        raise NotImplementedError

    async def analyze(self, *, text: str, tone: str) -> ProviderReply:
        if not self.is_configured:
            raise ProviderNotConfiguredError(
                f"{self.vendor_name} API key not configured (set {self.api_key_env})"
            )

        prompt = self.build_prompt(text=text, tone=tone)
        payload = self.build_payload(prompt=prompt)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(self.build_url(), headers=self.build_headers(), json=payload)
        except httpx.TimeoutException as exc:
            raise ProviderTransportError(f"{self.vendor_name} request timed out") from exc
        except httpx.HTTPError as exc:
            raise ProviderTransportError(f"{self.vendor_name} request failed: {exc}") from exc

        if not resp.is_success:
            raise ProviderUpstreamError(
                f"{self.vendor_name} API error: {resp.status_code} - {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderResponseFormatError(
                f"Unexpected response format from {self.vendor_name}"
            ) from exc

        generated = self.extract_text(data)
        if generated is None:
            raise ProviderResponseFormatError(f"Unexpected response format from {self.vendor_name}")

        return parse_reply(generated)


def first_item(value: Any) -> Any:
    """Return value[0] for a non-empty list, else None."""
    if isinstance(value, list) and value:
        return value[0]
    return None
