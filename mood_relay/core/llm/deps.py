from __future__ import annotations

from fastapi import Request

from mood_relay.core.llm.base import BaseProvider, ProviderConfig
from mood_relay.core.llm.deepseek_client import DeepseakProvider
from mood_relay.core.llm.gemini_client import GeminiProvider
from mood_relay.core.settings import Settings


def build_providers(settings: Settings) -> dict[str, BaseProvider]:
    """
    Build every provider adapter from settings, keyed by request flag.

    Called once at startup. Unconfigured providers are still built; they fail per
    request with a "not configured" error. Dict order is the call-issue order.
    """

    timeout = float(settings.provider_timeout_seconds)
    return {
        "gemini": GeminiProvider(
            config=ProviderConfig(
                api_key=settings.gemini_api_key,
                base_url=settings.gemini_base_url,
                model=settings.gemini_model,
                timeout_seconds=timeout,
            )
        ),
        "deepseak": DeepseakProvider(
            config=ProviderConfig(
                api_key=settings.deepseak_api_key,
                base_url=settings.deepseak_base_url,
                model=settings.deepseak_model,
                timeout_seconds=timeout,
            ),
            max_tokens=settings.deepseak_max_tokens,
            temperature=settings.deepseak_temperature,
        ),
    }


def get_providers(request: Request) -> dict[str, BaseProvider]:
    """Dependency provider for the adapters built in the app lifespan."""

    return request.app.state.providers
