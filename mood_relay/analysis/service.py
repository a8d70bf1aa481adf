from __future__ import annotations

import asyncio
import logging
import time
from typing import Mapping, Protocol

from mood_relay.analysis.schemas import (
    AggregatedResponse,
    AnalysisResult,
    ErrorResult,
    ProviderReply,
    ProviderSelection,
)
from mood_relay.core.llm.base import ProviderError
from mood_relay.core.metrics import observe_provider_call

logger = logging.getLogger("mood_relay.analysis")


class AnalysisProvider(Protocol):
    display_name: str

    async def analyze(self, *, text: str, tone: str) -> ProviderReply: ...


class AnalysisService:
    """Fan a request out to the selected providers and merge their results."""

    def __init__(
        self,
        *,
        providers: Mapping[str, AnalysisProvider],
        request_id: str | None = None,
    ):
        # Keyed by request flag ("gemini", "deepseak"); iteration order is issue order.
        self._providers = providers
        self._request_id = request_id

    def select(self, selection: ProviderSelection | None) -> list[AnalysisProvider]:
        if selection is None:
            return []
        flags = selection.model_dump()
        return [p for flag, p in self._providers.items() if flags.get(flag)]

    async def analyze(
        self,
        *,
        text: str,
        tone: str,
        selection: ProviderSelection | None,
    ) -> AggregatedResponse:
        selected = self.select(selection)
        # Independent tasks; gather keeps issue order regardless of completion order.
        results = await asyncio.gather(
            *(self._run_provider(provider, text=text, tone=tone) for provider in selected)
        )
        return {
            provider.display_name: result.to_payload()
            for provider, result in zip(selected, results)
        }

    async def _run_provider(
        self, provider: AnalysisProvider, *, text: str, tone: str
    ) -> AnalysisResult:
        started = time.perf_counter()
        result: AnalysisResult
        try:
            result = await provider.analyze(text=text, tone=tone)
        except ProviderError as exc:
            result = ErrorResult(error=str(exc))
            logger.warning(
                "Provider call failed",
                extra={
                    "request_id": self._request_id,
                    "provider": provider.display_name,
                    "error": type(exc).__name__,
                },
            )
        except Exception as exc:  # noqa: BLE001 - one provider must never sink the others
            result = ErrorResult(error=str(exc) or type(exc).__name__)
            logger.exception(
                "Provider call raised unexpectedly",
                extra={"request_id": self._request_id, "provider": provider.display_name},
            )

        duration = time.perf_counter() - started
        observe_provider_call(
            provider=provider.display_name, outcome=result.outcome, duration_seconds=duration
        )
        logger.info(
            "Provider call completed",
            extra={
                "request_id": self._request_id,
                "provider": provider.display_name,
                "outcome": result.outcome,
                "duration_ms": round(duration * 1000.0, 2),
            },
        )
        return result
