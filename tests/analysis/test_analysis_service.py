from __future__ import annotations

import asyncio
import logging

import pytest

from mood_relay.analysis.schemas import (
    ProviderSelection,
    RawResult,
    StructuredResult,
    parse_reply,
)
from mood_relay.analysis.service import AnalysisService
from mood_relay.core.llm.base import ProviderNotConfiguredError


class _FakeProvider:
    def __init__(self, display_name: str, reply=None, error: Exception | None = None, delay: float = 0.0):
        self.display_name = display_name
        self._reply = reply
        self._error = error
        self._delay = delay
        self.calls: list[tuple[str, str]] = []

    async def analyze(self, *, text: str, tone: str):
        self.calls.append((text, tone))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._reply


def _service(**providers: _FakeProvider) -> AnalysisService:
    return AnalysisService(providers=providers)


def test_parse_reply_returns_json_value_unchanged() -> None:
    text = '{"mood":"calm","emotions":["relief"],"suggestedResponse":"Good.","writingStyle":"plain","extra":1}'
    result = parse_reply(text)
    assert result == StructuredResult(
        data={
            "mood": "calm",
            "emotions": ["relief"],
            "suggestedResponse": "Good.",
            "writingStyle": "plain",
            "extra": 1,
        }
    )


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not json",
        "NaN",
        "-Infinity",
        '{"mood": Infinity}',
        '```json\n{"mood": "x"}\n```',
        '{"mood": ',
    ],
)
def test_parse_reply_falls_back_to_raw(text: str) -> None:
    assert parse_reply(text) == RawResult(raw_response=text)


def test_only_selected_providers_are_called() -> None:
    gemini = _FakeProvider("Gemini", reply=StructuredResult(data={"mood": "ok"}))
    deepseak = _FakeProvider("Deepseak", reply=StructuredResult(data={"mood": "ok"}))

    out = asyncio.run(
        _service(gemini=gemini, deepseak=deepseak).analyze(
            text="hi", tone="warm", selection=ProviderSelection(gemini=True)
        )
    )

    assert out == {"Gemini": {"mood": "ok"}}
    assert gemini.calls == [("hi", "warm")]
    assert deepseak.calls == []


def test_no_selection_returns_empty_mapping() -> None:
    gemini = _FakeProvider("Gemini", reply=StructuredResult(data={}))

    assert asyncio.run(_service(gemini=gemini).analyze(text="hi", tone="t", selection=None)) == {}
    assert gemini.calls == []


def test_provider_failure_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="mood_relay.analysis")
    gemini = _FakeProvider(
        "Gemini", error=ProviderNotConfiguredError("Gemini API key not configured")
    )
    deepseak = _FakeProvider("Deepseak", reply=RawResult(raw_response="plain words"))

    out = asyncio.run(
        _service(gemini=gemini, deepseak=deepseak).analyze(
            text="hi", tone="t", selection=ProviderSelection(gemini=True, deepseak=True)
        )
    )

    assert out == {
        "Gemini": {"error": "Gemini API key not configured"},
        "Deepseak": {"rawResponse": "plain words"},
    }
    outcomes = {
        r.__dict__["provider"]: r.__dict__["outcome"]
        for r in caplog.records
        if r.getMessage() == "Provider call completed"
    }
    assert outcomes == {"Gemini": "error", "Deepseak": "raw"}


def test_unexpected_exception_becomes_error_entry() -> None:
    gemini = _FakeProvider("Gemini", error=RuntimeError("socket exploded"))
    deepseak = _FakeProvider("Deepseak", reply=StructuredResult(data=["a", "b"]))

    out = asyncio.run(
        _service(gemini=gemini, deepseak=deepseak).analyze(
            text="hi", tone="t", selection=ProviderSelection(gemini=True, deepseak=True)
        )
    )

    assert out == {"Gemini": {"error": "socket exploded"}, "Deepseak": ["a", "b"]}


def test_result_order_follows_issue_order_not_completion_order() -> None:
    slow_gemini = _FakeProvider("Gemini", reply=StructuredResult(data={"n": 1}), delay=0.05)
    fast_deepseak = _FakeProvider("Deepseak", reply=StructuredResult(data={"n": 2}))

    out = asyncio.run(
        _service(gemini=slow_gemini, deepseak=fast_deepseak).analyze(
            text="hi", tone="t", selection=ProviderSelection(gemini=True, deepseak=True)
        )
    )

    assert list(out) == ["Gemini", "Deepseak"]


def test_providers_run_concurrently() -> None:
    gemini = _FakeProvider("Gemini", reply=StructuredResult(data={}), delay=0.2)
    deepseak = _FakeProvider("Deepseak", reply=StructuredResult(data={}), delay=0.2)

    async def run() -> float:
        loop = asyncio.get_running_loop()
        started = loop.time()
        await _service(gemini=gemini, deepseak=deepseak).analyze(
            text="hi", tone="t", selection=ProviderSelection(gemini=True, deepseak=True)
        )
        return loop.time() - started

    assert asyncio.run(run()) < 0.35
