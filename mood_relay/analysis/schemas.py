from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class ProviderSelection(BaseModel):
    """Which providers to call. Unknown flags are ignored."""

    model_config = ConfigDict(extra="ignore")

    gemini: bool = Field(default=False, description="Call Google Gemini.")
    # Spelled `deepseak` on the wire; existing clients send this key.
    deepseak: bool = Field(default=False, description="Call DeepSeek.")


class AnalysisRequest(BaseModel):
    """Body of `POST /api/analyze`.

    `text` is optional here so that its absence is reported as a 400
    `Missing text` by the route instead of a schema validation error.
    """

    model_config = ConfigDict(extra="ignore")

    text: str | None = Field(
        default=None,
        description="Free text to analyse.",
        examples=["I lost my job today"],
    )
    providers: ProviderSelection | None = Field(default=None)
    tone: str | None = Field(
        default=None,
        description="Tone injected verbatim into the prompt. Defaults to `empathetic`.",
        examples=["supportive"],
    )


@dataclass(frozen=True)
class StructuredResult:
    """Vendor text that parsed as JSON; returned to the caller unchanged.

    Expected to look like {mood, emotions, suggestedResponse, writingStyle},
    but the shape is whatever the vendor produced.
    """

    data: Any

    outcome = "structured"

    def to_payload(self) -> Any:
        return self.data


@dataclass(frozen=True)
class RawResult:
    """Vendor text that was not valid JSON."""

    raw_response: str

    outcome = "raw"

    def to_payload(self) -> dict[str, str]:
        return {"rawResponse": self.raw_response}


@dataclass(frozen=True)
class ErrorResult:
    """A provider call that failed; the message is surfaced to the caller."""

    error: str

    outcome = "error"

    def to_payload(self) -> dict[str, str]:
        return {"error": self.error}


ProviderReply = Union[StructuredResult, RawResult]
AnalysisResult = Union[StructuredResult, RawResult, ErrorResult]

# Provider display name -> serialized AnalysisResult.
AggregatedResponse = dict[str, Any]


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; json.loads would accept them.
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_reply(text: str) -> ProviderReply:
    """Single best-effort JSON parse of a vendor's generated text.

    No shape checks and no cleanup: valid JSON is structured, anything else is raw.
    """

    try:
        return StructuredResult(data=json.loads(text, parse_constant=_reject_constant))
    except ValueError:
        return RawResult(raw_response=text)
