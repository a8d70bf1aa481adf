from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from mood_relay.analysis.schemas import AggregatedResponse, AnalysisRequest
from mood_relay.analysis.service import AnalysisService
from mood_relay.core.llm.base import BaseProvider
from mood_relay.core.llm.deps import get_providers
from mood_relay.core.middleware.http_logging import get_request_id
from mood_relay.core.settings import get_settings
from mood_relay.domain.exceptions import MalformedRequestError, MissingTextError

router = APIRouter(prefix="/api", tags=["analysis"])

_EXAMPLE_RESPONSE = {
    "Gemini": {
        "mood": "distressed",
        "emotions": ["sadness", "anxiety", "fear"],
        "suggestedResponse": "I'm sorry to hear that.",
        "writingStyle": "concise, emotional",
    },
    "Deepseak": {"error": "DeepSeek API key not configured (set DEEPSEAK_API_KEY)"},
}


async def _read_analysis_request(request: Request) -> AnalysisRequest:
    """
    Parse the JSON body by hand.

    A declared body model would turn bad input into 422s; here a missing text is a 400
    and anything unusable is a 500, which is what existing clients expect.
    """

    raw = await request.body()
    try:
        payload: Any = json.loads(raw) if raw else {}
    except ValueError as exc:
        raise MalformedRequestError(f"Invalid JSON body: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedRequestError("Request body must be a JSON object")

    # Any falsy text (missing, null, "", false, 0) is a missing text, whatever its type.
    if not payload.get("text"):
        raise MissingTextError()

    try:
        return AnalysisRequest.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise MalformedRequestError(f"Invalid request body: {fields}") from exc


@router.post(
    "/analyze",
    summary="Analyse text with one or more LLM providers",
    description=(
        "Sends `text` to every provider flagged in `providers` and returns one entry per "
        "requested provider, keyed `Gemini` / `Deepseak`.\n\n"
        "Each entry is the provider's JSON reply as-is, `{rawResponse}` when the reply "
        "was not JSON, or `{error}` when the call failed. Provider failures never change "
        "the status code."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "example": {
                        "text": "I lost my job today",
                        "providers": {"gemini": True, "deepseak": True},
                        "tone": "supportive",
                    },
                }
            },
        }
    },
    responses={
        200: {"content": {"application/json": {"example": _EXAMPLE_RESPONSE}}},
        400: {"content": {"application/json": {"example": {"error": "Missing text"}}}},
        500: {"content": {"application/json": {"example": {"error": "Invalid JSON body"}}}},
    },
)
async def analyze(
    request: Request,
    providers: dict[str, BaseProvider] = Depends(get_providers),
) -> AggregatedResponse:
    body = await _read_analysis_request(request)
    if not body.text:
        raise MissingTextError()

    tone = body.tone if body.tone is not None else get_settings().default_tone
    service = AnalysisService(providers=providers, request_id=get_request_id(request))
    return await service.analyze(text=body.text, tone=tone, selection=body.providers)
