from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Liveness response. Providers are not contacted."""

    status: str = Field(description="`ok` while the relay process is serving.", examples=["ok"])
    providers: dict[str, bool] = Field(
        default_factory=dict,
        description="Request flag -> whether an API key is configured for that provider.",
        examples=[{"gemini": True, "deepseak": False}],
    )
