from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from mood_relay.analysis.router import router as analysis_router
from mood_relay.api.exception_handlers import register_exception_handlers
from mood_relay.api.schemas import HealthOut
from mood_relay.core.llm.deps import build_providers
from mood_relay.core.logging import setup_logging
from mood_relay.core.metrics import PrometheusMetricsMiddleware, metrics_router
from mood_relay.core.middleware.http_logging import HttpLoggingMiddleware
from mood_relay.core.settings import get_settings

setup_logging()
logger = logging.getLogger("mood_relay")


def create_app() -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Adapters get their configuration once, here; they never read the environment.
        app.state.providers = build_providers(get_settings())
        yield

    app = FastAPI(
        title="Mood Relay",
        description=(
            "Relays free text to LLM text-analysis providers (Gemini, DeepSeek) and "
            "returns their mood/emotion analyses side by side.\n\n"
            "- Stateless: nothing is stored between requests.\n"
            "- One provider failing never affects another provider's result.\n"
            "- Logs and metrics carry metadata only, never the analysed text."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Basic uptime check."},
            {
                "name": "analysis",
                "description": "Fan text out to the selected providers and merge the replies.",
            },
            {"name": "metrics", "description": "Prometheus-compatible metrics endpoint."},
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description="Reports that the process is up and which providers have an API key.",
    )
    async def health(request: Request) -> HealthOut:
        providers = getattr(request.app.state, "providers", {})
        return HealthOut(
            status="ok",
            providers={flag: p.is_configured for flag, p in providers.items()},
        )

    app.include_router(metrics_router)
    app.include_router(analysis_router)

    # Mounted last: a mount at "/" shadows every route registered after it.
    public_dir = Path(settings.public_dir)
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")
    else:
        logger.warning(
            "Public directory not found; static files disabled",
            extra={"path": str(public_dir)},
        )
    return app


def serve() -> None:
    """Run the relay with uvicorn on the configured host/port."""

    import uvicorn

    settings = get_settings()
    logger.info("Server running on http://localhost:%s", settings.port)
    uvicorn.run(
        "mood_relay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_config=None,
        log_level="debug" if settings.is_development else "info",
    )


app = create_app()
