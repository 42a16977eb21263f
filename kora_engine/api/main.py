"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from kora_engine.api.dependencies import get_request_id
from kora_engine.api.middleware import RequestContextMiddleware
from kora_engine.api.v1 import alerts, insights, patterns, state
from kora_engine.infrastructure.observability.logging import setup_logging
from kora_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Kora Financial Engine",
        description="Safe spend, spending patterns and proactive alerts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware
    app.add_middleware(RequestContextMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logging.error(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(state.router, prefix="/v1", tags=["financial-state"])
    app.include_router(patterns.router, prefix="/v1", tags=["patterns"])
    app.include_router(alerts.router, prefix="/v1", tags=["alerts"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])

    return app


app = create_app()
