"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finzen_health.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finzen_health.api.v1 import vibe, budgets
from finzen_health.infrastructure.observability.logging import setup_logging
from finzen_health.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinZen Financial Health",
        description="Financial vibe scoring and budget projection service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(vibe.router, prefix="/v1", tags=["vibe"])
    app.include_router(budgets.router, prefix="/v1", tags=["budgets"])

    return app


app = create_app()
