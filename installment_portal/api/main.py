"""FastAPI application factory"""

import logging
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from installment_portal.api.middleware import RequestIDMiddleware, MetricsMiddleware
from installment_portal.api.v1 import dashboard, login
from installment_portal.infrastructure.observability.logging import setup_logging
from installment_portal.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Installment Portal",
        description="Read-only customer portal for installment status and payment history",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if settings.uses_placeholder_store:
        logging.warning("SUPABASE_URL missing or malformed; store queries will fail until it is configured")

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

    # Register API routers
    app.include_router(login.router, prefix="/v1", tags=["login"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app


app = create_app()
