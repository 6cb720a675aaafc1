"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from riskscore_gateway.api.middleware import RequestContextMiddleware
from riskscore_gateway.api.v1 import assessment
from riskscore_gateway.infrastructure.observability.logging import setup_logging
from riskscore_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Risk Assessment Gateway",
        description="Risk questionnaire scoring and score persistence service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(RequestContextMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(assessment.router, prefix="/v1", tags=["assessments"])

    return app


app = create_app()
