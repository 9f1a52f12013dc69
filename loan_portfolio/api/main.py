"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loan_portfolio.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_portfolio.api.v1 import analytics, calculators, loans, payments
from loan_portfolio.infrastructure.database.session import init_db
from loan_portfolio.infrastructure.observability.logging import setup_logging
from loan_portfolio.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables:
        init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Portfolio Service",
        description="Loan portfolio management, risk scoring and loan calculators",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])
    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])
    app.include_router(calculators.router, prefix="/v1", tags=["calculators"])

    return app


app = create_app()
