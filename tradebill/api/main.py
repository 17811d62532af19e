"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from tradebill.api.middleware import RequestIDMiddleware, MetricsMiddleware
from tradebill.api.v1 import bills, calculator, cheques, dashboard, exports, imports, receipts
from tradebill.infrastructure.database.session import init_db
from tradebill.infrastructure.observability.logging import setup_logging
from tradebill.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Tradebill",
        description="Trade bill aging, overdue interest and receipt tracking",
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
    app.include_router(bills.router, prefix="/v1", tags=["bills"])
    app.include_router(calculator.router, prefix="/v1", tags=["calculator"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(receipts.router, prefix="/v1", tags=["receipts"])
    app.include_router(imports.router, prefix="/v1", tags=["imports"])
    app.include_router(exports.router, prefix="/v1", tags=["exports"])
    app.include_router(cheques.router, prefix="/v1", tags=["cheques"])

    return app


app = create_app()
