"""Radio station service main application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .core.config import app_settings
from .core.correlation import CorrelationIDMiddleware
from .core.db import engine, init_db
from .core.error_handler import register_exception_handlers
from .core.health import router as health_router
from .core.logging import configure_logging, get_logger
from .core.metrics import CONTENT_TYPE_LATEST, MetricsMiddleware, get_metrics
from .api.radio import router as radio_router
from .api.stations import router as stations_router
from .api.tracks import router as tracks_router
from .api.users import router as users_router
from .producers.kafka_producer import close_producer

# Configure logging
configure_logging(log_level=app_settings.log_level, log_format=app_settings.log_format)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager with graceful shutdown."""
    # Startup
    logger.info("radio_service_starting", version=app_settings.app_version)
    await init_db()
    logger.info("radio_service_started", version=app_settings.app_version)

    yield

    # Shutdown
    logger.info("radio_service_shutting_down")
    close_producer()
    await engine.dispose()
    logger.info("radio_service_shutdown")


# Create FastAPI app
app = FastAPI(
    title="Collaborative Radio Service",
    version=app_settings.app_version,
    description="Shared radio station with listener vetoes and a playlist-keeping DJ",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)

# Correlation ID middleware
app.add_middleware(CorrelationIDMiddleware)

# Register all exception handlers
register_exception_handlers(app)

# Include routers; stations before radio so /radio/stations is not read as a station id
app.include_router(health_router)
app.include_router(stations_router, prefix=app_settings.api_prefix)
app.include_router(radio_router, prefix=app_settings.api_prefix)
app.include_router(tracks_router, prefix=app_settings.api_prefix)
app.include_router(users_router, prefix=app_settings.api_prefix)


# Prometheus metrics endpoint
@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8004)
