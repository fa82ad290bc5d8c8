import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.api import shipping, locations
from shipping_backend.app.api.deps import get_session
from shipping_backend.app.core.database import engine
from shipping_backend.app.core.limiter import limiter
from shipping_backend.app.core.logging import setup_logging, get_logger
from shipping_backend.app.core.settings import get_settings
from shipping_backend.app.core.metrics import PrometheusMiddleware, get_metrics_response

# Load and validate settings
try:
    settings = get_settings()
except ValueError as e:
    print(f"Configuration error: {e}", file=sys.stderr)
    sys.exit(1)

# JSON logs in production, console output in development
setup_logging(
    log_level=settings.LOG_LEVEL,
    json_format=settings.is_production
)

logger = get_logger(__name__)

logger.info(
    "Application configuration loaded",
    environment=settings.ENVIRONMENT,
    db_host=settings.DB_HOST,
    estimate_fallback_on_failure=settings.ESTIMATE_FALLBACK_ON_FAILURE,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    - Startup: log
    - Shutdown: dispose the connection pool
    """
    logger.info("Application starting up", version="1.0.0")
    yield
    logger.info("Application shutting down")
    await engine.dispose()


app = FastAPI(title="Shipping Resolution Backend", lifespan=lifespan)

# Routers share this limiter instance for @limiter.limit
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

ALLOWED_ORIGINS = settings.allowed_origins_list
logger.info("CORS configuration", allowed_origins=ALLOWED_ORIGINS, is_production=settings.is_production)
if not ALLOWED_ORIGINS:
    if settings.is_production:
        logger.error("ALLOWED_ORIGINS must be set in production environment")
        raise ValueError("ALLOWED_ORIGINS environment variable is required in production")
    ALLOWED_ORIGINS = ["*"]
    logger.warning("CORS: Allowing all origins (development mode). Set ALLOWED_ORIGINS in production!")

# CORS first: it runs last on the way out
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(PrometheusMiddleware)

app.include_router(shipping.router, prefix="/shipping", tags=["shipping"])
app.include_router(locations.router, prefix="/locations", tags=["locations"])


@app.get("/")
async def root():
    return {"status": "ok"}


@app.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    Health check endpoint for monitoring and orchestration.
    Checks database connectivity.
    """
    health_status = {
        "status": "healthy",
        "version": "1.0.0",
        "checks": {
            "database": "ok",
        }
    }

    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = f"error: {str(e)}"

    return health_status


@app.get("/metrics")
async def metrics_endpoint(openmetrics: bool = False):
    """
    Prometheus metrics endpoint.

    Args:
        openmetrics: If True, return OpenMetrics format
    """
    return get_metrics_response(openmetrics=openmetrics)
