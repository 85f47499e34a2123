"""FastAPI application entry point for the Payment Gateway."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from payment_gateway import __version__
from payment_gateway.api.dependencies import close_payment_processor
from payment_gateway.api.routes import payments_router
from payment_gateway.config import settings
from payment_gateway.logging_config import configure_logging, get_logger

# Configure logging at module level
configure_logging(
    log_level=settings.log_level,
    format_as_json=settings.environment != "development",
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager.

    The payment processor is built lazily on the first request; on shutdown
    its authorizer's connection pool is closed.
    """
    logger.info("starting_payment_gateway", environment=settings.environment)

    yield

    logger.info("shutting_down_payment_gateway")
    await close_payment_processor()
    logger.info("payment_gateway_shutdown_complete")


app = FastAPI(
    title="Payment Gateway",
    description="Card payment processing through an acquiring bank",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(payments_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
    }
