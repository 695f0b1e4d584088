from .gateway import APIGateway
from .routers import documents, expenses, uploads
from .routers.dependencies import initialize_database, initialize_services, close_services
from .core.config import (
    ACQUISITION_PROVIDER,
    DATABASE_TYPE,
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_PER_MINUTE,
    STORE_RAW_CONTENT,
)
from .core.logging_config import setup_logging, get_logger
import os

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize API Gateway
gateway = APIGateway(
    title="FinanceSaathi API",
    description="Invoice capture and expense dashboard for Indian SMBs",
    version="1.0.0"
)

# Setup middleware (CORS, logging, error handling)
gateway.setup_middleware()

# Register routers under /api/v1 and without prefix
for router_module, tag in ((uploads, "Uploads"), (documents, "Documents"), (expenses, "Expenses")):
    gateway.register_router(router_module.router, prefix="/api/v1", tags=[tag])
    gateway.register_router(router_module.router, tags=[tag])

# Register health check endpoints
gateway.register_health_endpoints()

# Get FastAPI app instance
app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting FinanceSaathi Backend...")
    logger.info("=" * 60)
    logger.info(f"  → Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  → Record store: {DATABASE_TYPE}")
    logger.info(f"  → Acquisition provider: {ACQUISITION_PROVIDER}")
    logger.info(f"  → Store raw content: {STORE_RAW_CONTENT}")
    if RATE_LIMIT_ENABLED:
        logger.info(f"  → Rate limit: {RATE_LIMIT_PER_MINUTE} uploads/minute")
    else:
        logger.info("  → Rate limit: disabled")

    await initialize_database()
    await initialize_services()

    logger.info("FinanceSaathi Backend initialized successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down FinanceSaathi Backend...")
    await close_services()
    logger.info("FinanceSaathi Backend shutdown complete")
