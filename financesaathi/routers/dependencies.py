"""
Shared dependencies for routers.
Provides record store and service initialization.

Services are module-level singletons created on startup and shared by all
request handlers.
"""
from ..services.database import DatabaseFactory
from ..services.acquisition_service import AcquisitionService
from ..services.upload_pipeline import UploadPipeline
from ..services.expense_aggregator import ExpenseAggregator
from ..services.expense_service import ExpenseService
from ..core.config import DATABASE_TYPE, JSON_DB_PATH, ACQUISITION_PROVIDER, STORE_RAW_CONTENT
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Global services (will be initialized on startup)
db_service = None
acquisition_service = None
upload_pipeline = None
expense_aggregator = None
expense_service = None


async def initialize_database():
    """Initialize the record store based on configuration."""
    global db_service

    logger.info(f"Initializing record store: {DATABASE_TYPE}")
    if DATABASE_TYPE.lower() == "json":
        logger.debug(f"  → Store path: {JSON_DB_PATH or 'default'}")
    db_service = await DatabaseFactory.create_and_initialize(DATABASE_TYPE, data_dir=JSON_DB_PATH)


async def initialize_services():
    """Initialize business services after the record store is ready."""
    global acquisition_service, upload_pipeline, expense_aggregator, expense_service

    if db_service is None:
        await initialize_database()

    logger.info("Initializing services...")
    logger.info(f"  → Acquisition provider: {ACQUISITION_PROVIDER}")
    acquisition_service = AcquisitionService()

    upload_pipeline = UploadPipeline(
        db_service,
        acquisition_service,
        store_raw_content=STORE_RAW_CONTENT
    )
    expense_aggregator = ExpenseAggregator(db_service)
    expense_service = ExpenseService(db_service)
    logger.info("All services initialized")


async def close_services():
    """Flush the record store on shutdown."""
    if db_service is not None:
        await db_service.close()


def get_db_service():
    """Get record store (dependency injection)."""
    if db_service is None:
        raise RuntimeError("Record store not initialized")
    return db_service


def get_upload_pipeline() -> UploadPipeline:
    """Get upload pipeline (dependency injection)."""
    if upload_pipeline is None:
        raise RuntimeError("Upload pipeline not initialized")
    return upload_pipeline


def get_expense_aggregator() -> ExpenseAggregator:
    """Get expense aggregator (dependency injection)."""
    if expense_aggregator is None:
        raise RuntimeError("Expense aggregator not initialized")
    return expense_aggregator


def get_expense_service() -> ExpenseService:
    """Get expense service (dependency injection)."""
    if expense_service is None:
        raise RuntimeError("Expense service not initialized")
    return expense_service
