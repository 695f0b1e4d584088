"""
API Gateway

Main gateway class that wires middleware, rate limiting, routers and probe
endpoints onto the FastAPI application.
"""
import os
from typing import Optional, List
from fastapi import FastAPI, APIRouter, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ..core.config import CORS_ORIGINS
from ..core.logging_config import get_logger
from ..middleware.rate_limit import limiter
from .middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    ErrorHandlingMiddleware,
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing and middleware.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Register routers
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "FinanceSaathi API",
        description: str = "Invoice capture and expense dashboard for Indian SMBs",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else (
            os.getenv("ENVIRONMENT") != "production"
        )

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )
        self.routers: List[str] = []

        self.limiter = limiter
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware. The last one added runs first."""
        logger.info("Setting up middleware...")

        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        # Outside request logging so the id is available when the request is logged
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("All middleware configured")

    def register_router(self, router: APIRouter, prefix: str = "", tags: Optional[List[str]] = None):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router (e.g., "/api/v1")
            tags: OpenAPI tags for documentation
        """
        self.app.include_router(router, prefix=prefix, tags=tags or [])
        self.routers.append(prefix or "/")
        logger.info(f"Registered router {', '.join(tags or [])} at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register health check endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy"
            }

        @self.app.get("/health")
        async def health_check():
            """
            Liveness probe.

            Returns 200 once the store and pipeline are initialized, 503 before.
            """
            from ..routers import dependencies
            if dependencies.db_service is None:
                logger.warning("Health check failed: Record store not initialized")
                return Response(
                    content='{"status": "unhealthy", "reason": "Record store not initialized"}',
                    media_type="application/json",
                    status_code=503
                )
            if dependencies.upload_pipeline is None:
                logger.warning("Health check failed: Services not initialized")
                return Response(
                    content='{"status": "unhealthy", "reason": "Services not initialized"}',
                    media_type="application/json",
                    status_code=503
                )
            return {
                "status": "healthy",
                "database": "connected",
                "services": "initialized"
            }

        @self.app.get("/ready")
        async def readiness_check():
            """Readiness probe: verifies the record store answers a read."""
            from ..routers import dependencies
            if dependencies.db_service is None:
                return Response(
                    content='{"ready": false, "reason": "Record store not initialized"}',
                    media_type="application/json",
                    status_code=503
                )
            stats = await dependencies.db_service.get_stats()
            return {"ready": True, **stats}

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
