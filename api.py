"""
Consent Connector FastAPI Application

Main entry point for the consent connector API.
Uses the generic common/ library for infrastructure and connector/ for
the consent manager integration.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import MongoDB
from common.utils import success_response, error_response

# App-specific imports
from connector.config import settings
from connector.dependencies import init_all_services
from connector.models import User

# Import routers
from connector.routers import (
    auth_router,
    private_consent_router,
    public_consent_router,
    template_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects to MongoDB and initializes the connector services.
    """
    logger.info("Starting consent connector API...")

    if settings.is_production():
        settings.validate_required()
    else:
        for problem in settings.get_missing_settings():
            logger.warning(f"Configuration: {problem}")

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
        document_models=[User],
    )

    init_all_services(settings)
    logger.info("Consent connector API started")

    yield

    logger.info("Shutting down consent connector API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Consent Connector API",
    description="Gateway between the API gateway and the consent manager",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# Include Routers
# =============================================================================
app.include_router(auth_router, tags=["Authentication"])
app.include_router(template_router, tags=["Template"])
app.include_router(public_consent_router, tags=["Consent"])
app.include_router(private_consent_router, tags=["Private consent"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """Report API and database status."""
    if not await main_db.ping():
        return JSONResponse(
            status_code=503,
            content=error_response("Database unavailable", code="DATABASE_UNAVAILABLE"),
        )

    return success_response({"status": "ok", "database": True})


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
