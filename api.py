"""
Mind Mate FastAPI Application

Main entry point for the Mind Mate wellness API.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
load_dotenv()

# Common library imports
from common.database import (
    JsonFileDocumentStore,
    MongoDB,
    MongoDocumentStore,
    StateDocument,
)
from common.utils import success_response

# App-specific imports
from mindmate.config import settings
from mindmate.services.ai.llm_service import build_llm_service

# Import routers
from mindmate.routers import (
    mood_router,
    summary_router,
    chat_router,
    stress_recovery_router,
    alerts_router,
    team_alerts_router,
    recommendations_router,
    login_router,
    google_auth_router,
    google_fit_router,
)

# Import service initialization
from mindmate.dependencies import init_all_services, get_llm_service


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


# =============================================================================
# Database Instance
# =============================================================================
# Only connected when DOCUMENT_STORE=mongodb
state_db = MongoDB()


def build_document_store():
    """Pick the document store backend from settings."""
    if settings.uses_mongodb():
        return MongoDocumentStore(key=settings.MONGODB_STATE_KEY)
    return JsonFileDocumentStore(settings.DATA_FILE_PATH)


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like the state store connection
    and service initialization.
    """
    # Startup
    print("Starting Mind Mate API...")
    settings.validate_required()

    if settings.uses_mongodb():
        await state_db.connect(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
            document_models=[StateDocument],
        )
        print(f"Connected to state database: {settings.MONGODB_DATABASE}")
    else:
        print(f"Using JSON document store: {settings.DATA_FILE_PATH}")

    llm_service = build_llm_service(settings)
    print(f"LLM provider: {llm_service.provider_info()['provider']}")

    init_all_services(
        store=build_document_store(),
        llm_service=llm_service,
        settings=settings,
    )
    print("All services initialized successfully!")

    print("Mind Mate API started successfully!")

    yield

    # Shutdown
    print("Shutting down Mind Mate API...")
    if state_db.is_connected:
        await state_db.disconnect()
    print("Mind Mate API shut down complete.")


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title=settings.APP_NAME,
    description="Mood tracking, stress recovery challenges and team alerts",
    version=settings.APP_VERSION,
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
API_PREFIX = settings.API_PREFIX

app.include_router(login_router, prefix=API_PREFIX, tags=["Authentication"])
app.include_router(google_auth_router, prefix=API_PREFIX, tags=["Authentication"])
app.include_router(mood_router, prefix=API_PREFIX, tags=["Mood"])
app.include_router(summary_router, prefix=API_PREFIX, tags=["Mood"])
app.include_router(chat_router, prefix=API_PREFIX, tags=["Chat"])
app.include_router(stress_recovery_router, prefix=API_PREFIX, tags=["Stress Recovery"])
app.include_router(recommendations_router, prefix=API_PREFIX, tags=["Recommendations"])
app.include_router(alerts_router, prefix=API_PREFIX, tags=["Alerts"])
app.include_router(team_alerts_router, prefix=API_PREFIX, tags=["Alerts"])
app.include_router(google_fit_router, prefix=API_PREFIX, tags=["Google Fit"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and the active LLM provider.
    """
    return success_response({
        "status": "ok",
        "version": settings.APP_VERSION,
        "database": state_db.is_connected,
        "llm": get_llm_service().provider_info(),
    })


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
