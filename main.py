import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import lovejourney.models  # noqa: F401  registers tables on Base.metadata
from lovejourney.core.config import Base, engine, settings
from lovejourney.core.exceptions import register_exception_handlers
from lovejourney.core.logging import configure_logging
from lovejourney.api.routers import (
    analyses,
    auth,
    daily_sentences,
    functions,
    journal,
    practices,
    questions,
)

configure_logging()
logger = logging.getLogger(__name__)

# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="Love Journey journaling API",
    version="1.0.0",
)

# =====================================================================
# CORS MIDDLEWARE
# =====================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

logger.info("CORS allowed origins: %s", settings.CORS_ORIGINS)

# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

Base.metadata.create_all(bind=engine)

# =====================================================================
# EXCEPTION HANDLERS
# =====================================================================

register_exception_handlers(app)

# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(auth.router)
app.include_router(journal.router)
app.include_router(daily_sentences.router)
app.include_router(practices.router)
app.include_router(questions.router)
app.include_router(analyses.router)
app.include_router(functions.router)

# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": "Welcome to Love Journey API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "auth": "/auth",
            "journal": "/journal",
            "daily_sentences": "/daily-sentences",
            "practices": "/practices",
            "questions": "/questions",
            "analyses": "/analyses",
            "functions": "/functions",
        },
    }
