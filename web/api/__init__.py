"""FastAPI backend for the event deck."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_deck.catalog import DEFAULT_CARDS_SOURCE
from web.api.routes import decks
from web.api.session_manager import session_manager as _session_manager

logger = logging.getLogger(__name__)


def init_catalog():
    """Load the card catalog into the session manager.

    A failed load leaves the app up but every deck endpoint answers 503.
    """
    # Skip if already loaded (tests install a catalog directly)
    if _session_manager.catalog is not None:
        logger.info("Catalog already loaded")
        return

    source = os.environ.get("EVENT_DECK_CARDS", DEFAULT_CARDS_SOURCE)
    _session_manager.load(source)
    if _session_manager.load_error:
        logger.error(f"Running without a catalog: {_session_manager.load_error}")
    else:
        logger.info(f"Catalog ready: {len(_session_manager.catalog)} cards from {source}")


def cors_origins() -> list[str]:
    """Allowed browser origins: CORS_ORIGINS (comma-separated) plus FRONTEND_URL."""
    origins = [o.strip() for o in os.environ.get("CORS_ORIGINS", "").split(",") if o.strip()]
    frontend_url = os.environ.get("FRONTEND_URL")
    if frontend_url and frontend_url not in origins:
        origins.append(frontend_url)
    return origins


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - load the catalog on startup."""
    init_catalog()
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Event Deck API",
    description="API for drawing, holding, and discarding event cards",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(decks.router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "catalog_loaded": _session_manager.catalog is not None,
        "catalog_error": _session_manager.load_error,
    }
