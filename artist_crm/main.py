"""Artist CRM API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CrmError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Uploaded documents served from the uploads directory at /uploads
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from artist_crm.api.error_handlers import register_error_handlers
from artist_crm.api.routes import (
    applications, artists, campaigns, dashboard, documents, health,
    interactions, notes, opportunities, outlook, plans, reports, resources,
    tasks, team_members, waitlist,
)
from artist_crm.config import get_settings
from artist_crm.infrastructure import database
from artist_crm.infrastructure.database import init_db
from artist_crm.infrastructure.observability import setup_logging
from artist_crm.infrastructure.outlook_client import close_outlook_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_schema()
    logger.info("Artist CRM API started")
    yield
    logger.info("Artist CRM API shutting down")
    await close_outlook_client()
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Artist CRM API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(dashboard.router)
app.include_router(artists.router)
app.include_router(interactions.router)
app.include_router(plans.router)
app.include_router(notes.router)
app.include_router(opportunities.router)
app.include_router(applications.router)
app.include_router(documents.router)
app.include_router(tasks.router)
app.include_router(waitlist.router)
app.include_router(campaigns.router)
app.include_router(resources.router)
app.include_router(team_members.router)
app.include_router(reports.router)
app.include_router(outlook.router)

os.makedirs(settings.uploads_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")
