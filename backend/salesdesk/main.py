"""SalesDesk API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SalesDeskError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event
    - database_create_all=True builds tables without Alembic (local demos)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from salesdesk.api.error_handlers import register_error_handlers
from salesdesk.api.routes import checkout, health, orders, products, sales_pages
from salesdesk.config import get_settings
from salesdesk.infrastructure.database import init_db
from salesdesk.infrastructure.observability import setup_logging

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
    if settings.database_create_all:
        await manager.create_all()
    logger.info("SalesDesk API started")
    yield
    await manager.dispose()
    logger.info("SalesDesk API shutting down")


app = FastAPI(
    title="SalesDesk API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(products.router)
app.include_router(sales_pages.router)
app.include_router(checkout.router)
app.include_router(orders.router)
app.include_router(orders.reports_router)

register_error_handlers(app)

# Static files: serves the dashboard build in production.
# Mounted AFTER API routes so /api/v1/* takes precedence.
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
