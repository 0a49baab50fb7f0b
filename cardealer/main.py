"""Car Dealer API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix
    - Global error handlers map CarDealerError to {status, message} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardealer.api.error_handlers import register_error_handlers
from cardealer.api.routes import cars, dealers, health, orders, users
from cardealer.config import get_settings
from cardealer.infrastructure import database
from cardealer.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"{settings.app_name} started")
    yield
    logger.info(f"{settings.app_name} shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


settings = get_settings()
app = FastAPI(
    title=settings.app_name, version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (health, cars, dealers, orders, users):
    app.include_router(module.router, prefix=settings.api_prefix)

register_error_handlers(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("cardealer.main:app", host="0.0.0.0", port=8080)
