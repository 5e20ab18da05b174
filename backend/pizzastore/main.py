"""Pizza Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The pizza router is mounted under /pizzas and /api/pizza; both prefixes
      run the same handlers
    - Global error handlers map PizzaStoreError → HTTP responses
    - CORS configured from settings (not hardcoded)
    - Database initialized (schema + seed when enabled) on startup via lifespan
    - Startup failures are logged at CRITICAL and re-raised

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Swagger UI served under /swagger to keep the URLs clients already use
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from pizzastore.api.error_handlers import register_error_handlers
from pizzastore.api.routes import pizzas
from pizzastore.config import get_settings
from pizzastore.infrastructure.database import close_db, init_db
from pizzastore.infrastructure.observability import (
    RequestLoggingMiddleware, setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file)
    try:
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await manager.create_schema()
        if settings.database_seed:
            await manager.seed()
    except Exception:
        logger.critical("Pizza Store API failed to start", exc_info=True)
        raise
    logger.info("Pizza Store API started")
    yield
    await close_db()
    logger.info("Pizza Store API shutting down")


app = FastAPI(
    title="Pizzas API",
    description="Pizza API",
    version="v1",
    lifespan=lifespan,
    docs_url="/swagger",
    openapi_url="/swagger/v1/swagger.json",
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
if settings.log_requests:
    app.add_middleware(RequestLoggingMiddleware)

register_error_handlers(app)

app.include_router(pizzas.router, prefix="/pizzas")
app.include_router(pizzas.router, prefix="/api/pizza")


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return "Hello World!"
