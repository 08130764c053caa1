"""Light API — FastAPI entry point.

Wires configuration, logging, the template engine, middleware and routers.
Wiring failures (bad config, missing template paths) raise here, at
startup, never at request time.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from api.middleware import RequestContextMiddleware
from core import database
from core.config import AppConfig
from core.engine.template_engine import TemplateEngine
from core.logging_setup import configure_logging
from verticals.book.router import router as book_router


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application from config (defaults to the environment)."""
    config = config or AppConfig.from_env()
    configure_logging(config.logging)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup/shutdown hooks."""
        if config.database.auto_create:
            database.init_db()
        logger.info("{} {} started", config.name, config.version)
        yield
        database.close_db()
        logger.info("{} shutting down", config.name)

    app = FastAPI(
        title=config.name,
        description="Book listing built on FastAPI and SQLAlchemy",
        version=config.version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.template_engine = TemplateEngine(config.templates.paths)

    app.add_middleware(RequestContextMiddleware)

    # Routers: verticals register here
    app.include_router(book_router, tags=["Books"])

    @app.get("/health")
    def health():
        return {"status": "healthy", "version": config.version}

    return app


app = create_app()
