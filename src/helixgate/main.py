"""HelixGate main application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helixgate import __version__
from helixgate.api import router
from helixgate.config import settings
from helixgate.db.base import close_db, init_db

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("helixgate")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting HelixGate server...")
    logger.info(f"Environment: {settings.env.value}")
    logger.info(f"Query proxy route: POST /api/{settings.proxy_endpoint}")

    if settings.create_tables_on_startup:
        await init_db()
        logger.info("Database tables created")

    yield

    logger.info("Shutting down HelixGate server...")
    await close_db()
    logger.info("Shutdown complete")


app = FastAPI(
    title="HelixGate",
    description="Zoo registry and audited time-series query proxy",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allowed_methods,
    allow_headers=settings.cors_allowed_headers,
)

app.include_router(router)


def main():
    """Entry point for the application."""
    uvicorn.run(
        "helixgate.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
