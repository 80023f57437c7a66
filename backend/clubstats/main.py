"""
Club Analytics API

FastAPI application serving competition analytics for the club dashboard.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clubstats.config import settings
from clubstats.db.session import init_db, dispose_engines
from clubstats.api.v1.router import api_router


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Club Analytics API...")
    if settings.create_tables:
        init_db()

    yield

    logger.info("Shutting down...")
    await dispose_engines()


# === App Creation ===
app = FastAPI(
    title="Club Analytics API",
    description="Competition analytics for martial-arts club management",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}
