"""
Outreach Gateway - FastAPI Application
Main entry point with all routes configured.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from outreach_gateway import __version__
from outreach_gateway.api import auth, outreach
from outreach_gateway.config import settings
from outreach_gateway.core.exceptions import register_exception_handlers
from outreach_gateway.schemas.common import HealthResponse
from outreach_gateway.services.auth_service import close_auth_strategy, get_auth_strategy
from outreach_gateway.services.integrations.unipile import close_unipile_client, get_unipile_client
from outreach_gateway.services.message_service import get_message_generator

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup: build the process-wide clients once
    get_unipile_client()
    get_message_generator()
    get_auth_strategy()
    logger.info(f"Outreach Gateway started (auth strategy: {settings.AUTH_STRATEGY})")
    yield
    # Shutdown
    await close_auth_strategy()
    await close_unipile_client()


app = FastAPI(
    title="Outreach Gateway API",
    description="LinkedIn outreach via Unipile and Gemini",
    version=__version__,
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(outreach.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "LinkedIn Outreach Gateway is running"


@app.get("/health", response_model=HealthResponse)
async def health():
    """Detailed health check."""
    return HealthResponse(version=__version__, auth_strategy=settings.AUTH_STRATEGY)


def run():
    uvicorn.run("outreach_gateway.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
