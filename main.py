"""
LearnHub backend entry point.

One Python process, one asyncio event loop, serving the FastAPI app. The
database engine is created lazily on first use and disposed on shutdown via
FastAPI's lifespan.

Run with: python main.py [--dev] [--port PORT]
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

project_root = Path(__file__).parent

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from learnhub.config import (
    check_required_env_vars,
    get_allowed_origins,
    get_api_port,
    get_sentry_dsn,
    is_production,
)
from learnhub.database import close_engine, is_configured

from web_api.routes.chat import router as chat_router
from web_api.routes.courses import router as courses_router
from web_api.routes.dashboard import router as dashboard_router
from web_api.routes.progress import router as progress_router
from web_api.routes.saved import router as saved_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

sentry_dsn = get_sentry_dsn()
if sentry_dsn:
    sentry_sdk.init(
        dsn=sentry_dsn,
        environment="production" if is_production() else "development",
        traces_sample_rate=0.1,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan: check settings on startup, release the pool on shutdown."""
    ok, warnings = check_required_env_vars()
    for warning in warnings:
        logger.warning(warning)
    if not ok:
        sys.exit(1)

    yield

    logger.info("Shutting down...")
    await close_engine()  # Close database connections


app = FastAPI(
    title="LearnHub API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(courses_router)
app.include_router(progress_router)
app.include_router(dashboard_router)
app.include_router(saved_router)
app.include_router(chat_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database_configured": is_configured(),
    }


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="LearnHub API Server")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Enable dev mode (relaxed env var checks)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=get_api_port(),
        help="Port to run the server on (default: API_PORT or 8000)",
    )
    args = parser.parse_args()

    # Set env var so it persists across uvicorn reloads
    if args.dev:
        os.environ["DEV_MODE"] = "true"

    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )
