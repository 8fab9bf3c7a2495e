"""FastAPI app: CloudFront credentials for enrolled users."""

import logging

from fastapi import FastAPI
from lesson_video_shared import configure_logging

from .config import bootstrap_env
from .routers import video_access_router

# Load .env from LESSON_VIDEO_ENV_FILE if set (local development). Unset in deployed environments.
bootstrap_env()

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Lesson Video Access", version="0.1.0")

app.include_router(video_access_router)


@app.get("/health")
async def health() -> dict:
    """Liveness probe for the load balancer."""
    return {"status": "ok"}
