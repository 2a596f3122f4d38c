import logging
import os
from datetime import datetime

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import get_task_store
from api.metrics import TASKS_TOTAL
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/health")
def health_check() -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "message": "Server is running",
        "llm_provider": os.getenv("LLM_PROVIDER", "gemini"),
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/metrics")
def metrics(store: TaskStore = Depends(get_task_store)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    TASKS_TOTAL.set(store.count())
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
