import asyncio
import logging
import time
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import get_now, get_task_generator
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from api.security import get_current_user
from extraction.task_generator import TaskGenerator
from llm.errors import LLMError, LLMNotConfiguredError
from llm.schemas import TaskBreakdown, TaskImprovement
from taskmind.models import TaskProposal, User

router = APIRouter(prefix="/api/ai")
logger = logging.getLogger(__name__)


class GenerateIn(BaseModel):
    context: str = Field(..., min_length=1)


class RecommendationsIn(BaseModel):
    title: str = Field(..., min_length=1)
    existing_tasks: List[str] = Field(default_factory=list)


class BreakdownIn(BaseModel):
    title: str = Field(..., min_length=1)
    context: str = ""


class ImprovementsIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""


async def _call(endpoint: str, fn, *args):
    """Run a blocking generator call off the event loop and map LLM failures."""
    start = time.time()
    try:
        result = await asyncio.to_thread(fn, *args)
    except LLMNotConfiguredError as e:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status="unavailable").inc()
        logger.error(f"{endpoint}: LLM not configured: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except LLMError as e:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status="error").inc()
        logger.error(f"{endpoint}: LLM call failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    finally:
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)

    REQUESTS_TOTAL.labels(endpoint=endpoint, status="ok").inc()
    return result


@router.post("/generate", response_model=List[TaskProposal])
async def generate_tasks(
    payload: GenerateIn,
    _user: User = Depends(get_current_user),
    generator: TaskGenerator = Depends(get_task_generator),
    now: datetime = Depends(get_now),
) -> List[TaskProposal]:
    """Task proposals for a free-text request. Nothing is saved."""
    return await _call("/api/ai/generate", generator.generate_tasks, payload.context, now.date())


@router.post("/recommendations", response_model=List[str])
async def recommendations(
    payload: RecommendationsIn,
    _user: User = Depends(get_current_user),
    generator: TaskGenerator = Depends(get_task_generator),
) -> List[str]:
    return await _call(
        "/api/ai/recommendations", generator.recommend, payload.title, payload.existing_tasks
    )


@router.post("/breakdown", response_model=TaskBreakdown)
async def breakdown(
    payload: BreakdownIn,
    _user: User = Depends(get_current_user),
    generator: TaskGenerator = Depends(get_task_generator),
) -> TaskBreakdown:
    return await _call("/api/ai/breakdown", generator.breakdown, payload.title, payload.context)


@router.post("/improvements", response_model=TaskImprovement)
async def improvements(
    payload: ImprovementsIn,
    _user: User = Depends(get_current_user),
    generator: TaskGenerator = Depends(get_task_generator),
) -> TaskImprovement:
    return await _call(
        "/api/ai/improvements", generator.improve, payload.title, payload.description
    )
