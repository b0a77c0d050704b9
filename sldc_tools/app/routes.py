"""
HTTP routes.

One POST endpoint per TaskProfile, all served by the same handler factory,
plus a healthcheck. The body is read as raw JSON so that a missing or
malformed `code` yields the service's own 400 envelope instead of FastAPI's
422 validation error.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .analyzer import AnalysisOrchestrator
from .profiles import TASK_PROFILES
from .schemas import (
    AnalysisError,
    ErrorResponse,
    ExplainResponse,
    GeneratedTestsResponse,
    HealthResponse,
    ReviewResponse,
    TaskKind,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "sldc-tools"

_RESPONSE_MODELS = {
    TaskKind.EXPLAIN: ExplainResponse,
    TaskKind.GENERATE_TESTS: GeneratedTestsResponse,
    TaskKind.SECURITY_REVIEW: ReviewResponse,
}

router = APIRouter()


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    return request.app.state.orchestrator


async def _read_json(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


def _make_endpoint(task: TaskKind):
    async def endpoint(
        request: Request,
        orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    ) -> JSONResponse:
        body = await _read_json(request)
        outcome = await orchestrator.handle(task, body)
        if isinstance(outcome, AnalysisError):
            return JSONResponse(status_code=outcome.status_code, content=outcome.envelope())
        return JSONResponse(content=outcome.envelope())

    endpoint.__name__ = f"{task.value}_endpoint"
    return endpoint


for _profile in TASK_PROFILES.values():
    router.add_api_route(
        _profile.path,
        _make_endpoint(_profile.task),
        methods=["POST"],
        response_model=_RESPONSE_MODELS[_profile.task],
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        name=_profile.task.value,
    )


@router.get("/api/health", response_model=HealthResponse, summary="Healthcheck")
async def health():
    return {"status": "ok", "service": SERVICE_NAME}
