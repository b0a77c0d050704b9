"""
Pydantic request/response models.

Rationale:
- Define simple, explicit input/output contracts for the API.
- Keep models minimal so the frontend knows exactly what to send and expect.
- The orchestrator returns either an AnalysisResult or an AnalysisError; routes
  only translate those into JSON envelopes and status codes.
"""

from enum import Enum
from typing import Dict
from pydantic import BaseModel, ConfigDict, Field


class TaskKind(str, Enum):
    EXPLAIN = "explain"
    GENERATE_TESTS = "generate_tests"
    SECURITY_REVIEW = "security_review"


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    PROVIDER_ERROR = "provider_error"


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    task: TaskKind
    code: str = Field(min_length=1)


class AnalysisResult(BaseModel):
    """Successful outcome: raw model text tagged with the task that produced it."""

    model_config = ConfigDict(frozen=True)

    task: TaskKind
    text: str
    envelope_key: str

    def envelope(self) -> Dict[str, str]:
        return {self.envelope_key: self.text}


class AnalysisError(BaseModel):
    """Failed outcome. `message` is caller-facing and never carries provider details."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        if self.kind == ErrorKind.INVALID_INPUT:
            return 400
        return 500

    def envelope(self) -> Dict[str, str]:
        return {"error": self.message}


# HTTP envelopes (documentation only; handlers return JSONResponse directly)

class ExplainResponse(BaseModel):
    result: str


class GeneratedTestsResponse(BaseModel):
    tests: str


class ReviewResponse(BaseModel):
    review: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str
