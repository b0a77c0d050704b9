"""
Fixed per-task prompt and generation settings.

Rationale:
- One TaskProfile per TaskKind, built once at import and never mutated.
- Prompt texts live in ../prompts/*.txt so they can be edited without touching code.
- Lower temperature for tests and security reviews: both outputs follow a fixed
  structure, so determinism matters more than variety.
- Adding a task means adding a profile here; routes and the orchestrator are
  driven entirely by TASK_PROFILES.
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .schemas import TaskKind

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PROMPTS_DIR = os.path.join(BASE_DIR, "prompts")

CODE_PLACEHOLDER = "{code}"


def _read_prompt(name: str) -> str:
    """Read a prompt text file, dropping the trailing newline editors add."""
    with open(os.path.join(PROMPTS_DIR, name), "r", encoding="utf-8") as f:
        return f.read().rstrip("\n")


@dataclass(frozen=True)
class PromptRequest:
    """Everything the completion provider needs for one call."""

    user_prompt: str
    max_output_tokens: int
    system_instruction: Optional[str] = None
    temperature: Optional[float] = None


@dataclass(frozen=True)
class TaskProfile:
    task: TaskKind
    path: str
    envelope_key: str
    failure_message: str
    prompt_template: str
    max_output_tokens: int
    system_instruction: Optional[str] = None
    temperature: Optional[float] = None

    def render(self, code: str) -> str:
        """Embed the caller's code verbatim. The code is inert text, never evaluated."""
        return self.prompt_template.replace(CODE_PLACEHOLDER, code)

    def build_prompt(self, code: str) -> PromptRequest:
        return PromptRequest(
            user_prompt=self.render(code),
            max_output_tokens=self.max_output_tokens,
            system_instruction=self.system_instruction,
            temperature=self.temperature,
        )


TASK_PROFILES: Mapping[TaskKind, TaskProfile] = MappingProxyType({
    TaskKind.EXPLAIN: TaskProfile(
        task=TaskKind.EXPLAIN,
        path="/api/analyze",
        envelope_key="result",
        failure_message="Failed to analyze code",
        prompt_template=_read_prompt("explain.txt"),
        max_output_tokens=1000,
    ),
    TaskKind.GENERATE_TESTS: TaskProfile(
        task=TaskKind.GENERATE_TESTS,
        path="/api/generate-tests",
        envelope_key="tests",
        failure_message="Failed to generate unit tests",
        prompt_template=_read_prompt("generate_tests.txt"),
        system_instruction=_read_prompt("generate_tests_system.txt"),
        max_output_tokens=2000,
        temperature=0.3,
    ),
    TaskKind.SECURITY_REVIEW: TaskProfile(
        task=TaskKind.SECURITY_REVIEW,
        path="/api/security-review",
        envelope_key="review",
        failure_message="Failed to review code for security issues",
        prompt_template=_read_prompt("security_review.txt"),
        system_instruction=_read_prompt("security_review_system.txt"),
        max_output_tokens=2000,
        temperature=0.2,
    ),
})
