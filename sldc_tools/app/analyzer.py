"""
Core orchestration / pipeline.

Flow:
1. Validate: pull a non-empty `code` string out of the raw JSON body
   (fails fast with INVALID_INPUT, no LLM call)
2. Build the task-specific prompt from its TaskProfile
3. Single LLM call, bounded by an explicit timeout
4. Take the model text verbatim
5. Return an AnalysisResult tagged with the task's envelope key

Any failure after validation collapses into one PROVIDER_ERROR with a
generic, task-specific message. The underlying cause is logged, never
returned to the caller.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Union

from .llm_client import CompletionProvider
from .profiles import TASK_PROFILES, TaskProfile
from .schemas import (
    AnalysisError,
    AnalysisRequest,
    AnalysisResult,
    ErrorKind,
    TaskKind,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
NO_CODE_MESSAGE = "No code provided"


def _extract_code(raw_body: Any) -> Optional[str]:
    """Return the `code` field when it is a non-empty string, else None."""
    if not isinstance(raw_body, dict):
        return None
    code = raw_body.get("code")
    if not isinstance(code, str) or not code:
        return None
    return code


class AnalysisOrchestrator:
    """
    Runs one (task, code) request through the LLM.

    Holds no per-request state, so a single instance serves all concurrent
    requests. The provider and timeout are injected so tests can swap in a
    stub.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        timeout: float = DEFAULT_TIMEOUT,
        profiles: Mapping[TaskKind, TaskProfile] = TASK_PROFILES,
    ):
        self._provider = provider
        self._timeout = timeout
        self._profiles = profiles

    async def handle(self, task: TaskKind, raw_body: Any) -> Union[AnalysisResult, AnalysisError]:
        # 1) Validate
        code = _extract_code(raw_body)
        if code is None:
            logger.info(f"[{task.value}] rejected request: no code provided")
            return AnalysisError(kind=ErrorKind.INVALID_INPUT, message=NO_CODE_MESSAGE)
        request = AnalysisRequest(task=task, code=code)

        profile = self._profiles[task]
        try:
            # 2) Build prompt
            prompt = profile.build_prompt(request.code)

            # 3) Invoke provider
            kwargs = {"max_output_tokens": prompt.max_output_tokens}
            if prompt.system_instruction is not None:
                kwargs["system_instruction"] = prompt.system_instruction
            if prompt.temperature is not None:
                kwargs["temperature"] = prompt.temperature

            logger.info(f"[{task.value}] calling LLM ({len(request.code)} chars of code)")
            text = await asyncio.wait_for(
                self._provider.complete(prompt.user_prompt, **kwargs),
                timeout=self._timeout,
            )

            # 4) Extract
            if not isinstance(text, str) or not text:
                raise ValueError(f"provider returned empty result: {text!r}")

        except asyncio.TimeoutError:
            logger.error(f"[{task.value}] LLM call timed out after {self._timeout}s")
            return AnalysisError(kind=ErrorKind.PROVIDER_ERROR, message=profile.failure_message)
        except Exception as e:
            logger.error(f"[{task.value}] LLM call failed: {type(e).__name__}: {e}")
            return AnalysisError(kind=ErrorKind.PROVIDER_ERROR, message=profile.failure_message)

        logger.debug(f"[{task.value}] LLM returned {len(text)} chars")

        # 5) Shape
        return AnalysisResult(task=task, text=text, envelope_key=profile.envelope_key)
