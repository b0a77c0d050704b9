"""
Minimal LLM client wrapper using Google Gemini.

Rationale:
- Use google-generativeai SDK for robust Gemini access.
- Keep interface tiny: complete(user_prompt, system_instruction, ...) -> str.
- Async all the way: generate_content_async never blocks the event loop.
- No retries / no fallback.
"""

import logging
from typing import Optional, Protocol

import google.generativeai as genai

from .config import Settings

logger = logging.getLogger(__name__)

# Candidate.FinishReason.MAX_TOKENS
FINISH_REASON_MAX_TOKENS = 2


class ProviderError(RuntimeError):
    """The completion provider failed or broke its response contract."""


class CompletionProvider(Protocol):
    async def complete(
        self,
        user_prompt: str,
        *,
        max_output_tokens: int,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> str:
        ...


def _extract_text(response) -> str:
    """Return the first candidate's text, or raise ProviderError."""
    try:
        result = response.text
    except ValueError:
        # response.text is not available (e.g. safety block or other finish reasons)
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.finish_reason == FINISH_REASON_MAX_TOKENS:
                # Partial text is still the model's answer within the token ceiling
                if candidate.content and candidate.content.parts:
                    result = candidate.content.parts[0].text
                else:
                    raise ProviderError("Gemini response truncated with no content.")
            else:
                raise ProviderError(f"Gemini blocked response. Finish reason: {candidate.finish_reason}")
        else:
            raise ProviderError("Gemini returned no candidates.")

    if not result:
        raise ProviderError("Gemini returned empty response")

    return result


class GeminiClient:
    """CompletionProvider backed by a Gemini model."""

    def __init__(self, api_key: str, model_name: str, timeout: float = 60.0):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            timeout=settings.request_timeout,
        )

    async def complete(
        self,
        user_prompt: str,
        *,
        max_output_tokens: int,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> str:
        try:
            model = genai.GenerativeModel(
                model_name=self.model_name,
                system_instruction=system_instruction,
            )

            config_kwargs = {"max_output_tokens": max_output_tokens}
            if temperature is not None:
                config_kwargs["temperature"] = temperature
            config = genai.GenerationConfig(**config_kwargs)

            response = await model.generate_content_async(
                user_prompt,
                generation_config=config,
                request_options={"timeout": self.timeout},
            )
            return _extract_text(response)

        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Gemini API error: {str(e)}") from e
