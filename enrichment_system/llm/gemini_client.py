"""Async Gemini API client with exponential backoff for comparator calls."""

from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types.generation_types import BlockedPromptException
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from enrichment_system.config.logging import get_logger
from enrichment_system.config.settings import settings

logger = get_logger("llm.gemini")


class GeminiClient:
    """
    Google Gemini API client for JSON-answering comparator prompts.

    Retries transient failures with exponential backoff (tenacity) and
    re-raises the last error once attempts are exhausted. Blocked prompts
    and empty candidates are not retried.

    Attributes:
        model_name: Gemini model identifier
        model: Generative model instance (injectable for tests)
        max_retries: Attempts per call
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        model: Optional[Any] = None,
        max_retries: Optional[int] = None,
        retry_wait: float = 1.0,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (defaults to settings)
            model_name: Model identifier (defaults to settings)
            model: Pre-built model exposing generate_content_async()
            max_retries: Attempts per call (defaults to settings)
            retry_wait: Backoff multiplier in seconds

        Raises:
            ValueError: If no model is injected and the API key is not configured
        """
        self.model_name = model_name or settings.gemini_model
        self.max_retries = max_retries or settings.llm_max_retries
        self.retry_wait = retry_wait

        if model is None:
            key = api_key or settings.gemini_api_key
            if not key:
                raise ValueError("GEMINI_API_KEY not configured in environment")
            genai.configure(api_key=key)
            model = genai.GenerativeModel(self.model_name)

        self.model = model
        logger.info(f"Gemini client initialized with model {self.model_name}")

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Retry {retry_state.attempt_number} for Gemini call: {exc}"
        )

    async def generate_content(self, prompt: str, temperature: Optional[float] = None) -> str:
        """
        Generate a JSON answer for a prompt.

        Args:
            prompt: Rendered comparator prompt
            temperature: Sampling temperature (defaults to settings)

        Returns:
            Raw response text

        Raises:
            BlockedPromptException: If prompt violates safety policies
            Exception: The last API error after retries are exhausted
        """
        config = genai.types.GenerationConfig(
            temperature=settings.comparator_temperature if temperature is None else temperature,
            response_mime_type="application/json",
        )

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_wait, max=10 * self.retry_wait),
            retry=retry_if_not_exception_type((BlockedPromptException, ValueError)),
            before_sleep=self._log_retry,
            reraise=True,
        ):
            with attempt:
                try:
                    response = await self.model.generate_content_async(
                        prompt,
                        generation_config=config,
                    )
                    text = response.text
                except BlockedPromptException as e:
                    logger.error(f"Prompt blocked by safety filters: {e}")
                    raise

        return text
