"""Gemini-backed SemanticComparator.

Renders the cross-source prompts, sends them through GeminiClient, and
validates the JSON answer against the comparator response models. Unlike a
best-effort parser, any answer that is not the expected JSON object raises
ComparatorResponseError: a defaulted "not equivalent" or "neutral" would
silently corrupt conflict and claim verdicts.

Usage:
    from enrichment_system.gates.cross_source.gemini_comparator import GeminiComparator

    comparator = GeminiComparator()
    result = await comparator.check_equivalence(["50mm", "2 inch"])
"""

import json
import re
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ValidationError

from enrichment_system.config.prompts import (
    CLAIM_EXTRACTION_PROMPT,
    CLAIM_VERIFICATION_PROMPT,
    EQUIVALENCE_PROMPT,
)
from enrichment_system.config.settings import settings
from enrichment_system.gates.cross_source.comparator import (
    ComparatorError,
    ComparatorResponseError,
)
from enrichment_system.gates.cross_source.schemas import (
    ClaimExtractionResponse,
    ClaimSupport,
    EquivalenceResult,
    ExtractedClaim,
)


class GeminiComparator:
    """SemanticComparator implementation using Gemini JSON prompts.

    Attributes:
        excerpt_chars: Cap on source text embedded in verification prompts
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        excerpt_chars: Optional[int] = None,
    ) -> None:
        """Initialize GeminiComparator.

        Args:
            client: Object with async generate_content(prompt) -> str.
                    Lazy-initialized GeminiClient if not provided.
            excerpt_chars: Max source characters per verification prompt.
        """
        self._client = client
        self.excerpt_chars = excerpt_chars or settings.source_excerpt_chars
        self._logger = structlog.get_logger().bind(component="GeminiComparator")

    @property
    def client(self) -> Any:
        """Lazy-load Gemini client on first access."""
        if self._client is None:
            from enrichment_system.llm.gemini_client import GeminiClient

            self._client = GeminiClient()
        return self._client

    async def check_equivalence(self, values: list[str]) -> EquivalenceResult:
        if len(values) < 2:
            return EquivalenceResult(
                all_equivalent=True,
                compatible=True,
                resolved_value=values[0] if values else None,
                reasoning="Only one value provided",
            )

        numbered = "\n".join(f'{i + 1}. "{value}"' for i, value in enumerate(values))
        prompt = EQUIVALENCE_PROMPT.format(numbered_values=numbered)
        result = await self._ask("check_equivalence", prompt, EquivalenceResult)

        self._logger.debug(
            "equivalence_checked",
            value_count=len(values),
            all_equivalent=result.all_equivalent,
            compatible=result.compatible,
        )
        return result

    async def extract_claims(self, text: str) -> list[ExtractedClaim]:
        prompt = CLAIM_EXTRACTION_PROMPT.format(description=text)
        response = await self._ask("extract_claims", prompt, ClaimExtractionResponse)

        claims = [c for c in response.claims if c.claim.strip()]
        dropped = len(response.claims) - len(claims)
        if dropped:
            self._logger.warning("blank_claims_dropped", count=dropped)

        return claims

    async def verify_claim(self, claim: str, source: str) -> ClaimSupport:
        prompt = CLAIM_VERIFICATION_PROMPT.format(
            claim=claim,
            source=source[: self.excerpt_chars],
        )
        return await self._ask("verify_claim", prompt, ClaimSupport)

    async def _ask(self, operation: str, prompt: str, model: type[BaseModel]) -> Any:
        """Send a prompt and validate the JSON answer into ``model``.

        Raises:
            ComparatorError: The client call failed.
            ComparatorResponseError: The answer was not the expected JSON.
        """
        try:
            text = await self.client.generate_content(prompt)
        except ComparatorError:
            raise
        except Exception as e:
            self._logger.error("comparator_call_failed", operation=operation, error=str(e))
            raise ComparatorError(f"{operation}: {e}") from e

        payload = self._extract_json_object(text or "")
        if payload is None:
            raise ComparatorResponseError(operation, "no JSON object in response", raw=text or "")

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ComparatorResponseError(operation, f"invalid response shape: {e}", raw=text) from e

    @staticmethod
    def _extract_json_object(response_text: str) -> Optional[dict]:
        """
        Extract a JSON object from LLM response, handling markdown blocks.

        The LLM may return JSON in various formats:
        - Raw JSON object
        - JSON in markdown code block (```json ... ```)
        - JSON with surrounding text

        Returns:
            Parsed dict, or None if no object could be parsed.
        """
        text = response_text.strip()

        fence_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
        if fence_match:
            text = fence_match.group(1).strip()

        object_match = re.search(r"\{[\s\S]*\}", text)
        if object_match:
            text = object_match.group(0)

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            return None

        return parsed if isinstance(parsed, dict) else None
