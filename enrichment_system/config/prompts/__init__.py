"""Prompt templates for LLM-backed comparators.

Modules:
    cross_source_prompts: Equivalence, claim extraction and claim
        verification prompts used by the Gate 4 Gemini comparator
"""

from enrichment_system.config.prompts.cross_source_prompts import (
    EQUIVALENCE_PROMPT,
    CLAIM_EXTRACTION_PROMPT,
    CLAIM_VERIFICATION_PROMPT,
)

__all__ = [
    "EQUIVALENCE_PROMPT",
    "CLAIM_EXTRACTION_PROMPT",
    "CLAIM_VERIFICATION_PROMPT",
]
