"""Automated conflict resolution and contradicted-claim filtering.

resolve_conflicts turns FieldConflicts into a field -> value mapping:
EQUIVALENT/COMPATIBLE fields take the comparator's resolved value, falling
back to the most trusted source; hard CONFLICT fields are resolved
best-effort by trust rank too. Callers wanting strict behavior should check
the gate's overall_verdict before resolving.

filter_contradicted_claims strips description sentences matching a
contradicted claim. Matching is heuristic (word overlap) and pluggable via
ClaimSentenceMatcher; it may over- or under-remove.
"""

import re
from typing import Optional, Protocol

import structlog

from enrichment_system.config.settings import settings
from enrichment_system.gates.cross_source.schemas import (
    ClaimVerdict,
    ConflictResolution,
    ConflictResolutionResult,
    ExtractedData,
    FieldConflict,
    TruthCheck,
)
from enrichment_system.gates.cross_source.trust import SourceTrustTable

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

_logger = structlog.get_logger().bind(component="ConflictResolution")


def resolve_conflicts(
    conflicts: list[FieldConflict],
    extractions: list[ExtractedData],
    trust_table: Optional[SourceTrustTable] = None,
) -> ConflictResolutionResult:
    """Resolve each conflict to a single value where possible.

    Args:
        conflicts: FieldConflicts from a gate run.
        extractions: Source extractions (for trust lookup by source_url).
        trust_table: Domain trust configuration (defaults to the static table).

    Returns:
        ConflictResolutionResult with resolved values and leftover conflicts.
    """
    table = trust_table or SourceTrustTable()
    trust_map = table.build_trust_map(extractions)
    result = ConflictResolutionResult()

    for conflict in conflicts:
        value: Optional[str] = None

        if conflict.resolution in (
            ConflictResolution.EQUIVALENT,
            ConflictResolution.COMPATIBLE,
        ):
            value = conflict.resolved_value or table.select_highest_trust_value(
                conflict.values, trust_map
            )
        elif conflict.resolution == ConflictResolution.CONFLICT:
            value = table.select_highest_trust_value(conflict.values, trust_map)

        if value:
            result.resolved[conflict.field] = value
        else:
            result.unresolved.append(conflict)

    _logger.info(
        "conflicts_resolved",
        resolved=len(result.resolved),
        unresolved=len(result.unresolved),
    )
    return result


class ClaimSentenceMatcher(Protocol):
    """Decides whether a sentence carries a given claim."""

    def matches(self, claim: str, sentence: str) -> bool:
        ...


class WordOverlapMatcher:
    """Matches when enough of the claim's significant words occur in the sentence.

    A claim word is significant when it has at least ``min_word_length``
    characters; it counts as present when it occurs anywhere in the
    lower-cased sentence (substring match). The sentence matches when the
    present/significant ratio reaches ``threshold``. Both knobs are tunable
    heuristics, not precision guarantees.
    """

    def __init__(
        self,
        threshold: Optional[float] = None,
        min_word_length: Optional[int] = None,
    ) -> None:
        self.threshold = settings.claim_overlap_threshold if threshold is None else threshold
        self.min_word_length = min_word_length or settings.claim_min_word_length

    def significant_words(self, claim: str) -> list[str]:
        return [w for w in claim.lower().split() if len(w) >= self.min_word_length]

    def overlap_ratio(self, claim: str, sentence: str) -> float:
        words = self.significant_words(claim)
        if not words:
            return 0.0
        sentence_lower = sentence.lower()
        return sum(1 for w in words if w in sentence_lower) / len(words)

    def matches(self, claim: str, sentence: str) -> bool:
        if not self.significant_words(claim):
            return False
        return self.overlap_ratio(claim, sentence) >= self.threshold


def split_sentences(text: str) -> list[str]:
    """Split at whitespace following '.', '!' or '?'."""
    return _SENTENCE_BOUNDARY.split(text)


def filter_contradicted_claims(
    description: str,
    truth_checks: list[TruthCheck],
    matcher: Optional[ClaimSentenceMatcher] = None,
) -> str:
    """Remove sentences carrying contradicted claims from a description.

    The input is not modified; the cleaned, trimmed text is returned.
    """
    matcher = matcher or WordOverlapMatcher()
    filtered = description or ""

    contradicted = [t for t in truth_checks if t.verdict == ClaimVerdict.CONTRADICTED]
    for check in contradicted:
        sentences = split_sentences(filtered)
        kept = [s for s in sentences if not matcher.matches(check.claim, s)]
        filtered = " ".join(kept)

    return filtered.strip()
