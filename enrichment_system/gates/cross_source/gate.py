"""Cross-source truth verification gate.

Composes conflict detection and claim verification into one Gate4Result.
Each run is independent and side-effect free over its inputs; any
comparator failure fails the whole run (no partial results).

Usage:
    from enrichment_system.gates.cross_source import CrossSourceTruthGate, GeminiComparator

    gate = CrossSourceTruthGate(GeminiComparator())
    result = await gate.verify(extractions, aggregated)
"""

from typing import Optional

import structlog

from enrichment_system.gates.cross_source.claim_verifier import ClaimVerifier
from enrichment_system.gates.cross_source.comparator import SemanticComparator
from enrichment_system.gates.cross_source.conflict_detector import ConflictDetector
from enrichment_system.gates.cross_source.schemas import (
    AggregatedData,
    ExtractedData,
    Gate4Result,
)
from enrichment_system.gates.cross_source.verdict import build_gate4_result


class CrossSourceTruthGate:
    """Gate 4: are the aggregated fields and description true across sources?"""

    def __init__(
        self,
        comparator: SemanticComparator,
        concurrency: Optional[int] = None,
        excerpt_chars: Optional[int] = None,
        conflict_detector: Optional[ConflictDetector] = None,
        claim_verifier: Optional[ClaimVerifier] = None,
    ) -> None:
        """Initialize CrossSourceTruthGate.

        Args:
            comparator: Semantic comparator shared by both stages.
            concurrency: Max concurrent comparator calls per stage.
            excerpt_chars: Raw extract prefix sent per claim check.
            conflict_detector: Pre-built detector (overrides comparator/concurrency).
            claim_verifier: Pre-built verifier (overrides comparator/concurrency).
        """
        self.comparator = comparator
        self.conflict_detector = conflict_detector or ConflictDetector(
            comparator, concurrency=concurrency
        )
        self.claim_verifier = claim_verifier or ClaimVerifier(
            comparator, concurrency=concurrency, excerpt_chars=excerpt_chars
        )
        self._logger = structlog.get_logger().bind(component="CrossSourceTruthGate")

    async def verify(
        self,
        extractions: list[ExtractedData],
        aggregated: AggregatedData,
    ) -> Gate4Result:
        self._logger.info(
            "gate_started",
            sources=len(extractions),
            spec_fields=len(aggregated.specifications),
        )

        conflicts = await self.conflict_detector.detect(extractions, aggregated)
        truth_checks = await self.claim_verifier.verify(aggregated.description, extractions)
        result = build_gate4_result(conflicts, truth_checks)

        self._logger.info(
            "gate_complete",
            verdict=result.overall_verdict.value,
            passed=result.passed,
            conflicts=len(result.conflicts),
            truth_checks=len(result.truth_checks),
        )
        return result


async def verify_cross_source_truth(
    extractions: list[ExtractedData],
    aggregated: AggregatedData,
    comparator: SemanticComparator,
) -> Gate4Result:
    """Run the gate once with default settings."""
    return await CrossSourceTruthGate(comparator).verify(extractions, aggregated)
