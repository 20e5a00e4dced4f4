"""Applies Gate 4 to an aggregated product record.

Runs the cross-source gate after aggregation and turns its result into a
cleaned record: resolved field conflicts are written back, and sentences
carrying contradicted claims are stripped from the description. What the
step adapted is recorded as human-readable notes.

A gate failure (comparator error) does not abort enrichment: it is logged,
recorded on the outcome, and the aggregated record is used as-is.

Usage:
    from enrichment_system.pipeline import CrossSourcePipeline

    pipeline = CrossSourcePipeline()
    outcome = await pipeline.run(extractions, aggregated)
    outcome.aggregated  # cleaned copy
"""

from typing import Optional

from pydantic import BaseModel, Field

from enrichment_system.gates.cross_source.comparator import SemanticComparator
from enrichment_system.gates.cross_source.conflict_detector import (
    DESCRIPTION_FIELD,
    PRODUCT_NAME_FIELD,
)
from enrichment_system.gates.cross_source.gate import CrossSourceTruthGate
from enrichment_system.gates.cross_source.resolution import (
    ClaimSentenceMatcher,
    filter_contradicted_claims,
    resolve_conflicts,
)
from enrichment_system.gates.cross_source.schemas import (
    AggregatedData,
    ClaimVerdict,
    ConfidenceLevel,
    ExtractedData,
    Gate4Result,
    Gate4Summary,
    Gate4Verdict,
)
from enrichment_system.gates.cross_source.trust import SourceTrustTable
from enrichment_system.gates.cross_source.verdict import (
    calculate_gate4_confidence,
    get_gate4_summary,
)
from enrichment_system.utils.logging import get_structured_logger, run_context

MIN_SOURCES_FOR_GATE = 2


class CrossSourceOutcome(BaseModel):
    """Result of the cross-source step for one product."""

    run_id: str
    aggregated: AggregatedData = Field(..., description="Cleaned copy of the aggregated record")
    gate_result: Gate4Result
    confidence: ConfidenceLevel
    summary: Gate4Summary
    adaptations: list[str] = Field(
        default_factory=list,
        description="What the step changed or skipped, for the audit trail",
    )
    error: Optional[str] = Field(default=None, description="Gate failure, if any")


def passing_result() -> Gate4Result:
    """Result used when the gate is skipped or failed."""
    return Gate4Result(passed=True, overall_verdict=Gate4Verdict.ALL_VERIFIED)


def apply_resolved_fields(aggregated: AggregatedData, resolved: dict[str, str]) -> AggregatedData:
    """Copy of ``aggregated`` with resolved values written back."""
    specifications = dict(aggregated.specifications)
    updates: dict = {}

    for field, value in resolved.items():
        if field == PRODUCT_NAME_FIELD:
            updates["product_name"] = value
        elif field == DESCRIPTION_FIELD:
            updates["description"] = value
        else:
            specifications[field] = value

    updates["specifications"] = specifications
    return aggregated.model_copy(update=updates)


class CrossSourcePipeline:
    """Runs Gate 4 and applies its result to the aggregated record."""

    def __init__(
        self,
        gate: Optional[CrossSourceTruthGate] = None,
        comparator: Optional[SemanticComparator] = None,
        trust_table: Optional[SourceTrustTable] = None,
        claim_matcher: Optional[ClaimSentenceMatcher] = None,
    ) -> None:
        """Initialize CrossSourcePipeline.

        Args:
            gate: Pre-configured gate. Lazy-initialized if None.
            comparator: Comparator for a lazily built gate (GeminiComparator if None).
            trust_table: Trust configuration for conflict resolution.
            claim_matcher: Sentence matcher for contradicted-claim filtering.
        """
        self._gate = gate
        self._comparator = comparator
        self.trust_table = trust_table or SourceTrustTable()
        self.claim_matcher = claim_matcher

    def _get_gate(self) -> CrossSourceTruthGate:
        """Lazy-init gate with the configured comparator."""
        if self._gate is None:
            comparator = self._comparator
            if comparator is None:
                from enrichment_system.gates.cross_source.gemini_comparator import (
                    GeminiComparator,
                )

                comparator = GeminiComparator()
            self._gate = CrossSourceTruthGate(comparator)
        return self._gate

    async def run(
        self,
        extractions: list[ExtractedData],
        aggregated: AggregatedData,
    ) -> CrossSourceOutcome:
        """Apply Gate 4 to one aggregated record; every event carries the run id."""
        with run_context() as run_id:
            return await self._run(run_id, extractions, aggregated)

    async def _run(
        self,
        run_id: str,
        extractions: list[ExtractedData],
        aggregated: AggregatedData,
    ) -> CrossSourceOutcome:
        logger = get_structured_logger("CrossSourcePipeline")

        if len(extractions) < MIN_SOURCES_FOR_GATE:
            logger.info("gate_skipped", sources=len(extractions))
            return self._outcome(
                run_id,
                aggregated,
                passing_result(),
                [f"Gate 4 skipped: {len(extractions)} source(s), need {MIN_SOURCES_FOR_GATE}"],
            )

        try:
            result = await self._get_gate().verify(extractions, aggregated)
        except Exception as e:
            logger.error("gate_failed", error=str(e), exc_info=True)
            return self._outcome(
                run_id,
                aggregated,
                passing_result(),
                ["Gate 4 error - using aggregated data as-is"],
                error=str(e),
            )

        adaptations: list[str] = []
        cleaned = aggregated

        if result.conflicts:
            resolution = resolve_conflicts(result.conflicts, extractions, self.trust_table)
            cleaned = apply_resolved_fields(cleaned, resolution.resolved)
            if resolution.resolved:
                adaptations.append(
                    f"{len(resolution.resolved)} field conflicts resolved "
                    "(comparator value or highest-trust source)"
                )
            if resolution.unresolved:
                adaptations.append(
                    f"{len(resolution.unresolved)} field conflicts left unresolved"
                )

        contradicted_count = sum(
            1 for t in result.truth_checks if t.verdict == ClaimVerdict.CONTRADICTED
        )
        if contradicted_count:
            cleaned = cleaned.model_copy(
                update={
                    "description": filter_contradicted_claims(
                        cleaned.description or "",
                        result.truth_checks,
                        self.claim_matcher,
                    )
                }
            )
            adaptations.append(
                f"{contradicted_count} contradicted claims removed from description"
            )

        outcome = self._outcome(run_id, cleaned, result, adaptations)
        logger.info(
            "gate_applied",
            verdict=result.overall_verdict.value,
            confidence=outcome.confidence.value,
            adaptations=len(adaptations),
        )
        return outcome

    @staticmethod
    def _outcome(
        run_id: str,
        aggregated: AggregatedData,
        result: Gate4Result,
        adaptations: list[str],
        error: Optional[str] = None,
    ) -> CrossSourceOutcome:
        return CrossSourceOutcome(
            run_id=run_id,
            aggregated=aggregated,
            gate_result=result,
            confidence=calculate_gate4_confidence(result),
            summary=get_gate4_summary(result),
            adaptations=adaptations,
            error=error,
        )
