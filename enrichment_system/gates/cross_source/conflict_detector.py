"""Field-level conflict detection across independently extracted sources.

For every candidate field (productName, description, and each key of the
aggregated specifications) the detector gathers the non-blank values each
source reported. Fields with fewer than two values, or where every value
is identical ignoring case, produce nothing. Remaining fields are sent to
the comparator, which classifies the disagreement as EQUIVALENT,
COMPATIBLE or CONFLICT.

Comparator failures propagate: a field that could not be evaluated fails
the run rather than disappearing from the result, and cancels the
comparisons still in flight.
"""

from functools import partial
from typing import Optional

import structlog

from enrichment_system.config.settings import settings
from enrichment_system.gates.cross_source.comparator import SemanticComparator
from enrichment_system.gates.cross_source.schemas import (
    AggregatedData,
    ConflictResolution,
    ExtractedData,
    FieldConflict,
    SourceValue,
)
from enrichment_system.utils.concurrency import bounded_gather

PRODUCT_NAME_FIELD = "productName"
DESCRIPTION_FIELD = "description"


def candidate_fields(aggregated: AggregatedData) -> list[str]:
    """Identity fields first, then specification keys, de-duplicated in order."""
    names = [PRODUCT_NAME_FIELD, DESCRIPTION_FIELD, *aggregated.specifications.keys()]
    return list(dict.fromkeys(names))


def field_value(extraction: ExtractedData, field: str) -> Optional[str]:
    if field == PRODUCT_NAME_FIELD:
        return extraction.product_name
    if field == DESCRIPTION_FIELD:
        return extraction.description
    return extraction.specifications.get(field)


def collect_field_values(extractions: list[ExtractedData], field: str) -> list[SourceValue]:
    """Trimmed non-blank values for ``field``, in extraction order."""
    values: list[SourceValue] = []
    for extraction in extractions:
        value = field_value(extraction, field)
        if value and value.strip():
            values.append(SourceValue(source=extraction.source_url, value=value.strip()))
    return values


class ConflictDetector:
    """Detects and classifies per-field disagreements between sources."""

    def __init__(
        self,
        comparator: SemanticComparator,
        concurrency: Optional[int] = None,
    ) -> None:
        """Initialize ConflictDetector.

        Args:
            comparator: Semantic comparator answering equivalence questions.
            concurrency: Max concurrent equivalence checks (defaults to settings).
        """
        self.comparator = comparator
        self.concurrency = concurrency or settings.comparator_concurrency
        self._logger = structlog.get_logger().bind(component="ConflictDetector")

    async def detect(
        self,
        extractions: list[ExtractedData],
        aggregated: AggregatedData,
    ) -> list[FieldConflict]:
        """Return one FieldConflict per disagreeing field, in field order."""
        pending: list[tuple[str, list[SourceValue]]] = []

        for field in candidate_fields(aggregated):
            values = collect_field_values(extractions, field)
            if len(values) < 2:
                continue

            # Identical values (ignoring case) are agreement, not a conflict
            if len({v.value.lower() for v in values}) == 1:
                continue

            pending.append((field, values))

        if not pending:
            return []

        conflicts = await bounded_gather(
            (partial(self._classify_field, field, values) for field, values in pending),
            self.concurrency,
        )

        self._logger.info(
            "conflicts_detected",
            fields_compared=len(pending),
            conflicts=len(conflicts),
            hard_conflicts=sum(
                1 for c in conflicts if c.resolution == ConflictResolution.CONFLICT
            ),
        )
        return conflicts

    async def _classify_field(
        self,
        field: str,
        values: list[SourceValue],
    ) -> FieldConflict:
        equivalence = await self.comparator.check_equivalence([v.value for v in values])

        if equivalence.all_equivalent:
            resolution = ConflictResolution.EQUIVALENT
            resolved_value = equivalence.resolved_value
        elif equivalence.compatible:
            resolution = ConflictResolution.COMPATIBLE
            resolved_value = equivalence.resolved_value
        else:
            resolution = ConflictResolution.CONFLICT
            resolved_value = None

        self._logger.debug(
            "field_classified",
            field=field,
            resolution=resolution.value,
            source_count=len(values),
        )
        return FieldConflict(
            field=field,
            values=values,
            resolution=resolution,
            resolved_value=resolved_value,
            reasoning=equivalence.reasoning,
        )


async def detect_field_conflicts(
    extractions: list[ExtractedData],
    aggregated: AggregatedData,
    comparator: SemanticComparator,
) -> list[FieldConflict]:
    """Functional entry point for one-off detection."""
    return await ConflictDetector(comparator).detect(extractions, aggregated)
