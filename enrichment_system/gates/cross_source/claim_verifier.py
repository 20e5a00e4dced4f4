"""Per-claim verification of an aggregated description against every source.

Claims are extracted from the description by the comparator, then each
(claim, source) pair is checked independently against a bounded prefix of
the source's raw extract. Pairs run with bounded concurrency; results are
re-assembled in extraction order so supported_by/contradicted_by never
depend on completion order. The first failed pair fails the run and cancels
the pairs still running or queued.

Verdict rule:
- any contradicting source -> CONTRADICTED (cannot be outvoted)
- else any supporting source -> VERIFIED
- else -> UNVERIFIED
"""

from functools import partial
from typing import Optional

import structlog

from enrichment_system.config.settings import settings
from enrichment_system.gates.cross_source.comparator import SemanticComparator
from enrichment_system.gates.cross_source.schemas import (
    ClaimSupport,
    ClaimVerdict,
    ExtractedData,
    TruthCheck,
)
from enrichment_system.utils.concurrency import bounded_gather


class ClaimVerifier:
    """Checks each description claim against every source's evidence.

    Cost is O(claims x sources) comparator calls per run.
    """

    def __init__(
        self,
        comparator: SemanticComparator,
        concurrency: Optional[int] = None,
        excerpt_chars: Optional[int] = None,
    ) -> None:
        """Initialize ClaimVerifier.

        Args:
            comparator: Semantic comparator for claim extraction/verification.
            concurrency: Max concurrent verify_claim calls (defaults to settings).
            excerpt_chars: Raw extract prefix length sent per check (defaults to settings).
        """
        self.comparator = comparator
        self.concurrency = concurrency or settings.comparator_concurrency
        self.excerpt_chars = excerpt_chars or settings.source_excerpt_chars
        self._logger = structlog.get_logger().bind(component="ClaimVerifier")

    async def verify(
        self,
        description: Optional[str],
        extractions: list[ExtractedData],
    ) -> list[TruthCheck]:
        if not description or not description.strip():
            return []

        claims = await self.comparator.extract_claims(description)
        if not claims:
            self._logger.info("no_claims_extracted")
            return []

        # Row-major: index = claim_index * len(extractions) + source_index
        supports: list[ClaimSupport] = await bounded_gather(
            (
                partial(
                    self.comparator.verify_claim,
                    item.claim,
                    extraction.raw_extract[: self.excerpt_chars],
                )
                for item in claims
                for extraction in extractions
            ),
            self.concurrency,
        )

        truth_checks: list[TruthCheck] = []
        for claim_index, item in enumerate(claims):
            row = supports[claim_index * len(extractions):(claim_index + 1) * len(extractions)]
            supported_by: list[str] = []
            contradicted_by: list[str] = []

            for extraction, support in zip(extractions, row):
                if support.supports:
                    supported_by.append(extraction.source_url)
                elif support.contradicts:
                    contradicted_by.append(extraction.source_url)
                # Neutral sources are not tracked

            truth_checks.append(
                TruthCheck.from_sources(item.claim, supported_by, contradicted_by)
            )

        self._logger.info(
            "claims_verified",
            claims=len(truth_checks),
            sources=len(extractions),
            contradicted=sum(
                1 for t in truth_checks if t.verdict == ClaimVerdict.CONTRADICTED
            ),
        )
        return truth_checks


async def verify_description_claims(
    description: Optional[str],
    extractions: list[ExtractedData],
    comparator: SemanticComparator,
) -> list[TruthCheck]:
    """Functional entry point for one-off claim verification."""
    return await ClaimVerifier(comparator).verify(description, extractions)
