"""Semantic comparator capability consumed by the cross-source gate.

The gate never reasons about meaning itself. Three black-box questions are
delegated to an injected comparator:

- check_equivalence: are these field values the same underlying fact?
- extract_claims: which atomic factual claims does this text make?
- verify_claim: does this source text support or contradict a claim?

Any backend (LLM, rule-based matcher, cached lookup) can implement the
protocol. Failures are raised, never defaulted: a comparator that cannot
answer must raise ComparatorError so the whole gate run fails instead of
producing verdicts built on guesses.
"""

from typing import Protocol, runtime_checkable

from enrichment_system.gates.cross_source.schemas import (
    ClaimSupport,
    EquivalenceResult,
    ExtractedClaim,
)


class ComparatorError(Exception):
    """A comparator call failed (backend/transport error)."""


class ComparatorResponseError(ComparatorError):
    """A comparator backend answered with an unexpected shape."""

    def __init__(self, operation: str, detail: str, raw: str = "") -> None:
        self.operation = operation
        self.raw = raw
        super().__init__(f"{operation}: {detail}")


@runtime_checkable
class SemanticComparator(Protocol):
    """Async capability interface backing conflict detection and claim checks."""

    async def check_equivalence(self, values: list[str]) -> EquivalenceResult:
        ...

    async def extract_claims(self, text: str) -> list[ExtractedClaim]:
        ...

    async def verify_claim(self, claim: str, source: str) -> ClaimSupport:
        ...
