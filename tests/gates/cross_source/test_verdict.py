"""Tests for gate verdict, confidence and summary.

Tests cover:
- Verdict rules (CONFLICTS_FOUND dominates, SOME_UNVERIFIED still passes)
- Confidence thresholds (failed -> LOW, no claims -> MEDIUM, ratios)
- Summary tallies
"""

import pytest

from enrichment_system.gates.cross_source.schemas import (
    ConfidenceLevel,
    ConflictResolution,
    FieldConflict,
    Gate4Result,
    Gate4Verdict,
    SourceValue,
    TruthCheck,
)
from enrichment_system.gates.cross_source.verdict import (
    build_gate4_result,
    calculate_gate4_confidence,
    get_gate4_summary,
)


# ── Helpers ──────────────────────────────────────────────────────────────


def _conflict(resolution: ConflictResolution, field: str = "material") -> FieldConflict:
    return FieldConflict(
        field=field,
        values=[
            SourceValue(source="https://a.com", value="Steel"),
            SourceValue(source="https://b.com", value="steel alloy"),
        ],
        resolution=resolution,
        resolved_value=None if resolution == ConflictResolution.CONFLICT else "Steel",
        reasoning="test",
    )


def _verified(claim: str = "claim") -> TruthCheck:
    return TruthCheck.from_sources(claim, ["https://a.com"], [])


def _unverified(claim: str = "claim") -> TruthCheck:
    return TruthCheck.from_sources(claim, [], [])


def _contradicted(claim: str = "claim") -> TruthCheck:
    return TruthCheck.from_sources(claim, ["https://a.com"], ["https://b.com"])


# ── Verdict ──────────────────────────────────────────────────────────────


class TestBuildGate4Result:
    def test_empty_run_is_all_verified(self) -> None:
        result = build_gate4_result([], [])
        assert result.passed is True
        assert result.overall_verdict == Gate4Verdict.ALL_VERIFIED

    def test_hard_conflict_fails(self) -> None:
        result = build_gate4_result([_conflict(ConflictResolution.CONFLICT)], [_verified()])
        assert result.passed is False
        assert result.overall_verdict == Gate4Verdict.CONFLICTS_FOUND

    def test_contradiction_fails(self) -> None:
        result = build_gate4_result([], [_verified("a"), _contradicted("b")])
        assert result.passed is False
        assert result.overall_verdict == Gate4Verdict.CONFLICTS_FOUND

    def test_conflicts_found_dominates_unverified(self) -> None:
        result = build_gate4_result(
            [_conflict(ConflictResolution.CONFLICT)], [_unverified()]
        )
        assert result.overall_verdict == Gate4Verdict.CONFLICTS_FOUND

    def test_unverified_still_passes(self) -> None:
        result = build_gate4_result([], [_verified("a"), _unverified("b")])
        assert result.passed is True
        assert result.overall_verdict == Gate4Verdict.SOME_UNVERIFIED

    @pytest.mark.parametrize(
        "resolution", [ConflictResolution.EQUIVALENT, ConflictResolution.COMPATIBLE]
    )
    def test_resolved_conflicts_do_not_fail(self, resolution: ConflictResolution) -> None:
        result = build_gate4_result([_conflict(resolution)], [_verified()])
        assert result.passed is True
        assert result.overall_verdict == Gate4Verdict.ALL_VERIFIED


# ── Confidence ───────────────────────────────────────────────────────────


class TestCalculateGate4Confidence:
    def test_failed_is_always_low(self) -> None:
        result = Gate4Result(
            passed=False,
            truth_checks=[_verified("a"), _verified("b")],
            overall_verdict=Gate4Verdict.CONFLICTS_FOUND,
        )
        assert calculate_gate4_confidence(result) == ConfidenceLevel.LOW

    def test_no_claims_is_medium(self) -> None:
        result = build_gate4_result([], [])
        assert calculate_gate4_confidence(result) == ConfidenceLevel.MEDIUM

    def test_all_verified_no_conflicts_is_high(self) -> None:
        result = build_gate4_result([], [_verified()])
        assert calculate_gate4_confidence(result) == ConfidenceLevel.HIGH

    def test_ratio_boundary_high(self) -> None:
        checks = [_verified(str(i)) for i in range(4)] + [_unverified("x")]
        result = build_gate4_result([], checks)
        assert calculate_gate4_confidence(result) == ConfidenceLevel.HIGH

    def test_any_conflict_record_blocks_high(self) -> None:
        result = build_gate4_result([_conflict(ConflictResolution.EQUIVALENT)], [_verified()])
        assert calculate_gate4_confidence(result) == ConfidenceLevel.MEDIUM

    def test_half_verified_is_medium(self) -> None:
        result = build_gate4_result([], [_verified("a"), _unverified("b")])
        assert calculate_gate4_confidence(result) == ConfidenceLevel.MEDIUM

    def test_mostly_unverified_is_low(self) -> None:
        result = build_gate4_result(
            [], [_verified("a"), _unverified("b"), _unverified("c")]
        )
        assert calculate_gate4_confidence(result) == ConfidenceLevel.LOW


# ── Summary ──────────────────────────────────────────────────────────────


class TestGetGate4Summary:
    def test_counts(self) -> None:
        result = Gate4Result(
            passed=False,
            conflicts=[
                _conflict(ConflictResolution.EQUIVALENT, "width"),
                _conflict(ConflictResolution.COMPATIBLE, "finish"),
                _conflict(ConflictResolution.CONFLICT, "material"),
            ],
            truth_checks=[
                _verified("a"),
                _verified("b"),
                _unverified("c"),
                _contradicted("d"),
            ],
            overall_verdict=Gate4Verdict.CONFLICTS_FOUND,
        )
        summary = get_gate4_summary(result)
        assert summary.conflicts_resolved == 2
        assert summary.conflicts_unresolved == 1
        assert summary.claims_verified == 2
        assert summary.claims_unverified == 1
        assert summary.claims_contradicted == 1

    def test_empty(self) -> None:
        summary = get_gate4_summary(build_gate4_result([], []))
        assert summary.model_dump() == {
            "conflicts_resolved": 0,
            "conflicts_unresolved": 0,
            "claims_verified": 0,
            "claims_unverified": 0,
            "claims_contradicted": 0,
        }
