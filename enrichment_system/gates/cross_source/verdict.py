"""Overall verdict, confidence level and summary tallies for a gate run.

Verdict:
- any CONFLICT field or CONTRADICTED claim -> CONFLICTS_FOUND, fails
- else any UNVERIFIED claim -> SOME_UNVERIFIED, passes
- else -> ALL_VERIFIED, passes

Uncorroborated claims do not fail the gate; only active contradiction or
an unresolved field conflict does.
"""

from enrichment_system.gates.cross_source.schemas import (
    ClaimVerdict,
    ConfidenceLevel,
    ConflictResolution,
    FieldConflict,
    Gate4Result,
    Gate4Summary,
    Gate4Verdict,
    TruthCheck,
)

HIGH_CONFIDENCE_RATIO = 0.8
MEDIUM_CONFIDENCE_RATIO = 0.5


def build_gate4_result(
    conflicts: list[FieldConflict],
    truth_checks: list[TruthCheck],
) -> Gate4Result:
    has_unresolved_conflicts = any(
        c.resolution == ConflictResolution.CONFLICT for c in conflicts
    )
    has_contradictions = any(
        t.verdict == ClaimVerdict.CONTRADICTED for t in truth_checks
    )
    has_unverified = any(t.verdict == ClaimVerdict.UNVERIFIED for t in truth_checks)

    if has_unresolved_conflicts or has_contradictions:
        overall_verdict = Gate4Verdict.CONFLICTS_FOUND
        passed = False
    elif has_unverified:
        overall_verdict = Gate4Verdict.SOME_UNVERIFIED
        passed = True
    else:
        overall_verdict = Gate4Verdict.ALL_VERIFIED
        passed = True

    return Gate4Result(
        passed=passed,
        conflicts=conflicts,
        truth_checks=truth_checks,
        overall_verdict=overall_verdict,
    )


def calculate_gate4_confidence(result: Gate4Result) -> ConfidenceLevel:
    """Confidence in a gate result.

    A failed gate is always LOW. Zero claims is MEDIUM, since absence of
    claims is not evidence of correctness. Otherwise the share of VERIFIED
    claims decides, and HIGH additionally requires no field conflicts of
    any resolution.
    """
    if not result.passed:
        return ConfidenceLevel.LOW

    total_checks = len(result.truth_checks)
    if total_checks == 0:
        return ConfidenceLevel.MEDIUM

    verified_count = sum(
        1 for t in result.truth_checks if t.verdict == ClaimVerdict.VERIFIED
    )
    verification_ratio = verified_count / total_checks

    if verification_ratio >= HIGH_CONFIDENCE_RATIO and not result.conflicts:
        return ConfidenceLevel.HIGH
    if verification_ratio >= MEDIUM_CONFIDENCE_RATIO:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def get_gate4_summary(result: Gate4Result) -> Gate4Summary:
    resolutions = [c.resolution for c in result.conflicts]
    verdicts = [t.verdict for t in result.truth_checks]

    return Gate4Summary(
        conflicts_resolved=sum(
            1
            for r in resolutions
            if r in (ConflictResolution.EQUIVALENT, ConflictResolution.COMPATIBLE)
        ),
        conflicts_unresolved=resolutions.count(ConflictResolution.CONFLICT),
        claims_verified=verdicts.count(ClaimVerdict.VERIFIED),
        claims_unverified=verdicts.count(ClaimVerdict.UNVERIFIED),
        claims_contradicted=verdicts.count(ClaimVerdict.CONTRADICTED),
    )
