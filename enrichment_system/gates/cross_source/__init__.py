"""Cross-source truth verification (Gate 4).

Checks aggregated product data against the independent sources it was
merged from:

1. Field conflicts between sources, classified EQUIVALENT/COMPATIBLE/CONFLICT
2. Every claim in the aggregated description, checked against every source
3. Overall verdict and confidence
4. Utilities to resolve conflicts by source trust and strip contradicted claims

Modules:
- ConflictDetector (field disagreements)
- ClaimVerifier (claim support/contradiction)
- CrossSourceTruthGate (composition, verdict)
- GeminiComparator (LLM-backed SemanticComparator)
"""

from enrichment_system.gates.cross_source.claim_verifier import (
    ClaimVerifier,
    verify_description_claims,
)
from enrichment_system.gates.cross_source.comparator import (
    ComparatorError,
    ComparatorResponseError,
    SemanticComparator,
)
from enrichment_system.gates.cross_source.conflict_detector import (
    ConflictDetector,
    detect_field_conflicts,
)
from enrichment_system.gates.cross_source.gate import (
    CrossSourceTruthGate,
    verify_cross_source_truth,
)
from enrichment_system.gates.cross_source.gemini_comparator import GeminiComparator
from enrichment_system.gates.cross_source.resolution import (
    ClaimSentenceMatcher,
    WordOverlapMatcher,
    filter_contradicted_claims,
    resolve_conflicts,
)
from enrichment_system.gates.cross_source.schemas import (
    AggregatedData,
    ClaimImportance,
    ClaimSupport,
    ClaimVerdict,
    ConfidenceLevel,
    ConflictResolution,
    ConflictResolutionResult,
    EquivalenceResult,
    ExtractedClaim,
    ExtractedData,
    FieldConflict,
    Gate4Result,
    Gate4Summary,
    Gate4Verdict,
    SourceValue,
    TruthCheck,
)
from enrichment_system.gates.cross_source.trust import SourceTrustTable
from enrichment_system.gates.cross_source.verdict import (
    calculate_gate4_confidence,
    get_gate4_summary,
)

__all__ = [
    "ClaimVerifier",
    "ConflictDetector",
    "CrossSourceTruthGate",
    "GeminiComparator",
    "SemanticComparator",
    "ComparatorError",
    "ComparatorResponseError",
    "SourceTrustTable",
    "ClaimSentenceMatcher",
    "WordOverlapMatcher",
    "verify_cross_source_truth",
    "detect_field_conflicts",
    "verify_description_claims",
    "resolve_conflicts",
    "filter_contradicted_claims",
    "calculate_gate4_confidence",
    "get_gate4_summary",
    "AggregatedData",
    "ClaimImportance",
    "ClaimSupport",
    "ClaimVerdict",
    "ConfidenceLevel",
    "ConflictResolution",
    "ConflictResolutionResult",
    "EquivalenceResult",
    "ExtractedClaim",
    "ExtractedData",
    "FieldConflict",
    "Gate4Result",
    "Gate4Summary",
    "Gate4Verdict",
    "SourceValue",
    "TruthCheck",
]
