"""Cross-source truth verification (Gate 4) domain schemas.

Defines the inputs (per-source extractions and the aggregated record), the
per-field conflict and per-claim truth check records, the gate result, and
the response models the semantic comparator must return.

Invariants enforced here:
- A TruthCheck verdict always agrees with its supported_by/contradicted_by
  lists (contradiction is sticky and cannot be outvoted)
- Comparator responses are validated; a malformed response is an error,
  never a silent default
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ConflictResolution(str, Enum):
    """How a disagreement between sources on one field was classified.

    EQUIVALENT: Different wording of the same fact (unit/format variants).
    COMPATIBLE: Not contradictory, but not interchangeable (e.g. specificity).
    CONFLICT: Sources genuinely disagree.
    """

    EQUIVALENT = "EQUIVALENT"
    COMPATIBLE = "COMPATIBLE"
    CONFLICT = "CONFLICT"


class ClaimVerdict(str, Enum):
    """Outcome of checking one description claim against every source."""

    VERIFIED = "VERIFIED"
    CONTRADICTED = "CONTRADICTED"
    UNVERIFIED = "UNVERIFIED"


class Gate4Verdict(str, Enum):
    """Overall verdict of a gate run."""

    ALL_VERIFIED = "ALL_VERIFIED"
    SOME_UNVERIFIED = "SOME_UNVERIFIED"
    CONFLICTS_FOUND = "CONFLICTS_FOUND"


class ConfidenceLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ClaimImportance(str, Enum):
    """Importance marker attached to an extracted claim.

    Carried for future prioritization; verdict logic ignores it.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ── Gate inputs ──────────────────────────────────────────────────────────


class ExtractedData(BaseModel):
    """Product data extracted from one independent source.

    Produced upstream by the extraction step; immutable input to the gate.
    """

    source_url: str = Field(..., description="Provenance URL, also keys the trust lookup")
    product_name: Optional[str] = Field(default=None, description="Product name as the source states it")
    description: Optional[str] = Field(default=None, description="Product description from the source")
    specifications: dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Field name -> value; keys vary per source",
    )
    related_products: list[str] = Field(default_factory=list)
    installation_info: Optional[str] = Field(default=None)
    certifications: list[str] = Field(default_factory=list)
    raw_extract: str = Field(
        default="",
        description="Original source text, used as grounding evidence for claim checks",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "source_url": "https://www.ferguson.com/product/spacer-bar-50mm",
                    "product_name": "50mm Spacer Bar",
                    "description": "Galvanized steel spacer bar for rebar support.",
                    "specifications": {"material": "Galvanized Steel", "width": "50mm"},
                    "raw_extract": "50mm Spacer Bar. Material: galvanized steel. Width 50 mm.",
                }
            ]
        },
    }


class AggregatedData(BaseModel):
    """Merged record whose fields and description the gate checks."""

    product_name: Optional[str] = Field(default=None)
    description: Optional[str] = Field(
        default=None,
        description="Candidate description whose claims must be verified",
    )
    specifications: dict[str, str] = Field(default_factory=dict)
    sources: list[str] = Field(
        default_factory=list,
        description="Source URLs the merge step drew from",
    )


# ── Gate outputs ─────────────────────────────────────────────────────────


class SourceValue(BaseModel):
    """One source's non-empty value for a field."""

    source: str
    value: str


class FieldConflict(BaseModel):
    """Disagreement between two or more sources on one field.

    Only emitted when at least two sources gave a non-blank value and the
    values are not all identical case-insensitively. Equivalent values with
    distinct wording are still recorded for auditability.
    """

    field: str = Field(..., description="productName, description, or a specifications key")
    values: list[SourceValue] = Field(
        ..., description="Contributing values in extraction order"
    )
    resolution: ConflictResolution
    resolved_value: Optional[str] = Field(
        default=None,
        description="Canonical value from the comparator; None for hard conflicts",
    )
    reasoning: str = Field(default="", description="Comparator's explanation")


class TruthCheck(BaseModel):
    """Result of verifying one atomic claim against every source."""

    claim: str
    supported_by: list[str] = Field(default_factory=list)
    contradicted_by: list[str] = Field(default_factory=list)
    verdict: ClaimVerdict

    @model_validator(mode="after")
    def verdict_matches_sources(self) -> "TruthCheck":
        """Reject a verdict that disagrees with the source lists."""
        expected = verdict_for(self.supported_by, self.contradicted_by)
        if self.verdict != expected:
            raise ValueError(
                f"verdict {self.verdict.value} inconsistent with sources "
                f"(expected {expected.value})"
            )
        return self

    @classmethod
    def from_sources(
        cls,
        claim: str,
        supported_by: list[str],
        contradicted_by: list[str],
    ) -> "TruthCheck":
        return cls(
            claim=claim,
            supported_by=supported_by,
            contradicted_by=contradicted_by,
            verdict=verdict_for(supported_by, contradicted_by),
        )


def verdict_for(supported_by: list[str], contradicted_by: list[str]) -> ClaimVerdict:
    """Any contradiction wins; otherwise any support verifies."""
    if contradicted_by:
        return ClaimVerdict.CONTRADICTED
    if supported_by:
        return ClaimVerdict.VERIFIED
    return ClaimVerdict.UNVERIFIED


class Gate4Result(BaseModel):
    """Outcome of one cross-source truth verification run."""

    passed: bool
    conflicts: list[FieldConflict] = Field(default_factory=list)
    truth_checks: list[TruthCheck] = Field(default_factory=list)
    overall_verdict: Gate4Verdict

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "passed": False,
                    "conflicts": [],
                    "truth_checks": [
                        {
                            "claim": "Rated for outdoor use",
                            "supported_by": ["https://ndspro.com/spacer"],
                            "contradicted_by": ["https://homedepot.com/spacer"],
                            "verdict": "CONTRADICTED",
                        }
                    ],
                    "overall_verdict": "CONFLICTS_FOUND",
                }
            ]
        }
    }


class Gate4Summary(BaseModel):
    """Plain tallies over a Gate4Result."""

    conflicts_resolved: int = 0
    conflicts_unresolved: int = 0
    claims_verified: int = 0
    claims_unverified: int = 0
    claims_contradicted: int = 0


class ConflictResolutionResult(BaseModel):
    """Fields resolved to a single value, and conflicts left for the caller."""

    resolved: dict[str, str] = Field(default_factory=dict)
    unresolved: list[FieldConflict] = Field(default_factory=list)


# ── Comparator responses ─────────────────────────────────────────────────


class EquivalenceResult(BaseModel):
    """Answer to "are these values the same fact?"."""

    all_equivalent: bool = Field(..., alias="allEquivalent")
    compatible: bool = Field(..., description="No contradiction, even if not interchangeable")
    resolved_value: Optional[str] = Field(default=None, alias="resolvedValue")
    reasoning: str = Field(default="")

    model_config = {"populate_by_name": True}

    @field_validator("resolved_value", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("reasoning", mode="before")
    @classmethod
    def none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @model_validator(mode="after")
    def equivalent_implies_compatible(self) -> "EquivalenceResult":
        if self.all_equivalent:
            self.compatible = True
        return self


class ExtractedClaim(BaseModel):
    """One atomic factual claim pulled from a description."""

    claim: str
    importance: ClaimImportance = ClaimImportance.MEDIUM

    @field_validator("importance", mode="before")
    @classmethod
    def normalize_importance(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            if value in {item.value for item in ClaimImportance}:
                return value
        return ClaimImportance.MEDIUM


class ClaimExtractionResponse(BaseModel):
    claims: list[ExtractedClaim]


class ClaimSupport(BaseModel):
    """Whether one source supports, contradicts, or is neutral to a claim."""

    supports: bool
    contradicts: bool
    neutral: bool = False
    reasoning: str = Field(default="")

    @field_validator("reasoning", mode="before")
    @classmethod
    def none_to_empty(cls, value: object) -> object:
        return "" if value is None else value
