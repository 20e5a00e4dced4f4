"""Pipeline steps that apply gate results to enrichment records."""

from enrichment_system.pipeline.cross_source_pipeline import (
    CrossSourceOutcome,
    CrossSourcePipeline,
)

__all__ = ["CrossSourceOutcome", "CrossSourcePipeline"]
