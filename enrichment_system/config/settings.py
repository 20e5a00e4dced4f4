"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        gemini_api_key: Google Gemini API key (required for the Gemini comparator)
        gemini_model: Text model used for equivalence/claim comparisons
        comparator_temperature: Sampling temperature for comparator prompts
        llm_max_retries: Attempts per Gemini call before the error propagates
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        source_excerpt_chars: Prefix of each source's raw extract sent for claim checks
        comparator_concurrency: Max in-flight comparator calls per gate run
        claim_overlap_threshold: Word-overlap ratio that marks a sentence as a claim match
        claim_min_word_length: Shortest word counted as significant in overlap matching
    """

    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini text model identifier for comparisons"
    )
    comparator_temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Low temperature keeps verification answers deterministic"
    )
    llm_max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per Gemini call (exponential backoff between)"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    source_excerpt_chars: int = Field(
        default=4000,
        gt=0,
        description="Characters of raw source evidence sent per claim check"
    )
    comparator_concurrency: int = Field(
        default=5,
        ge=1,
        description="Bounded concurrency for comparator fan-out"
    )
    claim_overlap_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Word overlap ratio at which a sentence is dropped for a contradicted claim"
    )
    claim_min_word_length: int = Field(
        default=4,
        ge=1,
        description="Minimum characters for a claim word to count toward overlap"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance - import this throughout the application
settings = Settings()
