"""Source trust ranking used to break ties when resolving field conflicts.

A SourceTrustTable is an injected configuration object (domain -> rank plus
a default) rather than a process-wide global, so callers can override trust
per tenant and tests can supply their own table. Higher rank = more trusted.
"""

from typing import Dict, Optional
from urllib.parse import urlparse

from enrichment_system.config.logging import get_logger
from enrichment_system.config.source_trust import (
    DEFAULT_TRUST_KEY,
    FALLBACK_TRUST_LEVEL,
    SOURCE_TRUST_LEVELS,
)
from enrichment_system.gates.cross_source.schemas import ExtractedData, SourceValue


class SourceTrustTable:
    """
    Maps source URLs to trust ranks by bare domain.

    Usage:
        table = SourceTrustTable()
        table.trust_for("https://www.ferguson.com/p/123")  # 8

    Attributes:
        levels: Dict mapping bare domains (and "default") to trust ranks
        default_level: Rank for unknown domains and unparseable URLs
    """

    def __init__(
        self,
        levels: Optional[Dict[str, int]] = None,
        fallback: int = FALLBACK_TRUST_LEVEL,
    ):
        """
        Initialize trust table.

        Args:
            levels: Custom domain -> rank mapping (uses defaults if None)
            fallback: Rank used when the mapping has no "default" entry
        """
        self.levels = SOURCE_TRUST_LEVELS if levels is None else levels
        self.default_level = self.levels.get(DEFAULT_TRUST_KEY, fallback)
        self.logger = get_logger("SourceTrustTable")

    def trust_for(self, source_url: str) -> int:
        """Trust rank for a source URL; never raises."""
        domain = self._extract_domain(source_url)
        if domain is None:
            self.logger.debug(f"Unparseable source URL, default trust: {source_url!r}")
            return self.default_level
        return self.levels.get(domain, self.default_level)

    def build_trust_map(self, extractions: list[ExtractedData]) -> Dict[str, int]:
        """source_url -> trust rank for every extraction."""
        return {e.source_url: self.trust_for(e.source_url) for e in extractions}

    def select_highest_trust_value(
        self,
        values: list[SourceValue],
        trust_map: Dict[str, int],
    ) -> Optional[str]:
        """
        Value from the most trusted source.

        Ties keep the first-encountered value (stable sort). Sources missing
        from trust_map get the default rank.
        """
        if not values:
            return None

        ranked = sorted(
            values,
            key=lambda v: trust_map.get(v.source, self.default_level),
            reverse=True,
        )
        return ranked[0].value

    def _extract_domain(self, source_url: str) -> Optional[str]:
        """
        Extract bare domain from a URL.

        Handles:
        - Full URLs (https://www.ferguson.com/product/123)
        - Invalid/empty strings and bare words (no scheme/host)

        Returns:
            Lowercase hostname without "www.", or None if unparseable
        """
        if not source_url:
            return None

        try:
            hostname = urlparse(source_url.strip()).hostname
        except ValueError:
            return None

        if not hostname:
            return None

        if hostname.startswith("www."):
            hostname = hostname[4:]
        return hostname
