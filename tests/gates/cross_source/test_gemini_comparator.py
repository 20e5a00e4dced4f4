"""Tests for GeminiComparator.

Tests cover:
- Prompt rendering and JSON parsing (raw, fenced, surrounded by text)
- Malformed responses raise ComparatorResponseError (never defaulted)
- Client failures wrapped as ComparatorError
- Single-value equivalence short-circuit, blank-claim dropping, excerpt cap
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from enrichment_system.gates.cross_source.comparator import (
    ComparatorError,
    ComparatorResponseError,
    SemanticComparator,
)
from enrichment_system.gates.cross_source.gemini_comparator import GeminiComparator
from enrichment_system.gates.cross_source.schemas import ClaimImportance


def _client(response) -> MagicMock:
    """Client whose generate_content returns ``response`` (dicts as JSON)."""
    client = MagicMock()
    text = json.dumps(response) if isinstance(response, dict) else response
    client.generate_content = AsyncMock(return_value=text)
    return client


class TestCheckEquivalence:
    @pytest.mark.asyncio
    async def test_parses_camel_case_response(self) -> None:
        client = _client(
            {
                "allEquivalent": True,
                "compatible": True,
                "resolvedValue": "50mm",
                "reasoning": "2 inch is ~50.8mm",
            }
        )
        comparator = GeminiComparator(client=client)

        result = await comparator.check_equivalence(["50mm", "2 inch"])

        assert result.all_equivalent is True
        assert result.resolved_value == "50mm"
        prompt = client.generate_content.call_args.args[0]
        assert '1. "50mm"' in prompt
        assert '2. "2 inch"' in prompt

    @pytest.mark.asyncio
    async def test_fenced_json(self) -> None:
        client = _client(
            'Here you go:\n```json\n{"allEquivalent": false, "compatible": false, '
            '"resolvedValue": null, "reasoning": "different"}\n```'
        )

        result = await GeminiComparator(client=client).check_equivalence(["Steel", "Plastic"])

        assert result.all_equivalent is False
        assert result.compatible is False
        assert result.resolved_value is None

    @pytest.mark.asyncio
    async def test_single_value_short_circuits(self) -> None:
        client = _client({})
        comparator = GeminiComparator(client=client)

        result = await comparator.check_equivalence(["50mm"])

        assert result.all_equivalent is True
        assert result.resolved_value == "50mm"
        client.generate_content.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            "I think they are the same.",
            "[1, 2, 3]",
            '{"compatible": true}',
            '{"allEquivalent": "maybe"}',
        ],
    )
    async def test_malformed_response_raises(self, response: str) -> None:
        comparator = GeminiComparator(client=_client(response))

        with pytest.raises(ComparatorResponseError) as exc_info:
            await comparator.check_equivalence(["a", "b"])

        assert exc_info.value.operation == "check_equivalence"

    @pytest.mark.asyncio
    async def test_missing_compatible_raises(self) -> None:
        client = _client({"allEquivalent": False, "resolvedValue": None, "reasoning": "x"})

        with pytest.raises(ComparatorResponseError):
            await GeminiComparator(client=client).check_equivalence(["50mm", "60mm"])


class TestExtractClaims:
    @pytest.mark.asyncio
    async def test_claims_parsed_and_blank_dropped(self) -> None:
        client = _client(
            {
                "claims": [
                    {"claim": "Made of galvanized steel", "importance": "HIGH"},
                    {"claim": "   ", "importance": "low"},
                    {"claim": "Fits 50mm rebar", "importance": "critical"},
                ]
            }
        )

        claims = await GeminiComparator(client=client).extract_claims("Some description")

        assert [c.claim for c in claims] == ["Made of galvanized steel", "Fits 50mm rebar"]
        assert claims[0].importance == ClaimImportance.HIGH
        assert claims[1].importance == ClaimImportance.MEDIUM
        assert "Some description" in client.generate_content.call_args.args[0]

    @pytest.mark.asyncio
    async def test_missing_claims_key_raises(self) -> None:
        comparator = GeminiComparator(client=_client({"items": []}))

        with pytest.raises(ComparatorResponseError):
            await comparator.extract_claims("text")


class TestVerifyClaim:
    @pytest.mark.asyncio
    async def test_source_truncated_to_excerpt(self) -> None:
        client = _client({"supports": True, "contradicts": False, "neutral": False})
        comparator = GeminiComparator(client=client, excerpt_chars=20)

        support = await comparator.verify_claim("Rated outdoors", "A" * 20 + "TAILMARKER")

        assert support.supports is True
        prompt = client.generate_content.call_args.args[0]
        assert "A" * 20 in prompt
        assert "TAILMARKER" not in prompt

    @pytest.mark.asyncio
    async def test_missing_flags_raise(self) -> None:
        comparator = GeminiComparator(client=_client({"neutral": True}))

        with pytest.raises(ComparatorResponseError):
            await comparator.verify_claim("claim", "source")


class TestClientFailures:
    @pytest.mark.asyncio
    async def test_client_exception_wrapped(self) -> None:
        client = MagicMock()
        client.generate_content = AsyncMock(side_effect=RuntimeError("503 unavailable"))

        with pytest.raises(ComparatorError, match="503 unavailable") as exc_info:
            await GeminiComparator(client=client).verify_claim("claim", "source")

        assert not isinstance(exc_info.value, ComparatorResponseError)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_empty_response_raises(self) -> None:
        comparator = GeminiComparator(client=_client(""))

        with pytest.raises(ComparatorResponseError):
            await comparator.extract_claims("text")

    def test_satisfies_protocol(self) -> None:
        assert isinstance(GeminiComparator(client=MagicMock()), SemanticComparator)


class TestExtractJsonObject:
    def test_raw_object(self) -> None:
        assert GeminiComparator._extract_json_object('{"a": 1}') == {"a": 1}

    def test_surrounding_text(self) -> None:
        text = 'Answer: {"supports": true, "contradicts": false} hope that helps'
        assert GeminiComparator._extract_json_object(text) == {
            "supports": True,
            "contradicts": False,
        }

    def test_invalid(self) -> None:
        assert GeminiComparator._extract_json_object("{not json}") is None
