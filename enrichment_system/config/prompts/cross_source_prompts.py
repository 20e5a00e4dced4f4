"""Prompt templates for the cross-source truth verification comparators.

Three prompts back the SemanticComparator capability:
- Equivalence: are several field values the same fact (unit/format/wording)?
- Claim extraction: split a product description into atomic factual claims
- Claim verification: does one source's evidence support/contradict a claim?

All prompts demand a single JSON object so the response can be validated
against the comparator response models. Literal braces are doubled because
the templates are rendered with str.format().
"""

EQUIVALENCE_PROMPT = """You are a unit conversion and equivalence expert. Determine if these values are equivalent.

## Values to Compare
{numbered_values}

## Task
Determine if all these values represent the SAME measurement or property:
1. Check for unit conversions (mm vs inches, kg vs lb)
2. Check for formatting differences ("50 mm" vs "50mm")
3. Check for semantic equivalence ("galvanized" vs "zinc-coated")

Values are "compatible" when they do not contradict each other but are not
fully interchangeable (for example one value is more specific than another).

## Response (JSON only)
{{
  "allEquivalent": true/false,
  "compatible": true/false,
  "resolvedValue": "The normalized/standard value or null if they conflict",
  "reasoning": "Brief explanation of why they are/aren't equivalent"
}}"""

CLAIM_EXTRACTION_PROMPT = """Extract factual claims from this product description that can be verified.

## Description
{description}

## Task
Break down the description into individual factual claims. Focus on:
1. Material claims (what it's made of)
2. Dimension/size claims
3. Performance claims (load capacity, durability)
4. Certification claims
5. Usage/application claims

Ignore marketing language and subjective statements.

## Response (JSON only)
{{
  "claims": [
    {{ "claim": "The specific claim", "importance": "high/medium/low" }}
  ]
}}"""

CLAIM_VERIFICATION_PROMPT = """You are a fact-checking expert. Verify if the following claim is supported by the source content.

## Claim
{claim}

## Source Content
{source}

## Task
Determine if the source content:
1. SUPPORTS the claim (explicitly states or strongly implies it)
2. CONTRADICTS the claim (states the opposite or incompatible information)
3. Is NEUTRAL (doesn't address the claim at all)

## Response (JSON only)
{{
  "supports": true/false,
  "contradicts": true/false,
  "neutral": true/false,
  "reasoning": "Brief explanation"
}}"""
