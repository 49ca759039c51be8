# addrverify/domain/prompt.py
from __future__ import annotations

from typing import Any

from .address import normalize_address
from .similarity import edit_distance
from .types import Precomputation

# Gemini responseSchema (OpenAPI subset) for the verdict.
RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "areSame": {
            "type": "BOOLEAN",
            "description": "True if the addresses are the same, false otherwise.",
        },
        "reasoning": {
            "type": "STRING",
            "description": "A brief explanation for the decision.",
        },
    },
    "required": ["areSame", "reasoning"],
}


def precompute(address1: str, address2: str) -> Precomputation:
    n1 = normalize_address(address1)
    n2 = normalize_address(address2)
    return Precomputation(
        normalized_address1=n1,
        normalized_address2=n2,
        distance=edit_distance(n1, n2),
    )


def build_prompt(address1: str, address2: str, pre: Precomputation) -> str:
    return f"""
Please analyze the following two addresses and determine if they refer to the exact same physical location.
Consider common abbreviations (e.g., St. for Street, Ave for Avenue, Apt for Apartment, etc.) and formatting differences.

Address 1: "{address1}"
Address 2: "{address2}"

A preliminary client-side analysis was performed with the following results:
- Normalized Address 1 (lowercase, abbreviations expanded, punctuation removed): "{pre.normalized_address1}"
- Normalized Address 2 (lowercase, abbreviations expanded, punctuation removed): "{pre.normalized_address2}"
- Levenshtein distance between normalized addresses: {pre.distance} (A lower number means more similar).
- Calculated similarity score: {pre.similarity:.2f}%.

Based on both the original addresses and this preliminary analysis, are these addresses the same? Provide your reasoning.

Respond only with the JSON object in the specified schema.
""".strip()
