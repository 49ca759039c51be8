# addrverify/domain/parsing.py
from __future__ import annotations

import json
from typing import Any

from .types import VerificationResult


def parse_verdict(payload: Any) -> VerificationResult:
    """
    Strict: areSame must be a real bool and reasoning a string.
    Raises ValueError otherwise.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ValueError(f"verdict_not_json: {e}") from e

    if not isinstance(payload, dict):
        raise ValueError(f"verdict_not_object: {type(payload).__name__}")

    are_same = payload.get("areSame")
    reasoning = payload.get("reasoning")
    if not isinstance(are_same, bool):
        raise ValueError("verdict_missing_areSame")
    if not isinstance(reasoning, str):
        raise ValueError("verdict_missing_reasoning")

    return VerificationResult(are_same=are_same, reasoning=reasoning)
