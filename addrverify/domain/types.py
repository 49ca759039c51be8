# addrverify/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .similarity import similarity_percent


class VerificationState(str, Enum):
    idle = "idle"
    in_flight = "in_flight"
    succeeded = "succeeded"
    failed = "failed"


@dataclass(frozen=True)
class Precomputation:
    normalized_address1: str
    normalized_address2: str
    distance: int

    @property
    def similarity(self) -> float:
        return similarity_percent(self.normalized_address1, self.normalized_address2, self.distance)

    def to_payload(self) -> dict[str, Any]:
        """Wire form shared by the proxy endpoint and its callers."""
        return {
            "normalizedAddress1": self.normalized_address1,
            "normalizedAddress2": self.normalized_address2,
            "levenshteinDistance": self.distance,
        }


@dataclass(frozen=True)
class VerificationResult:
    are_same: bool
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return {"areSame": self.are_same, "reasoning": self.reasoning}
