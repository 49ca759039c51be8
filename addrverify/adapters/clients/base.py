from __future__ import annotations

from typing import Protocol

from ...domain.types import Precomputation, VerificationResult


class AddressOracle(Protocol):
    """Same/different judgment from an external model, given the precomputation."""

    async def verify(
        self,
        address1: str,
        address2: str,
        precomputation: Precomputation,
    ) -> VerificationResult:
        ...
