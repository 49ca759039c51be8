# addrverify/service_layer/verification.py
from __future__ import annotations

import logging
from typing import Any

from ..adapters.clients.base import AddressOracle
from ..domain.address import is_blank
from ..domain.prompt import precompute
from ..domain.types import Precomputation, VerificationResult, VerificationState
from ..exceptions import InvalidAddressInput, InvalidTransition, OracleError
from ..integrations.webhook import DeliveryReport, ResultSink

log = logging.getLogger(__name__)

_TRANSITIONS: dict[VerificationState, set[VerificationState]] = {
    VerificationState.idle: {VerificationState.in_flight, VerificationState.failed},
    VerificationState.in_flight: {VerificationState.succeeded, VerificationState.failed},
    VerificationState.succeeded: {VerificationState.in_flight, VerificationState.failed},
    VerificationState.failed: {VerificationState.in_flight, VerificationState.failed},
}


async def verify_addresses(
    address1: str,
    address2: str,
    oracle: AddressOracle,
    precomputation: Precomputation | None = None,
) -> VerificationResult:
    """
    validate -> normalize -> distance -> oracle.

    Raises InvalidAddressInput before any network call, OracleError if the
    oracle fails. No retries.
    """
    if is_blank(address1) or is_blank(address2):
        raise InvalidAddressInput()

    pre = precomputation or precompute(address1, address2)
    log.info(
        "verifying addresses distance=%s similarity=%.2f",
        pre.distance,
        pre.similarity,
    )
    return await oracle.verify(address1, address2, pre)


class VerificationSession:
    """
    Lifecycle of one user-triggered comparison.

      idle -> in_flight -> succeeded | failed
      succeeded | failed -> in_flight   (retry)
      idle | succeeded | failed -> failed   (blank input, never while in_flight)
    """

    def __init__(self) -> None:
        self.state = VerificationState.idle
        self.result: VerificationResult | None = None
        self.error: str | None = None
        self.precomputation: Precomputation | None = None

    def _move(self, target: VerificationState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransition(self.state.value, target.value)
        self.state = target

    def start(self) -> None:
        self._move(VerificationState.in_flight)
        self.result = None
        self.error = None

    def succeed(self, result: VerificationResult) -> None:
        self._move(VerificationState.succeeded)
        self.result = result
        self.error = None

    def fail(self, message: str) -> None:
        self._move(VerificationState.failed)
        self.result = None
        self.error = message

    @property
    def is_loading(self) -> bool:
        return self.state == VerificationState.in_flight

    def reject_blank(self) -> None:
        # validation failures never interrupt a pending oracle call
        if self.state == VerificationState.in_flight:
            raise InvalidTransition(self.state.value, VerificationState.failed.value)
        self.precomputation = None
        self.fail(str(InvalidAddressInput()))

    async def run(self, address1: str, address2: str, oracle: AddressOracle) -> "VerificationSession":
        """
        Drive one comparison. Validation and oracle failures end in `failed`,
        never raise. Calling it again while a comparison is pending is
        InvalidTransition, same as a second start().
        """
        if is_blank(address1) or is_blank(address2):
            self.reject_blank()
            return self

        self.start()
        self.precomputation = precompute(address1, address2)
        try:
            result = await verify_addresses(address1, address2, oracle, precomputation=self.precomputation)
        except OracleError as e:
            self.fail(str(e))
            return self

        self.succeed(result)
        return self

    def outcome_payload(self) -> dict[str, Any]:
        """What gets broadcast: the verdict, or {'error': message}."""
        if self.state == VerificationState.succeeded and self.result is not None:
            return self.result.to_dict()
        if self.state == VerificationState.failed:
            return {"error": self.error or ""}
        raise InvalidTransition(self.state.value, "broadcast")

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "precomputation": (
                {**self.precomputation.to_payload(), "similarity": round(self.precomputation.similarity, 2)}
                if self.precomputation
                else None
            ),
        }


async def broadcast_outcome(session: VerificationSession, sink: ResultSink) -> DeliveryReport:
    res = await sink.send(session.outcome_payload())
    if not res.ok:
        log.warning("verification result not delivered: %s", res.error)
    return res
