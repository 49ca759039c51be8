# addrverify/adapters/clients/proxy.py
from __future__ import annotations

import logging

import httpx

from ...domain.parsing import parse_verdict
from ...domain.types import Precomputation, VerificationResult
from ...exceptions import OracleError

log = logging.getLogger(__name__)


class ProxiedOracle:
    """Proxied mode: no key on this side; the proxy endpoint calls the model."""

    def __init__(
        self,
        url: str,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self._transport = transport

    async def verify(
        self,
        address1: str,
        address2: str,
        precomputation: Precomputation,
    ) -> VerificationResult:
        payload = {
            "address1": address1,
            "address2": address2,
            "precomputation": precomputation.to_payload(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.post(self.url, json=payload)
                r.raise_for_status()
                return parse_verdict(r.json())
        except (httpx.HTTPError, ValueError) as e:
            log.warning("proxy call failed url=%s err=%s: %s", self.url, type(e).__name__, e)
            raise OracleError(
                "Failed to communicate with the verification service."
            ) from e
