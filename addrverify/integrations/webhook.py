# addrverify/integrations/webhook.py
from __future__ import annotations

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

log = logging.getLogger(__name__)

RESULT_EVENT = "address_verification"
SIGNATURE_HEADER = "X-Verifier-Signature"


@dataclass(frozen=True)
class DeliveryReport:
    """How a broadcast went. Failures are reported here, never raised."""

    ok: bool
    status_code: int | None = None
    error: str | None = None


class ResultSink(Protocol):
    async def send(self, outcome: dict[str, Any]) -> DeliveryReport:
        """Broadcast a verdict or {'error': message} to whoever embeds the verifier."""
        ...


class WebhookSink:
    """
    Posts {"type": "address_verification", "data": outcome} to one URL.
    With a secret, the raw body is HMAC-SHA256 signed into X-Verifier-Signature.
    """

    def __init__(
        self,
        url: str,
        secret: str | None = None,
        timeout_s: float = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.secret = secret
        self.timeout_s = timeout_s
        self._transport = transport

    def envelope(self, outcome: dict[str, Any]) -> bytes:
        return json.dumps({"type": RESULT_EVENT, "data": outcome}).encode("utf-8")

    def signature(self, body: bytes) -> str | None:
        if not self.secret:
            return None
        return hmac.new(self.secret.encode("utf-8"), body, hashlib.sha256).hexdigest()

    async def send(self, outcome: dict[str, Any]) -> DeliveryReport:
        body = self.envelope(outcome)
        headers = {"Content-Type": "application/json"}
        sig = self.signature(body)
        if sig:
            headers[SIGNATURE_HEADER] = sig

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                r = await client.post(self.url, content=body, headers=headers)
        except httpx.HTTPError as e:
            log.warning("result broadcast failed url=%s err=%s", self.url, e)
            return DeliveryReport(ok=False, error=str(e))

        if r.is_success:
            return DeliveryReport(ok=True, status_code=r.status_code)
        log.warning("result broadcast rejected url=%s status=%s", self.url, r.status_code)
        return DeliveryReport(ok=False, status_code=r.status_code, error=f"HTTP {r.status_code}: {r.text[:500]}")
