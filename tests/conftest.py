# tests/conftest.py
from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from addrverify.config import Settings
from addrverify.domain.types import Precomputation, VerificationResult
from addrverify.entrypoints.fastapi_app import create_app
from addrverify.exceptions import OracleError
from addrverify.integrations.webhook import DeliveryReport

ADDRESS_1 = "456 Oak Avenue, Springfield, IL 62704"
ADDRESS_2 = "456 Oak Ave, Springfield, Illinois 62704"


class FakeOracle:
    """Records every call; returns a fixed verdict or raises OracleError."""

    def __init__(self, result: VerificationResult | None = None, fail: bool = False) -> None:
        self.result = result or VerificationResult(are_same=True, reasoning="Same street, city and ZIP.")
        self.fail = fail
        self.calls: list[tuple[str, str, Precomputation]] = []

    async def verify(self, address1: str, address2: str, precomputation: Precomputation) -> VerificationResult:
        self.calls.append((address1, address2, precomputation))
        if self.fail:
            raise OracleError()
        return self.result


class RecordingSink:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.delivered: list[dict[str, Any]] = []

    async def send(self, outcome: dict[str, Any]) -> DeliveryReport:
        self.delivered.append(outcome)
        if self.ok:
            return DeliveryReport(ok=True, status_code=204)
        return DeliveryReport(ok=False, status_code=502, error="HTTP 502: bad gateway")


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "ORACLE_MODE": "direct",
        "GEMINI_API_KEY": "test-key",
        "STRICT_STARTUP": False,
        "CALLBACK_ALLOWED_ORIGINS": ["https://parent.test"],
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def client(oracle: FakeOracle, sink: RecordingSink) -> TestClient:
    app = create_app(make_settings(), oracle=oracle, sink_factory=lambda url: sink)
    return TestClient(app)
