# tests/test_verify_api.py
import pytest
from fastapi.testclient import TestClient

from addrverify.domain.prompt import precompute
from addrverify.entrypoints.fastapi_app import create_app
from addrverify.exceptions import ConfigurationError

from conftest import ADDRESS_1, ADDRESS_2, FakeOracle, make_settings


def _body() -> dict:
    return {
        "address1": ADDRESS_1,
        "address2": ADDRESS_2,
        "precomputation": precompute(ADDRESS_1, ADDRESS_2).to_payload(),
    }


def test_post_returns_oracle_verdict(client, oracle):
    r = client.post("/api/verify", json=_body())
    assert r.status_code == 200
    assert r.json() == {"areSame": True, "reasoning": "Same street, city and ZIP."}

    assert len(oracle.calls) == 1
    a1, a2, pre = oracle.calls[0]
    assert (a1, a2) == (ADDRESS_1, ADDRESS_2)
    assert pre.distance == 6
    assert pre.normalized_address2 == "456 oak avenue springfield illinois 62704"


@pytest.mark.parametrize("missing", ["address1", "address2", "precomputation"])
def test_missing_fields_are_400(client, oracle, missing):
    body = _body()
    body.pop(missing)
    r = client.post("/api/verify", json=body)
    assert r.status_code == 400
    assert oracle.calls == []


def test_empty_address_is_400(client, oracle):
    body = _body()
    body["address1"] = "  "
    assert client.post("/api/verify", json=body).status_code == 400
    assert oracle.calls == []


def test_malformed_body_is_400(client, oracle):
    r = client.post("/api/verify", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400

    body = _body()
    body["precomputation"] = {"normalizedAddress1": "a"}
    assert client.post("/api/verify", json=body).status_code == 400
    assert oracle.calls == []


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_non_post_is_405(client, oracle, method):
    r = client.request(method, "/api/verify")
    assert r.status_code == 405
    assert r.json()["detail"] == "Only POST requests are allowed"
    assert oracle.calls == []


def test_oracle_failure_is_generic_500(sink):
    failing = FakeOracle(fail=True)
    c = TestClient(create_app(make_settings(), oracle=failing, sink_factory=lambda url: sink))
    r = c.post("/api/verify", json=_body())
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to verify addresses via the backend service."


def test_missing_credential_is_500_without_oracle_call(monkeypatch):
    from addrverify.adapters.clients import gemini

    async def _never(*a, **kw):  # pragma: no cover
        raise AssertionError("oracle must not be called")

    monkeypatch.setattr(gemini.GeminiOracle, "verify", _never)

    app = create_app(make_settings(GEMINI_API_KEY=None))
    r = TestClient(app).post("/api/verify", json=_body())
    assert r.status_code == 500
    assert "not configured" in r.json()["detail"]


def test_strict_startup_fails_fast_without_credential():
    app = create_app(make_settings(GEMINI_API_KEY=None, STRICT_STARTUP=True))
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_strict_startup_refuses_proxied_mode():
    # a proxied server would forward /api/verify back to itself
    settings = make_settings(ORACLE_MODE="proxied", PROXY_URL="http://localhost:8000/api/verify", STRICT_STARTUP=True)
    app = create_app(settings)
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_proxied_mode_is_500_at_request_time(monkeypatch):
    from addrverify.adapters.clients import proxy

    async def _never(*a, **kw):  # pragma: no cover
        raise AssertionError("proxy must not be called")

    monkeypatch.setattr(proxy.ProxiedOracle, "verify", _never)

    app = create_app(make_settings(ORACLE_MODE="proxied"))
    r = TestClient(app).post("/api/verify", json=_body())
    assert r.status_code == 500
    assert "ORACLE_MODE=direct" in r.json()["detail"]


def test_strict_startup_builds_oracle_once():
    app = create_app(make_settings(STRICT_STARTUP=True))
    with TestClient(app) as c:
        assert app.state.oracle is not None
        assert c.get("/health").json() == {"status": "ok", "oracle_mode": "direct", "oracle_configured": True}


def test_cors_headers_on_post(client):
    r = client.post("/api/verify", json=_body(), headers={"Origin": "https://embedder.test"})
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_health_reports_missing_credential_without_leaking():
    c = TestClient(create_app(make_settings(GEMINI_API_KEY=None)))
    body = c.get("/health").json()
    assert body["oracle_configured"] is False
    assert "test-key" not in str(body)
