# addrverify/entrypoints/fastapi_app.py
from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..adapters.clients.base import AddressOracle
from ..adapters.clients.factory import build_server_oracle
from ..config import Settings, settings as default_settings
from ..integrations.webhook import ResultSink, WebhookSink
from .api.routers import compare, health, verify

log = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    oracle: AddressOracle | None = None,
    sink_factory: Callable[[str], ResultSink] | None = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Address Verifier")

    app.state.settings = settings
    app.state.oracle = oracle
    app.state.sink_factory = sink_factory or (
        lambda url: WebhookSink(url, secret=settings.WEBHOOK_SECRET, timeout_s=settings.WEBHOOK_TIMEOUT_S)
    )

    @app.on_event("startup")
    async def _startup() -> None:
        # Fail fast: a missing key or a proxied mode stops the server from booting.
        if settings.STRICT_STARTUP and app.state.oracle is None:
            app.state.oracle = build_server_oracle(settings)
        log.info("address verifier ready mode=%s env=%s", settings.ORACLE_MODE, settings.ENV)

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": "Malformed request.", "errors": [e.get("msg") for e in exc.errors()]},
        )

    # The browser client may be served from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Routers
    app.include_router(health.router)
    app.include_router(verify.router)
    app.include_router(compare.router)

    return app
