# addrverify/entrypoints/api/deps.py
from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from ...adapters.clients.base import AddressOracle
from ...adapters.clients.factory import build_server_oracle
from ...config import Settings
from ...exceptions import ConfigurationError

log = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_oracle(request: Request) -> AddressOracle:
    """
    The oracle built at startup, or built lazily when STRICT_STARTUP is off.
    A missing credential or a non-direct mode is a 500 and no oracle call is attempted.
    """
    oracle = request.app.state.oracle
    if oracle is not None:
        return oracle

    try:
        oracle = build_server_oracle(request.app.state.settings)
    except ConfigurationError as e:
        log.error("oracle not configured: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    request.app.state.oracle = oracle
    return oracle
