from __future__ import annotations

from ...config import Settings
from .base import AddressOracle
from .gemini import GeminiOracle
from .proxy import ProxiedOracle


def build_oracle(settings: Settings) -> AddressOracle:
    """Pick the oracle implementation for this deployment. Fails fast on missing credentials."""
    settings.require_oracle_credentials()

    if settings.ORACLE_MODE == "proxied":
        return ProxiedOracle(url=settings.PROXY_URL, timeout_s=settings.ORACLE_TIMEOUT_S)

    return GeminiOracle(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout_s=settings.ORACLE_TIMEOUT_S,
    )


def build_server_oracle(settings: Settings) -> AddressOracle:
    """Oracle behind POST /api/verify and /compare: direct mode only."""
    settings.require_direct_oracle()
    return build_oracle(settings)
