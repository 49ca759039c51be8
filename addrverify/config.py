from typing import Literal

import httpx
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod

    # direct: this process holds the key and calls Gemini itself (the proxy server)
    # proxied: this process only knows the proxy URL (CLI / other callers)
    ORACLE_MODE: Literal["direct", "proxied"] = "direct"

    # --- Oracle (Gemini) ---
    # Serverless deployments historically exported this as API_KEY; accept both.
    GEMINI_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    ORACLE_TIMEOUT_S: float = 30.0

    # --- Proxy (used when ORACLE_MODE=proxied) ---
    PROXY_URL: str = "http://localhost:8000/api/verify"

    # --- Result broadcast ---
    WEBHOOK_SECRET: str | None = None
    WEBHOOK_TIMEOUT_S: int = 20
    # Origins (scheme://host[:port]) that /compare may post a callback to. Empty: none.
    CALLBACK_ALLOWED_ORIGINS: list[str] = []

    # Check the credential when the API boots instead of on the first request.
    STRICT_STARTUP: bool = True

    def oracle_configured(self) -> bool:
        if self.ORACLE_MODE == "direct":
            return bool(self.GEMINI_API_KEY)
        return bool(self.PROXY_URL)

    def require_oracle_credentials(self) -> None:
        if self.ORACLE_MODE == "direct" and not self.GEMINI_API_KEY:
            raise ConfigurationError("GEMINI_API_KEY is not configured on the server.")
        if self.ORACLE_MODE == "proxied" and not self.PROXY_URL:
            raise ConfigurationError("PROXY_URL is required when ORACLE_MODE=proxied.")

    def require_direct_oracle(self) -> None:
        # the proxy endpoint is the only holder of the key; proxying would call itself
        if self.ORACLE_MODE != "direct":
            raise ConfigurationError("The verification server must run with ORACLE_MODE=direct.")
        self.require_oracle_credentials()

    def callback_allowed(self, url: str) -> bool:
        origin = _origin(url)
        if origin is None:
            return False
        return origin in {_origin(o) for o in self.CALLBACK_ALLOWED_ORIGINS}


def _origin(url: str) -> str | None:
    try:
        u = httpx.URL(url.strip())
    except httpx.InvalidURL:
        return None
    if u.scheme not in ("http", "https") or not u.host:
        return None
    return f"{u.scheme.lower()}://{u.host.lower()}" + (f":{u.port}" if u.port else "")


settings = Settings()
