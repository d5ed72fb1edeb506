import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

DEFAULT_SEARXNG_URL = "http://searxng:8080"
DEFAULT_PORT = 3000
DEFAULT_UPSTREAM_TIMEOUT = 15.0


@dataclass(frozen=True)
class ProxyConfig:
    """Process configuration, built once at startup and handed to create_app."""

    api_key: Optional[str] = None
    searxng_url: str = DEFAULT_SEARXNG_URL
    port: int = DEFAULT_PORT
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    allowed_origins: Tuple[str, ...] = ("*",)
    rate_limit: Optional[str] = None

    @property
    def auth_enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "ProxyConfig":
        origins = environ.get("ALLOWED_ORIGINS", "*")
        timeout = float(environ.get("UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT))
        if timeout <= 0:
            raise ValueError(f"UPSTREAM_TIMEOUT must be positive, got {timeout}")

        return cls(
            api_key=environ.get("API_KEY") or None,
            searxng_url=(environ.get("SEARXNG_URL") or DEFAULT_SEARXNG_URL).rstrip("/"),
            port=int(environ.get("PORT", DEFAULT_PORT)),
            upstream_timeout=timeout,
            allowed_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",),
            rate_limit=environ.get("RATE_LIMIT") or None,
        )
