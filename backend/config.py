"""Centralized configuration: all env vars in one place."""

import json
import os

from errors import ConfigurationError

TOKEN_PLACEMENTS = {"path", "query"}


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = int(os.getenv("PORT", "3000"))
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Upstream cricket API
        self.api_base_url: str = os.getenv("CRICKET_API_BASE_URL", "https://apicricketchampion.in/apiv4")
        self.api_token: str | None = os.getenv("CRICKET_API_TOKEN") or os.getenv("CRICKET_V5_TOKEN")
        self.token_placement: str = os.getenv("CRICKET_TOKEN_PLACEMENT", "path").lower()
        self.token_param: str = os.getenv("CRICKET_TOKEN_PARAM", "token")
        self.upstream_paths: dict[str, str] = _parse_paths(os.getenv("CRICKET_UPSTREAM_PATHS", ""))
        self.upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

        # Aggregate cache
        self.cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "60"))

        if self.token_placement not in TOKEN_PLACEMENTS:
            raise ValueError(
                f"CRICKET_TOKEN_PLACEMENT must be one of {sorted(TOKEN_PLACEMENTS)}, "
                f"got {self.token_placement!r}"
            )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def require_token(self) -> str:
        if not self.api_token:
            raise ConfigurationError(
                "API token is not configured on the server. Set CRICKET_API_TOKEN."
            )
        return self.api_token

    def validate(self) -> list[str]:
        """Return list of missing required env vars."""
        required = ["CRICKET_API_TOKEN"]
        return [var for var in required if not getattr(self, _attr_for(var))]


def _parse_paths(raw: str) -> dict[str, str]:
    if not raw.strip():
        return {}
    try:
        paths = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"CRICKET_UPSTREAM_PATHS is not valid JSON: {e}") from e
    if not isinstance(paths, dict) or not all(isinstance(v, str) for v in paths.values()):
        raise ValueError("CRICKET_UPSTREAM_PATHS must be a JSON object of name -> path strings")
    return paths


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "CRICKET_API_TOKEN": "api_token",
    }
    return mapping.get(env_var, env_var.lower())
