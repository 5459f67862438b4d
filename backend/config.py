"""Centralized configuration — all env vars in one place."""

import os
from pathlib import Path

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "public"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = int(os.getenv("PORT", "3000"))
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.static_dir: Path = Path(os.getenv("STATIC_DIR", str(DEFAULT_STATIC_DIR)))

        # GitHub
        self.github_user: str = os.getenv("GITHUB_USER", "TherealVoltageLord")
        self.github_token: str | None = os.getenv("GITHUB_TOKEN") or None
        self.github_api_url: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
        self.upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))
        self.cache_ttl: float = float(os.getenv("CACHE_TTL_SECONDS", "300"))

        # IP geolocation
        self.geo_api_url: str = os.getenv("GEO_API_URL", "http://ip-api.com/json")
        self.geo_timeout: float = float(os.getenv("GEO_TIMEOUT_SECONDS", "3"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
