"""Environment configuration for the allocator API."""
import os
from dataclasses import dataclass
from pathlib import Path

ENVIRONMENTS = ("development", "production", "test")
DEFAULT_DB_PATH = Path(__file__).resolve().parent / "allocator.db"


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    api_prefix: str = "/api/v1"
    port: int = 8000
    database_url: str = f"sqlite:///{DEFAULT_DB_PATH}"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def load_settings(environ=None) -> Settings:
    environ = os.environ if environ is None else environ
    env = environ.get("ALLOCATOR_ENV", "development")
    if env not in ENVIRONMENTS:
        raise ValueError(f"ALLOCATOR_ENV must be one of {ENVIRONMENTS}, got {env!r}")
    port = int(environ.get("PORT", "8000"))
    if not 1 <= port <= 65535:
        raise ValueError(f"PORT out of range: {port}")
    return Settings(
        env=env,
        api_prefix=environ.get("ALLOCATOR_API_PREFIX", "/api/v1").rstrip("/"),
        port=port,
        database_url=environ.get("ALLOCATOR_DATABASE_URL", f"sqlite:///{DEFAULT_DB_PATH}"),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
