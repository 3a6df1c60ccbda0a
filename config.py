"""
Runtime configuration from environment variables (.env supported).

Engine constants (base confidences, adjustment deltas, field priority) live
with the engine modules and are not configurable.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


@dataclass(frozen=True)
class Settings:
    """Service settings."""
    service_name: str = "deal-text-extractor"
    log_level: str = "INFO"
    history_limit: int = 5
    low_confidence_threshold: float = 0.75
    cors_origins: List[str] = field(
        default_factory=lambda: DEFAULT_CORS_ORIGINS.split(",")
    )


def load_settings() -> Settings:
    """Read settings from the environment after loading a local .env file."""
    load_dotenv()

    # Comma-separated, e.g. "http://localhost:3000,https://app.example.com"
    origins_str = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

    return Settings(
        service_name=os.getenv("SERVICE_NAME", "deal-text-extractor"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        history_limit=int(os.getenv("HISTORY_LIMIT", "5")),
        low_confidence_threshold=float(os.getenv("LOW_CONFIDENCE_THRESHOLD", "0.75")),
        cors_origins=[o.strip() for o in origins_str.split(",") if o.strip()],
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
