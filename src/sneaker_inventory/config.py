"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from sneaker_inventory.domain.capture import BarcodeFormat

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str = "sqlite:///sneakers.db"
    photo_quality: int = 80
    photo_max_dimension: int | None = None
    scan_formats: str | None = None
    api_token: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_scan_formats(raw: str | None) -> frozenset[BarcodeFormat] | None:
    """Parse enabled barcode formats from env."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    formats: set[BarcodeFormat] = set()
    for chunk in cleaned.split(","):
        value = chunk.strip().lower().replace("-", "").replace("_", "")
        if not value:
            continue
        try:
            formats.add(BarcodeFormat(value))
        except ValueError:
            continue
    return frozenset(formats) or None
