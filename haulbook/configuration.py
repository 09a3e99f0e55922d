"""Mini README: Centralised configuration models and helpers for Haulbook.

Structure:
    * HaulbookSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``HAULBOOK_*`` environment variables (or a
    local ``.env`` file). The settings drive the web service address, the
    number of recent days shown on the dashboard, report wording and where
    exported PDF reports are written. Validation happens once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class HaulbookSettings(BaseSettings):
    """Runtime configuration for the bookkeeping service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied when the CLI starts the service.",
    )
    report_directory: Path = Field(
        Path("reports"),
        description="Default directory where exported PDF reports are written.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the web service exposes.",
        ge=1,
        le=65535,
    )
    recent_day_limit: int = Field(
        3,
        description="Number of most recent days listed on the daily operations view.",
        ge=1,
    )
    currency_code: str = Field(
        "IQD",
        description="Currency label appended to formatted amounts.",
    )
    report_title: str = Field(
        "Hassan Accounts - Operations Report",
        description="Heading printed at the top of exported reports.",
    )
    seed_demo_data: bool = Field(
        False,
        description="Populate the in-memory store with demo records on start-up.",
    )

    class Config:
        env_prefix = "HAULBOOK_"
        env_file = ".env"
        case_sensitive = False

    @validator("report_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> HaulbookSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return HaulbookSettings()
