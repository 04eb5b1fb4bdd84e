"""Application configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

CDTFA_RATE_BY_ADDRESS_URL = "https://services.maps.cdtfa.ca.gov/api/taxrate/GetRateByAddress"


class AppConfig(BaseModel):
    """
    Application configuration.

    Only the upstream tax rate service and logging are configurable; the
    calculator itself has no settings.
    """

    tax_rate_api_url: str = Field(
        default=CDTFA_RATE_BY_ADDRESS_URL,
        description="Upstream tax-rate-by-address endpoint",
        min_length=1,
    )
    tax_rate_timeout_seconds: int = Field(
        default=10,
        description="Timeout for one upstream tax rate request",
        ge=1,
        le=60,
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )


def load_config(env_file: Path | None = None) -> AppConfig:
    """
    Build config from the environment.

    Reads a .env file first (if present) without overriding variables that
    are already set. Unset variables fall back to AppConfig defaults.

    Raises:
        pydantic.ValidationError: If a variable is set to an invalid value
    """
    load_dotenv(env_file or Path.cwd() / ".env")

    env_map = {
        "tax_rate_api_url": "TAX_RATE_API_URL",
        "tax_rate_timeout_seconds": "TAX_RATE_TIMEOUT_SECONDS",
        "log_level": "LOG_LEVEL",
    }
    values = {}
    for field, var in env_map.items():
        value = os.getenv(var)
        if value:
            values[field] = value

    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()

    return AppConfig(**values)
