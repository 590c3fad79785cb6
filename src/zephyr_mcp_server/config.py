"""Configuration for the Zephyr Scale Cloud API."""

import os
from dataclasses import dataclass

from .utils.errors import ConfigurationError

BASE_URLS = {
    "us": "https://api.zephyrscale.smartbear.com/v2",
    "eu": "https://eu.api.zephyrscale.smartbear.com/v2",
}
DEFAULT_REGION = "us"


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be a number, got '{raw}'",
            details={"variable": name, "value": raw},
        )
    if value < 0:
        raise ConfigurationError(
            f"{name} must not be negative, got '{raw}'",
            details={"variable": name, "value": raw},
        )
    return value


@dataclass(frozen=True)
class ZephyrConfig:
    """Configuration for the Zephyr Scale Cloud API."""

    base_url: str
    api_token: str
    region: str = DEFAULT_REGION
    timeout: float = 30.0
    max_retries: int = 0
    retry_delay: float = 1.0
    default_max_results: int = 50
    max_max_results: int = 1000

    @classmethod
    def from_env(cls) -> "ZephyrConfig":
        """Create configuration from environment variables.

        Returns:
            ZephyrConfig: Configuration object with values from environment variables

        Raises:
            ConfigurationError: If ZEPHYR_API_TOKEN is missing or a numeric value is malformed
        """
        api_token = os.getenv("ZEPHYR_API_TOKEN")
        if not api_token:
            raise ConfigurationError("ZEPHYR_API_TOKEN environment variable is required")

        region = (os.getenv("ZEPHYR_REGION") or DEFAULT_REGION).lower()
        base_url = os.getenv("ZEPHYR_BASE_URL") or BASE_URLS.get(region, BASE_URLS[DEFAULT_REGION])

        default_max_results = _env_number("ZEPHYR_DEFAULT_MAX_RESULTS", 50, int)
        max_max_results = _env_number("ZEPHYR_MAX_MAX_RESULTS", 1000, int)
        if not 1 <= default_max_results <= max_max_results:
            raise ConfigurationError(
                "ZEPHYR_DEFAULT_MAX_RESULTS must be between 1 and ZEPHYR_MAX_MAX_RESULTS",
                details={"default_max_results": default_max_results, "max_max_results": max_max_results},
            )

        return cls(
            base_url=base_url.rstrip("/"),
            api_token=api_token,
            region=region,
            timeout=_env_number("ZEPHYR_TIMEOUT", 30.0, float),
            max_retries=_env_number("ZEPHYR_MAX_RETRIES", 0, int),
            retry_delay=_env_number("ZEPHYR_RETRY_DELAY", 1.0, float),
            default_max_results=default_max_results,
            max_max_results=max_max_results,
        )
