"""
Configuration for the Unbox API client.

Values come from the environment (or a .env file next to the caller).
Pass one of these classes to UnboxAPIClient.from_config().
"""

import os

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Default configuration, read from the environment."""

    # Penny Black API key, sent as X-Api-Key
    API_KEY = os.environ.get("UNBOX_API_KEY", "")

    # Sandbox host instead of production
    TEST_MODE = _env_flag("UNBOX_TEST_MODE")

    # Version of your integration build, sent on ingest calls for support/debugging
    ORIGIN_APP_VERSION = os.environ.get("UNBOX_ORIGIN_APP_VERSION", "")

    # Seconds handed to the HTTP transport per request
    TIMEOUT = float(os.environ.get("UNBOX_TIMEOUT", "30"))


class ProductionConfig(Config):
    """Production configuration."""
    TEST_MODE = False


class SandboxConfig(Config):
    """Sandbox configuration."""
    TEST_MODE = True
