"""
Runtime settings, read from the environment and an optional .env file.

Environment variables:
  TRANSLATOR_PROVIDER      google | linguee | deepl | azure | mymemory | libre | apertium
  TRANSLATOR_SOURCE        source language (default "auto")
  TRANSLATOR_TARGET        target language (default "en")
  TRANSLATOR_PROXY         proxy URL for every request
  TRANSLATOR_TIMEOUT       request timeout in seconds (default 10)
  TRANSLATOR_LOG_LEVEL     DEBUG, INFO, ... (default WARNING)
  DEEPL_API_KEY / DEEPL_FREE_API
  AZURE_TRANSLATOR_KEY / AZURE_TRANSLATOR_REGION
  LIBRE_API_KEY
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .logger import get_module_logger

logger = get_module_logger("config")

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Defaults for the CLI and the translator factory."""
    provider: str = "google"
    source: str = "auto"
    target: str = "en"
    proxy: Optional[str] = None
    timeout: float = 10.0
    log_level: str = "WARNING"

    # Provider credentials; only the selected provider needs its own
    deepl_api_key: Optional[str] = None
    deepl_free_api: bool = True
    azure_api_key: Optional[str] = None
    azure_region: Optional[str] = None
    libre_api_key: Optional[str] = None

    def translator_kwargs(self, provider: Optional[str] = None) -> dict:
        """Keyword arguments for Translator.create() beyond source/target."""
        provider = (provider or self.provider).lower()
        kwargs = {"proxy": self.proxy, "timeout": self.timeout}
        if provider == "deepl":
            kwargs.update(api_key=self.deepl_api_key, use_free_api=self.deepl_free_api)
        elif provider == "azure":
            kwargs.update(api_key=self.azure_api_key, region=self.azure_region)
        elif provider == "libre":
            kwargs.update(api_key=self.libre_api_key)
        return kwargs


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={value!r}, using {default}")
        return default


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment.

    A .env file (found by python-dotenv, or given explicitly) fills in
    variables that are not already set; real environment variables win.
    """
    load_dotenv(dotenv_path=dotenv_path, override=False)

    return Settings(
        provider=os.getenv("TRANSLATOR_PROVIDER", "google").lower(),
        source=os.getenv("TRANSLATOR_SOURCE", "auto"),
        target=os.getenv("TRANSLATOR_TARGET", "en"),
        proxy=os.getenv("TRANSLATOR_PROXY") or None,
        timeout=_env_float("TRANSLATOR_TIMEOUT", 10.0),
        log_level=os.getenv("TRANSLATOR_LOG_LEVEL", "WARNING").upper(),
        deepl_api_key=os.getenv("DEEPL_API_KEY") or None,
        deepl_free_api=_env_bool("DEEPL_FREE_API", True),
        azure_api_key=os.getenv("AZURE_TRANSLATOR_KEY") or None,
        azure_region=os.getenv("AZURE_TRANSLATOR_REGION") or None,
        libre_api_key=os.getenv("LIBRE_API_KEY") or None,
    )
