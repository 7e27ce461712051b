from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Any

from dotenv import set_key
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "CHRLDB_"
CHEMBL_TXTFILE_ENV = f"{ENV_PREFIX}CHEMBL_TXTFILE"


def default_env_file() -> Path:
    return Path(os.getenv(f"{ENV_PREFIX}ENV_FILE", Path.home() / ".chrldb.env"))


ENV_FILE = default_env_file()


class ConfigurationError(Exception):
    """Raised when a required configuration value is not set or is invalid."""


class AppConfig(BaseSettings):
    """Settings read from ``CHRLDB_*`` environment variables and the dotenv file."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    chembl_txtfile: str | None = None
    strict_parsing: bool = False


def load_config() -> AppConfig:
    """
    Environment variables take precedence over values saved in ENV_FILE.
    Invalid values (e.g. CHRLDB_STRICT_PARSING=maybe) raise ConfigurationError.
    """
    try:
        return AppConfig(_env_file=ENV_FILE)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid chrldb configuration: {e}") from e


def save_config(**values: Any) -> None:
    """Persist settings (e.g. ``chembl_txtfile="..."``) into ENV_FILE."""
    unknown = set(values) - set(AppConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    ENV_FILE.parent.mkdir(parents=True, exist_ok=True)
    ENV_FILE.touch(exist_ok=True)
    for key, value in values.items():
        if isinstance(value, bool):
            value = str(value).lower()
        set_key(str(ENV_FILE), f"{ENV_PREFIX}{key.upper()}", str(value), quote_mode="never")
        logger.debug("Saved %s%s to %s", ENV_PREFIX, key.upper(), ENV_FILE)


def require_chembl_txtfile(config: AppConfig | None = None) -> str:
    cfg = config or load_config()
    if not cfg.chembl_txtfile:
        raise ConfigurationError(
            f"{CHEMBL_TXTFILE_ENV} is not set; export it or run `chrldb config set-file`."
        )
    return cfg.chembl_txtfile
