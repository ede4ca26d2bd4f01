"""Runtime settings and logging defaults for spendlog front ends."""

from __future__ import annotations

import locale
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from .services import DEFAULT_STORAGE_KEY
from .views import DEFAULT_CURRENCY_SYMBOL

logger = logging.getLogger(__name__)

LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    storage_key: str = DEFAULT_STORAGE_KEY
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            data_dir=Path(env.get("SPENDLOG_DATA_DIR") or "data"),
            storage_key=env.get("SPENDLOG_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
            currency_symbol=env.get("SPENDLOG_CURRENCY_SYMBOL") or DEFAULT_CURRENCY_SYMBOL,
            log_level=(env.get("SPENDLOG_LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level: Union[str, int, None] = None) -> None:
    """Apply ``LOGGING_CONFIG``, optionally overriding the level."""
    config = dict(LOGGING_CONFIG)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        config["level"] = resolved
    elif level is not None:
        config["level"] = level
    logging.basicConfig(**config)


def configure_collation() -> None:
    """Collate category names with the user's locale instead of code points."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("Locale from the environment is unavailable, using C collation")
