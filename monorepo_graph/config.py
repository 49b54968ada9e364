"""
Configuration
Environment-driven settings for diagnostic output
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Settings for log level and diagnostic formatting"""
    log_level: str = 'INFO'
    log_prefix: str = '[monorepo]'
    spec_width: int = 50

    @classmethod
    def from_env(cls) -> 'Config':
        """Read settings from the environment, loading a .env file first"""
        load_dotenv()
        return cls(
            log_level=os.getenv('MONOREPO_LOG_LEVEL', cls.log_level).upper(),
            log_prefix=os.getenv('MONOREPO_LOG_PREFIX', cls.log_prefix),
            spec_width=_int_env('MONOREPO_SPEC_WIDTH', cls.spec_width),
        )


def _int_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring {key}={value!r}, expected an integer")
        return default
