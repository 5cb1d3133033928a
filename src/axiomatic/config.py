"""
Runtime configuration for Axiomatic.

Settings are read from the environment once and can be replaced with
``set_settings`` (tests do this through a fixture).

Environment variables:
    AXIOMATIC_LOG_LEVEL  Level used by ``configure_logging`` (default WARNING)
    AXIOMATIC_COLOR      "1"/"0" forces diagnostic colouring on or off
    NO_COLOR             Disables colouring when set
    AXIOMATIC_RTOL       Relative tolerance for ``allclose`` (default 1e-9)
    AXIOMATIC_ATOL       Absolute tolerance for ``allclose`` (default 1e-12)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

LOGGER_NAME = "axiomatic"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """
    Library-wide settings.

    Attributes:
        log_level: Logging level name applied by configure_logging
        color: Whether rendered diagnostics use ANSI colours
        rtol: Relative tolerance for approximate float comparison
        atol: Absolute tolerance for approximate float comparison
    """

    log_level: str = "WARNING"
    color: bool = False
    rtol: float = 1e-9
    atol: float = 1e-12

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ

        forced = env.get("AXIOMATIC_COLOR")
        if forced is not None:
            color = forced.strip().lower() in _TRUTHY
        else:
            color = sys.stderr.isatty() and not env.get("NO_COLOR")

        return cls(
            log_level=env.get("AXIOMATIC_LOG_LEVEL", "WARNING").upper(),
            color=color,
            rtol=float(env.get("AXIOMATIC_RTOL", cls.rtol)),
            atol=float(env.get("AXIOMATIC_ATOL", cls.atol)),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the active settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the active settings. ``None`` reloads from the environment lazily."""
    global _settings
    _settings = settings


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure root logging for applications and return the library logger.

    The library itself never installs handlers; call this from application
    code to see resolution and instantiation messages.
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_name)
    return logger
