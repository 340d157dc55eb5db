"""
Global configuration for the locator codec tools.

This module contains environment-specific settings that apply across the package.
"""

import logging
import os

_SUPPORTED_CASC_ENVS: list[str] = ["prod", "test"]

CASC_ENV = os.environ.get("CASC_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if CASC_ENV not in _SUPPORTED_CASC_ENVS:
    raise ValueError(
        f"Invalid CASC_ENV environment variable: '{CASC_ENV}'. "
        f"Supported values: {_SUPPORTED_CASC_ENVS}"
    )

_SUPPORTED_LOG_LEVELS: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CASC_LOG_LEVEL = os.environ.get("CASC_LOG_LEVEL", "INFO").upper()
"""Default log level for the command line tool when `--verbose` is not given."""

if CASC_LOG_LEVEL not in _SUPPORTED_LOG_LEVELS:
    raise ValueError(
        f"Invalid CASC_LOG_LEVEL environment variable: '{CASC_LOG_LEVEL}'. "
        f"Supported values: {_SUPPORTED_LOG_LEVELS}"
    )

LOG_LEVEL: int = logging.getLevelNamesMapping()[CASC_LOG_LEVEL]
"""Numeric form of `CASC_LOG_LEVEL`."""
