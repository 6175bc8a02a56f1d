"""
Configuration loading utilities.

Loads environment variables from `.env` and validates pacing settings.
Unparsable values fall back to the defaults declared in `config.py`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv, find_dotenv
from streamlit.logger import get_logger

import config as defaults
from utils.coercion import finite_float_optional
from utils.time import parse_clock_minutes

logger = get_logger(__name__)

NORMALIZATION_MODES = ("total", "remaining")


@dataclass(frozen=True)
class Config:
    gain_meters_per_km_eq: float
    loss_meters_per_km_eq: float
    effort_normalization: str
    locale: str
    default_start_time: str


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    value = finite_float_optional(raw)
    if value is None or value <= 0:
        if raw not in (None, ""):
            logger.debug("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def load_config() -> Config:
    """Load pacing configuration from environment."""
    load_dotenv(find_dotenv(), override=True)

    gain_factor = _positive_float("PACING_GAIN_M_PER_KM_EQ", defaults.GAIN_METERS_PER_KM_EQ)
    loss_factor = _positive_float("PACING_LOSS_M_PER_KM_EQ", defaults.LOSS_METERS_PER_KM_EQ)

    normalization = (os.getenv("PACING_EFFORT_NORMALIZATION") or defaults.EFFORT_NORMALIZATION)
    normalization = normalization.strip().lower()
    if normalization not in NORMALIZATION_MODES:
        logger.debug("Unknown effort normalization %r, using total", normalization)
        normalization = defaults.EFFORT_NORMALIZATION

    locale = (os.getenv("PACING_LOCALE") or defaults.DEFAULT_LOCALE).strip()

    start_time = (os.getenv("PACING_DEFAULT_START") or defaults.DEFAULT_START_TIME).strip()
    if parse_clock_minutes(start_time) is None:
        logger.debug("Invalid PACING_DEFAULT_START %r", start_time)
        start_time = defaults.DEFAULT_START_TIME

    logger.debug(
        "Pacing config: gain=%s loss=%s normalization=%s locale=%s",
        gain_factor,
        loss_factor,
        normalization,
        locale,
    )

    return Config(
        gain_meters_per_km_eq=gain_factor,
        loss_meters_per_km_eq=loss_factor,
        effort_normalization=normalization,
        locale=locale,
        default_start_time=start_time,
    )
