"""
Engine Plumbing
================
Where the scoring engine finds its configuration and how it logs.

  - ``load_config``:   explicit path, else ``$WORKRISK_CONFIG``, else
                       ``config/config.yaml`` at the project root
  - ``setup_logging``: the shared ``"workrisk"`` logger; its level can be
                       set with ``$WORKRISK_LOG_LEVEL`` (e.g. ``DEBUG``)
  - ``clamp``:         keep normalised values and scores in range, logging
                       every value that had to be corrected
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml


_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_CONFIG = _PROJECT_ROOT / "config" / "config.yaml"
_CONFIG_ENV = "WORKRISK_CONFIG"
_LOG_LEVEL_ENV = "WORKRISK_LOG_LEVEL"
_REQUIRED_SECTIONS = ("domains", "overall_tiers")


def load_config(config_path: Optional[str] = None) -> dict:
    """Load the engine's YAML config.

    The file must define at least the ``domains`` and ``overall_tiers``
    sections; everything else has defaults in the component that reads it.
    """
    raw = config_path or os.environ.get(_CONFIG_ENV)
    path = Path(raw) if raw else _DEFAULT_CONFIG
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    missing = [s for s in _REQUIRED_SECTIONS if s not in config]
    if missing:
        raise ValueError(f"Config {path} is missing section(s): {', '.join(missing)}")
    return config


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """The ``"workrisk"`` logger, with one stream handler."""
    logger = logging.getLogger("workrisk")
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter(
            "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    if level is None:
        level = os.environ.get(_LOG_LEVEL_ENV, "INFO").upper()
    logger.setLevel(level)
    return logger


def ensure_dir(path) -> Path:
    """Create directory (and parents) if missing; return Path."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def clamp(value: float, low: float = 0.0, high: float = 1.0, label: str = "") -> float:
    """Clamp *value* into [low, high].

    Out-of-range values are a programming-invariant violation, so they are
    logged rather than silently accepted.  NaN collapses to *low*.
    """
    if value != value:  # NaN
        logging.getLogger("workrisk").warning("NaN clamped to %s (%s)", low, label or "value")
        return low
    if value < low or value > high:
        logging.getLogger("workrisk").warning(
            "%s=%s outside [%s, %s]; clamped", label or "value", value, low, high
        )
        return max(low, min(high, value))
    return value
