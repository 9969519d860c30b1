"""Shared utilities — config loading, logging, helpers."""

from workrisk.utils.helpers import load_config, setup_logging, ensure_dir, clamp

__all__ = ["load_config", "setup_logging", "ensure_dir", "clamp"]
