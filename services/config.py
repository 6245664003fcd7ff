# Purpose: Load extractor and dashboard settings from YAML.
# Date: 2026-10-19
# Related tests: tests/test_config.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""YAML-backed configuration for the CDA statistics extractor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from parsers.heuristics import DEFAULT_REFERENCE_YEAR
from services.common import clean_str, coerce_int
from services.statistics import DEFAULT_TOP_N

logger = logging.getLogger(__name__)

CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULTS: dict[str, Any] = {
    "reference_year": DEFAULT_REFERENCE_YEAR,
    "top_n": DEFAULT_TOP_N,
    "max_file_size_mb": 10,
    "page_title": "CDA Statistics",
    "layout": "wide",
}

_INT_KEYS = ("reference_year", "top_n", "max_file_size_mb")
_STR_KEYS = ("page_title", "layout")


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Return settings from ``path`` merged over the defaults.

    Args:
        path: YAML file to read. Defaults to the repository ``config.yaml``;
            a missing default file yields the built-in defaults.

    Returns:
        dict[str, Any]: Validated settings.

    Raises:
        OSError: If an explicitly requested file cannot be read.
        ValueError: If the file is not a mapping or a value has the wrong type.
    """
    config_path = path or CONFIG_PATH
    config = dict(DEFAULTS)
    if path is None and not config_path.exists():
        logger.debug("No config file at %s; using defaults.", config_path)
        return config

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping.")

    for key, value in raw.items():
        if key not in DEFAULTS:
            logger.warning("Ignoring unknown config key %r in %s.", key, config_path)
            continue
        if key in _INT_KEYS:
            number = coerce_int(value)
            if number is None or number <= 0:
                raise ValueError(f"Config key {key!r} must be a positive integer, got {value!r}.")
            config[key] = number
        elif key in _STR_KEYS:
            text = clean_str(value)
            if text is None:
                raise ValueError(f"Config key {key!r} must be a non-empty string.")
            config[key] = text
    return config
