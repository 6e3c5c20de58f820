"""Reporting — stats sinks that consume per-tick species counts."""

from __future__ import annotations

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)


def format_stats(stats: Mapping[str, int]) -> str:
    """Render counts as ``Name: n`` pairs in the order given."""
    return " ".join(f"{name}: {count}" for name, count in stats.items())


def log_stats(stats: Mapping[str, int]) -> None:
    """Stats sink that writes one INFO line per tick."""
    logger.info("%s", format_stats(stats))
