"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from wog_cli.core.models import SpinResult, WeightedEntry


def format_odds(weight: int, total: int) -> str:
    """Format the chance of one entry landing as a percentage."""
    if total <= 0:
        return "N/A"
    return f"{weight / total * 100:.1f}%"


def format_timestamp(millis: Optional[int]) -> str:
    """Format an epoch-milliseconds timestamp as local YYYY-MM-DD HH:MM."""
    if not millis:
        return "N/A"
    try:
        moment = datetime.fromtimestamp(millis / 1000)
    except (OverflowError, OSError, ValueError):
        return "N/A"
    return moment.strftime("%Y-%m-%d %H:%M")


def entry_rows(entries: Sequence[WeightedEntry]) -> List[Dict[str, Any]]:
    """Flatten entries into display/JSON rows with selection odds."""
    total = sum(entry.weight for entry in entries)
    return [
        {
            "id": entry.id,
            "name": entry.name,
            "weight": entry.weight,
            "odds": format_odds(entry.weight, total),
            "category": entry.category.name,
            "url": entry.url,
        }
        for entry in entries
    ]


def history_rows(history: Sequence[SpinResult]) -> List[Dict[str, Any]]:
    return [
        {
            "when": format_timestamp(result.timestamp),
            "name": result.entry.name,
            "url": result.entry.url,
        }
        for result in history
    ]
