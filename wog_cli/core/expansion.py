"""Weighted expansion, shuffling and spin history."""

from __future__ import annotations

import math
import random as _random
import time
import uuid
from typing import Callable, List, Optional, Sequence, TypeVar

from wog_cli.core.constants import MAX_HISTORY_ENTRIES
from wog_cli.core.models import SpinResult, WeightedEntry

T = TypeVar("T")
RandomSource = Callable[[], float]


def _uniform_index(random: RandomSource, upper: int) -> int:
    # Guard against sources that return exactly 1.0.
    return min(int(math.floor(random() * upper)), upper - 1)


def shuffle_in_place(items: List[T], random: Optional[RandomSource] = None) -> List[T]:
    """Fisher-Yates shuffle driven by a uniform [0, 1) source."""
    source = random or _random.random
    for i in range(len(items) - 1, 0, -1):
        j = _uniform_index(source, i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def expand(
    entries: Sequence[WeightedEntry],
    random: Optional[RandomSource] = None,
) -> List[WeightedEntry]:
    """Repeat each entry ``weight`` times and shuffle the resulting pool."""
    pool: List[WeightedEntry] = []
    for entry in entries:
        pool.extend([entry] * max(1, int(entry.weight)))
    return shuffle_in_place(pool, random)


def pick_index(pool: Sequence[WeightedEntry], random: Optional[RandomSource] = None) -> int:
    """Uniformly choose a slot of the expanded pool."""
    if not pool:
        raise ValueError("Cannot pick from an empty pool")
    return _uniform_index(random or _random.random, len(pool))


def add_spin_result(
    history: Sequence[SpinResult],
    entry: WeightedEntry,
    max_entries: int = MAX_HISTORY_ENTRIES,
    now: Optional[int] = None,
) -> List[SpinResult]:
    """Prepend a spin result, dropping the oldest beyond ``max_entries``."""
    timestamp = now if now is not None else int(time.time() * 1000)
    result = SpinResult(id=str(uuid.uuid4()), entry=entry, timestamp=timestamp)
    return [result, *history][: max(1, max_entries)]
