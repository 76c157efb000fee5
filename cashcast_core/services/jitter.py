from __future__ import annotations

import datetime as dt
import hashlib
import math
from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def seeded_stream(key: str) -> np.random.Generator:
    """
    Deterministic generator for a string key.
    The key is hashed so that nearby keys ("1-a", "1-b") give unrelated streams.
    """
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return np.random.default_rng(np.random.SeedSequence(int.from_bytes(digest, "big")))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def jitter_value(value: float, max_variance_pct: float, rng: RandomSource) -> float:
    """Perturb value by up to +/- max_variance_pct percent of itself."""
    spread = max_variance_pct / 100
    factor = 2 * spread * float(rng.random()) - spread
    return value + value * factor


def jitter_date(date: dt.date, max_day_variance: int, rng: RandomSource) -> dt.date:
    """Shift date by a whole number of days in [-max_day_variance, max_day_variance]."""
    delta = _round_half_up(2 * max_day_variance * float(rng.random()) - max_day_variance)
    return date + dt.timedelta(days=delta)
