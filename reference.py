from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from fraction import Fraction


@dataclass(frozen=True)
class FloatSearchResult:
    found: bool
    power: Optional[int]
    index: Optional[int]
    seen: List[float]


def fold(x: np.float64) -> np.float64:
    while x >= 2.0:
        x = x / np.float64(2.0)
    while x < 1.0:
        x = x * np.float64(2.0)
    return x


def float_search(base: Fraction, max_power: int, decimals: int) -> FloatSearchResult:
    """
    Float64 rendition of the power search, for comparison only.
    Each power is taken as a running product, so rounding error accumulates
    and the reported repeat can differ from the exact search.
    """
    if base.is_zero():
        raise ValueError("base must be non-zero")
    b = np.float64(base.top) / np.float64(base.bottom)
    scale = np.float64(10.0) ** decimals
    seen: List[float] = []
    index: Dict[float, int] = {}

    x = np.float64(1.0)
    for power in range(1, max_power + 1):
        x = fold(x * b)
        key = float(np.trunc(x * scale) / scale)
        if key in index:
            return FloatSearchResult(True, power, index[key], seen)
        index[key] = len(seen)
        seen.append(float(x))
    return FloatSearchResult(False, None, None, seen)
