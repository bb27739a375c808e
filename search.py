from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple

from fraction import Fraction
from integers import IntegerWidth, U128, get_width
from interval import Interval, REDUCTION_RANGE


class MatchPolicy(Enum):
    EXACT = "exact"
    APPROXIMATE = "approx"


@dataclass(frozen=True)
class SearchConfig:
    base: Fraction = field(default_factory=lambda: Fraction(3, 2))
    max_power: int = 64
    policy: MatchPolicy = MatchPolicy.EXACT
    decimals: int = 4           # only used by MatchPolicy.APPROXIMATE
    width: IntegerWidth = U128

    def __post_init__(self):
        if self.base.width != self.width:
            object.__setattr__(self, "base", Fraction(self.base.top, self.base.bottom, self.width))
        if self.base.is_zero():
            raise ValueError("base must be non-zero")
        if self.max_power < 1:
            raise ValueError(f"max_power must be at least 1, got {self.max_power}")
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {self.decimals}")

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "SearchConfig":
        """Build a config from loosely typed values (strings from a CLI or a file)."""
        width = get_width(str(data.get("width", "u128")))
        base = data.get("base", "3/2")
        if not isinstance(base, Fraction):
            base = Fraction.parse(str(base), width)
        try:
            policy = MatchPolicy(data.get("policy", MatchPolicy.EXACT.value))
        except ValueError:
            raise ValueError(f"unknown match policy {data.get('policy')!r}, expected one of "
                             f"{[p.value for p in MatchPolicy]}")
        return SearchConfig(
            base=base,
            max_power=int(data.get("max_power", 64)),
            policy=policy,
            decimals=int(data.get("decimals", 4)),
            width=width,
        )


@dataclass(frozen=True)
class SearchResult:
    found: bool
    power: Optional[int]        # power whose reduced value repeated
    index: Optional[int]        # position of the earlier value, 0 is the base
    value: Optional[Fraction]
    seen: List[Fraction]


def reduce_into_range(value: Fraction, interval: Interval = REDUCTION_RANGE) -> Tuple[Fraction, int]:
    """Fold value into interval by halving (or doubling) it.

    Returns the reduced value and the signed number of halvings applied;
    doublings count negative. The interval must span a factor of two.
    """
    if value.is_zero():
        raise ValueError("cannot reduce zero into a range")
    m = value.thaw()
    halvings = 0
    while interval.above(m):
        m.divide_by_integer(2)
        halvings += 1
    while interval.below(m):
        m *= 2
        halvings -= 1
    return m.freeze(), halvings


def truncate_decimals(value: Fraction, decimals: int) -> int:
    """value truncated toward zero to `decimals` places, scaled to an integer."""
    return (value.top * 10 ** decimals) // value.bottom


class PowerSearch:
    def __init__(self, config: SearchConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self._logger = logger or logging.getLogger("powercycle.search")
        self.seen: List[Fraction] = []
        self._index: Dict[Hashable, int] = {}

    def key(self, value: Fraction) -> Hashable:
        if self.config.policy is MatchPolicy.APPROXIMATE:
            return truncate_decimals(value, self.config.decimals)
        return value

    def record(self, value: Fraction) -> Optional[int]:
        """Index of an earlier matching value, or None after storing value."""
        k = self.key(value)
        if k in self._index:
            return self._index[k]
        self._index[k] = len(self.seen)
        self.seen.append(value)
        return None

    def run(self, emit: Callable[[str], None] = print) -> SearchResult:
        base = self.config.base
        first, _ = reduce_into_range(base)
        self._logger.debug(f"Base {base} reduced to {first}")
        self.record(first)
        for power in range(2, self.config.max_power + 1):
            value, halvings = reduce_into_range(base.powi(power))
            self._logger.debug(f"Power {power} folded with {halvings} halvings")
            emit(f"Power {power}: {value}")
            index = self.record(value)
            if index is not None:
                self._logger.info(f"Power {power} repeats {self.seen[index]} (index {index})")
                emit(f"FOUND IT! It's {index} and {power}")
                return SearchResult(True, power, index, value, list(self.seen))
        self._logger.info(f"No repeat up to power {self.config.max_power}")
        return SearchResult(False, None, None, None, list(self.seen))
