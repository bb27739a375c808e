from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


class WidthOverflowError(OverflowError):
	pass


@dataclass(frozen=True)
class IntegerWidth:
	name: str
	bits: Optional[int]     # None means unbounded

	@property
	def max_value(self) -> Optional[int]:
		if self.bits is None:
			return None
		return (1 << self.bits) - 1

	def is_bounded(self) -> bool:
		return self.bits is not None

	def fits(self, value: int) -> bool:
		return value >= 0 and (self.bits is None or value <= self.max_value)

	def check(self, value: int, what: str = "value") -> int:
		"""Return `value` unchanged, or raise if it does not fit this width."""
		if not self.fits(value):
			raise WidthOverflowError(f"{what} overflows {self.name}: {value}")
		return value


_REGISTRY = {
	"u8":        8,
	"uint8":     8,
	"u16":       16,
	"uint16":    16,
	"u32":       32,
	"uint32":    32,
	"u64":       64,
	"uint64":    64,
	"u128":      128,
	"uint128":   128,
	"unbounded": None,
	"bigint":    None,
}

U128 = IntegerWidth("u128", 128)
UNBOUNDED = IntegerWidth("unbounded", None)


def get_width(name: str) -> IntegerWidth:
	key = (name or "u128").lower()
	try:
		bits = _REGISTRY[key]
	except KeyError:
		raise NotImplementedError(f"Width '{name}' not implemented. Supported widths {sorted(_REGISTRY)}")
	return IntegerWidth(key, bits)


def gcd(a: int, b: int) -> int:
	"""Greatest common divisor of two non-negative integers, not both zero."""
	if a < 0 or b < 0:
		raise ValueError(f"gcd requires non-negative integers, got {a} and {b}")
	if a == 0 and b == 0:
		raise ValueError("gcd(0, 0) is undefined")
	x, y = (a, b) if a > b else (b, a)
	while y != 0:
		x, y = y, x % y
	return x


def lcm(a: int, b: int, width: Optional[IntegerWidth] = None) -> int:
	g = gcd(a, b)
	if width is not None:
		width.check(a * b, "lcm product")
	return a * b // g
