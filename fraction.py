from __future__ import annotations
import re
from enum import IntEnum
from typing import Tuple, Union

from integers import IntegerWidth, U128, WidthOverflowError, gcd, lcm

Pair = Tuple[int, int]

_FRACTION_RE = re.compile(r"^\s*(\d+)\s*(?:/\s*(\d+))?\s*$")


class NegativeFractionError(ArithmeticError):
	pass


class Ordering(IntEnum):
	LESS = -1
	EQUAL = 0
	GREATER = 1


def _check_field(value: int, name: str) -> None:
	if isinstance(value, bool) or not isinstance(value, int):
		raise TypeError(f"{name} must be an int, got {type(value).__name__}")
	if value < 0:
		raise ValueError(f"{name} must be non-negative, got {value}")


def _reduce(top: int, bottom: int) -> Pair:
	if bottom == 0:
		raise ZeroDivisionError(f"zero denominator in {top}/0")
	g = gcd(top, bottom)
	return top // g, bottom // g


def _as_pair(x: Union[_Rational, int]) -> Pair:
	if isinstance(x, _Rational):
		return x._pair()
	if isinstance(x, int) and not isinstance(x, bool):
		_check_field(x, "integer operand")
		return x, 1
	raise TypeError(f"cannot use {type(x).__name__} as a fraction")


def _scaled(a: Pair, b: Pair, width: IntegerWidth, what: str) -> Tuple[int, int, int]:
	(at, ab), (bt, bb) = a, b
	l = lcm(ab, bb, width)
	return width.check(at * (l // ab), what), width.check(bt * (l // bb), what), l


def _add(a: Pair, b: Pair, width: IntegerWidth) -> Pair:
	x, y, l = _scaled(a, b, width, "addition")
	return _reduce(width.check(x + y, "addition"), l)


def _sub(a: Pair, b: Pair, width: IntegerWidth) -> Pair:
	x, y, l = _scaled(a, b, width, "subtraction")
	if x < y:
		raise NegativeFractionError(f"{a[0]}/{a[1]} - {b[0]}/{b[1]} is negative")
	return _reduce(x - y, l)


def _mul(a: Pair, b: Pair, width: IntegerWidth) -> Pair:
	(at, ab), (bt, bb) = a, b
	# cross-cancel so neither operand order grows past the result;
	# an integer operand reduces to cancelling it against our denominator
	g1, g2 = gcd(at, bb), gcd(bt, ab)
	top = width.check((at // g1) * (bt // g2), "multiplication")
	bottom = width.check((ab // g2) * (bb // g1), "multiplication")
	return _reduce(top, bottom)


def _div(a: Pair, b: Pair, width: IntegerWidth) -> Pair:
	(at, ab), (bt, bb) = a, b
	if bt == 0:
		raise ZeroDivisionError("division by zero")
	g1, g2 = gcd(at, bt), gcd(ab, bb)
	top = width.check((at // g1) * (bb // g2), "division")
	bottom = width.check((ab // g2) * (bt // g1), "division")
	return _reduce(top, bottom)


def _pow(a: Pair, power: int, width: IntegerWidth) -> Pair:
	if isinstance(power, bool) or not isinstance(power, int):
		raise TypeError(f"power must be an int, got {type(power).__name__}")
	if power < 0:
		raise ValueError(f"power must be non-negative, got {power}")
	at, ab = a
	if width.is_bounded():
		# refuse exponents that cannot fit before building huge ints
		for v in (at, ab):
			if v > 1 and (v.bit_length() - 1) * power >= width.bits:
				raise WidthOverflowError(f"power overflows {width.name}: {v}**{power}")
	top = width.check(at ** power, "power")
	bottom = width.check(ab ** power, "power")
	return _reduce(top, bottom)


def compare(a: Union[_Rational, int], b: Union[_Rational, int]) -> Ordering:
	"""Exact three-way comparison.

	Identical canonical fields are equal without any arithmetic; otherwise the
	cross products a.top*b.bottom and b.top*a.bottom are compared. Python ints
	do not overflow, so the comparison is exact at every width.
	"""
	at, ab = _as_pair(a)
	bt, bb = _as_pair(b)
	if at == bt and ab == bb:
		return Ordering.EQUAL
	lhs, rhs = at * bb, bt * ab
	if lhs < rhs:
		return Ordering.LESS
	if lhs > rhs:
		return Ordering.GREATER
	return Ordering.EQUAL


def approx_compare(a: Union[_Rational, int], b: Union[_Rational, int]) -> Ordering:
	"""Three-way comparison through float quotients.

	Distinct fractions closer together than float resolution compare EQUAL,
	so this is not a total order over exact values. Use `compare` for that.
	"""
	at, ab = _as_pair(a)
	bt, bb = _as_pair(b)
	if at == bt and ab == bb:
		return Ordering.EQUAL
	first, second = at / ab, bt / bb
	if first < second:
		return Ordering.LESS
	if first > second:
		return Ordering.GREATER
	return Ordering.EQUAL


class _Rational:
	"""Value arithmetic shared by Fraction and MutableFraction.

	Every operator returns a new canonical Fraction; none of them touch self.
	"""
	__slots__ = ()

	def _pair(self) -> Pair:
		raise NotImplementedError

	@property
	def top(self) -> int:
		return self._pair()[0]

	@property
	def bottom(self) -> int:
		return self._pair()[1]

	@property
	def width(self) -> IntegerWidth:
		return self._width

	def _make(self, pair: Pair) -> Fraction:
		return Fraction(pair[0], pair[1], self._width)

	def _coerce(self, other):
		if isinstance(other, _Rational):
			return other._pair()
		if isinstance(other, int) and not isinstance(other, bool):
			_check_field(other, "integer operand")
			return self._width.check(other, "integer operand"), 1
		return NotImplemented

	def simplify(self) -> Fraction:
		return self._make(self._pair())

	def powi(self, power: int) -> Fraction:
		return self._make(_pow(self._pair(), power, self._width))

	def reciprocal(self) -> Fraction:
		top, bottom = self._pair()
		return Fraction(bottom, top, self._width)

	def is_zero(self) -> bool:
		return self._pair()[0] == 0

	def is_integer(self) -> bool:
		return self._pair()[1] == 1

	def __add__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._make(_add(self._pair(), o, self._width))

	__radd__ = __add__

	def __sub__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._make(_sub(self._pair(), o, self._width))

	def __rsub__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._make(_sub(o, self._pair(), self._width))

	def __mul__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._make(_mul(self._pair(), o, self._width))

	__rmul__ = __mul__

	def __truediv__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._make(_div(self._pair(), o, self._width))

	def __rtruediv__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._make(_div(o, self._pair(), self._width))

	def __floordiv__(self, other) -> int:
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		(at, ab), (bt, bb) = self._pair(), o
		if bt == 0:
			raise ZeroDivisionError("integer division by zero")
		return (at * bb) // (ab * bt)

	def __pow__(self, power: int) -> Fraction:
		return self.powi(power)

	def __eq__(self, other) -> bool:
		if isinstance(other, int) and not isinstance(other, bool) and not self._width.fits(other):
			return False
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._pair() == o

	def __lt__(self, other) -> bool:
		if self._coerce(other) is NotImplemented:
			return NotImplemented
		return compare(self, other) is Ordering.LESS

	def __le__(self, other) -> bool:
		if self._coerce(other) is NotImplemented:
			return NotImplemented
		return compare(self, other) is not Ordering.GREATER

	def __gt__(self, other) -> bool:
		if self._coerce(other) is NotImplemented:
			return NotImplemented
		return compare(self, other) is Ordering.GREATER

	def __ge__(self, other) -> bool:
		if self._coerce(other) is NotImplemented:
			return NotImplemented
		return compare(self, other) is not Ordering.LESS

	def __bool__(self) -> bool:
		return not self.is_zero()

	def __float__(self) -> float:
		top, bottom = self._pair()
		return top / bottom

	def __int__(self) -> int:
		top, bottom = self._pair()
		return top // bottom

	def to_string(self) -> str:
		top, bottom = self._pair()
		return f"{top}/{bottom}"

	def __str__(self) -> str:
		return self.to_string()


class Fraction(_Rational):
	"""Non-negative rational number kept in lowest terms."""
	__slots__ = ("_top", "_bottom", "_width")

	def __init__(self, top: int, bottom: int = 1, width: IntegerWidth = U128) -> None:
		_check_field(top, "numerator")
		_check_field(bottom, "denominator")
		width.check(top, "numerator")
		width.check(bottom, "denominator")
		self._top, self._bottom = _reduce(top, bottom)
		self._width = width

	@classmethod
	def parse(cls, text: str, width: IntegerWidth = U128) -> Fraction:
		m = _FRACTION_RE.match(text)
		if m is None:
			raise ValueError(f"not a fraction: {text!r}")
		top, bottom = m.group(1), m.group(2)
		return cls(int(top), 1 if bottom is None else int(bottom), width)

	def _pair(self) -> Pair:
		return self._top, self._bottom

	def thaw(self) -> MutableFraction:
		return MutableFraction(self._top, self._bottom, self._width)

	def __hash__(self) -> int:
		# equal ints must hash alike
		if self._bottom == 1:
			return hash(self._top)
		return hash((self._top, self._bottom))

	def __repr__(self) -> str:
		return f"Fraction({self._top}, {self._bottom})"


class MutableFraction(_Rational):
	"""A fraction with in-place operations.

	Only divide_by_integer defers normalization; every read of the fields
	(comparison, display, arithmetic, freeze) reduces first. Unhashable.
	"""
	__slots__ = ("_top", "_bottom", "_width", "_dirty")
	__hash__ = None

	def __init__(self, top: int, bottom: int = 1, width: IntegerWidth = U128) -> None:
		_check_field(top, "numerator")
		_check_field(bottom, "denominator")
		width.check(top, "numerator")
		width.check(bottom, "denominator")
		self._top, self._bottom = _reduce(top, bottom)
		self._width = width
		self._dirty = False

	def _pair(self) -> Pair:
		self.simplify_in_place()
		return self._top, self._bottom

	def is_normalized(self) -> bool:
		return not self._dirty

	def simplify_in_place(self) -> None:
		if self._dirty:
			self._top, self._bottom = _reduce(self._top, self._bottom)
			self._dirty = False

	def freeze(self) -> Fraction:
		return self.simplify()

	def divide_by_integer(self, n: int) -> None:
		_check_field(n, "divisor")
		if n == 0:
			raise ZeroDivisionError("division by zero")
		if self._top % n == 0:
			self._top //= n
		else:
			self._bottom = self._width.check(self._bottom * n, "division")
			self._dirty = True

	def subtract_integer(self, n: int) -> None:
		_check_field(n, "subtrahend")
		top = self._top - self._bottom * n
		if top < 0:
			raise NegativeFractionError(f"{self._top}/{self._bottom} - {n} is negative")
		self._top = top
		self._dirty = True
		self.simplify_in_place()

	def _assign(self, pair: Pair) -> MutableFraction:
		self._top, self._bottom = pair
		self._dirty = False
		return self

	def __iadd__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._assign(_add(self._pair(), o, self._width))

	def __isub__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._assign(_sub(self._pair(), o, self._width))

	def __imul__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		return self._assign(_mul(self._pair(), o, self._width))

	def __itruediv__(self, other):
		o = self._coerce(other)
		if o is NotImplemented:
			return o
		if o[1] == 1:
			self.divide_by_integer(o[0])
			self.simplify_in_place()
			return self
		return self._assign(_div(self._pair(), o, self._width))

	def __repr__(self) -> str:
		top, bottom = self._pair()
		return f"MutableFraction({top}, {bottom})"
