from typing import Union

from fraction import Fraction

Number = Union[Fraction, int]


class Interval:
    a: Fraction
    b: Fraction
    left_open: bool
    right_open: bool

    @staticmethod
    def empty():
        return Interval(0, 0, False, True)

    @staticmethod
    def point(p: Number):
        return Interval(p, p, False, False)

    @staticmethod
    def open(l: Number, r: Number):
        return Interval(l, r, True, True)

    @staticmethod
    def closed(l: Number, r: Number):
        return Interval(l, r, False, False)

    @staticmethod
    def left_open(l: Number, r: Number):
        return Interval(l, r, True, False)

    @staticmethod
    def right_open(l: Number, r: Number):
        return Interval(l, r, False, True)

    def __init__(self, l: Number, r: Number, lo: bool = False, ro: bool = True):
        self.a = l if isinstance(l, Fraction) else Fraction(l)
        self.b = r if isinstance(r, Fraction) else Fraction(r)
        self.left_open = lo
        self.right_open = ro

    def is_empty(self):
        return self.a > self.b or (
            self.a == self.b and (self.left_open or self.right_open)
        )

    def below(self, x) -> bool:
        """True if x lies left of the interval."""
        return x <= self.a if self.left_open else x < self.a

    def above(self, x) -> bool:
        """True if x lies right of the interval."""
        return x >= self.b if self.right_open else x > self.b

    def contains(self, x) -> bool:
        if self.is_empty():
            return False
        return not self.below(x) and not self.above(x)

    def __contains__(self, x) -> bool:
        return self.contains(x)

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return (self.a, self.b, self.left_open, self.right_open) == (
            other.a, other.b, other.left_open, other.right_open
        )

    def __str__(self):
        s = "(" if self.left_open else "["
        s += str(self.a)
        s += ", "
        s += str(self.b)
        s += ")" if self.right_open else "]"
        return s


# Every reduced power lands here.
REDUCTION_RANGE = Interval.right_open(1, 2)
