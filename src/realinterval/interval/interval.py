import logging
from typing import Self

import numpy as np

from realinterval.context import getcontext
from realinterval.interval.float32 import (
    Float32Like,
    format_value,
    ldexp,
    round_half_away,
    tofloat32,
    torepr,
    tostr,
    verify_ldexp,
)
from realinterval.misc.formatspec import FormatSpec

logger = logging.getLogger(__name__)

_ZERO = np.float32(0.0)
_SCALAR = np.floating | np.integer | float | int


def _powi(value: np.float32, exponent: int) -> np.float32:
    # float32 cannot hold every odd exponent above 2**24
    return np.float32(np.power(np.float64(value), float(exponent)))


class InvariantError(ValueError):
    """Error raised when an interval with ``min > max`` would be created."""


class RealInterval:
    """Closed interval of single-precision numbers.

    Both bounds are stored as :class:`numpy.float32`. Every scalar passed to the
    constructors or operators is rounded to the nearest single-precision number
    first. Bounds are computed with ordinary rounding, so results enclose the exact
    images only up to that rounding.

    Parameters
    ----------
    min : float | int | str | None, optional
        Lower bound of the interval.
    max : float | int | str | None, optional
        Upper bound of the interval. Defaults to `min`.

    Attributes
    ----------
    min : numpy.float32
        Lower bound of the interval.
    max : numpy.float32
        Upper bound of the interval.

    Raises
    ------
    InvariantError
        If `min` is greater than `max`, or either bound is NaN.

    Examples
    --------
    >>> interval = RealInterval.min_max(-1.0, 2.0)
    >>> shifted_interval = interval + 0.5
    >>> print(shifted_interval)
    [-0.5, 2.5]
    >>> print(RealInterval.min_max(-2.0, 3.0) * interval)
    [-4.0, 6.0]
    >>> print(interval & shifted_interval)
    [-0.5, 2.0]
    >>> print(interval | shifted_interval)
    [-1.0, 2.5]
    """

    __slots__ = ("min", "max")
    __array_ufunc__ = None
    min: np.float32
    max: np.float32

    def __init__(
        self,
        min: Float32Like | None = None,
        max: Float32Like | None = None,
    ):
        if min is None:
            if max is None:
                self.min = self.max = _ZERO
                return

            min = max

        self.min = tofloat32(min)
        self.max = self.min if max is None else tofloat32(max)

        if not self.min <= self.max:
            raise InvariantError(f"min {self.min} was greater than max {self.max}")

    @classmethod
    def _new(cls, min: np.float32, max: np.float32) -> Self:
        result = object.__new__(cls)
        result.min = min
        result.max = max
        return result

    @classmethod
    def min_max(cls, min: Float32Like, max: Float32Like) -> Self:
        """Create an interval from its bounds.

        Raises
        ------
        InvariantError
            If `min` is greater than `max`.
        """
        return cls(min, max)

    @classmethod
    def point(cls, value: Float32Like) -> Self:
        """Create an interval that contains only `value`."""
        value = tofloat32(value)
        return cls._new(value, value)

    @classmethod
    def point_extents(cls, value: Float32Like, half_extent: Float32Like) -> Self:
        """Create the interval ``[value - half_extent, value + half_extent]``.

        Raises
        ------
        InvariantError
            If `half_extent` is negative.
        """
        value = tofloat32(value)
        half_extent = tofloat32(half_extent)

        if not half_extent >= 0.0:
            raise InvariantError(f"extent {half_extent} was less than 0")

        return cls._new(value - half_extent, value + half_extent)

    @classmethod
    def ensure(cls, value: Self | Float32Like) -> Self:
        """Convert `value` to an interval and return its copy."""
        return value.copy() if isinstance(value, cls) else cls.point(value)

    def copy(self) -> Self:
        """Return a shallow copy of the interval."""
        return self._new(self.min, self.max)

    def contains(self, value: Float32Like) -> bool:
        """Return ``True`` if `value` lies within the interval."""
        value = tofloat32(value)
        return bool(self.min <= value <= self.max)

    def len(self) -> np.float32:
        """Return the length ``max - min`` of the interval."""
        return self.max - self.min

    def width(self) -> np.float32:
        """Alias of :meth:`len`."""
        return self.len()

    def mid(self) -> np.float32:
        """Return an approximation of the midpoint.

        ``x.contains(x.mid())`` is ``True`` for any bounded `x`.
        """
        if self.min == -np.inf:
            return _ZERO if self.max == np.inf else self.max

        if self.max == np.inf:
            return self.min

        if abs(self.min) >= 1 and abs(self.max) >= 1:
            return self.min / 2 + self.max / 2

        return (self.min + self.max) / 2

    def mag(self) -> np.float32:
        """Return the magnitude ``max(abs(x.min), abs(x.max))``."""
        return np.fmax(abs(self.min), abs(self.max))

    def mig(self) -> np.float32:
        """Return the mignitude ``min(abs(x.min), abs(x.max))``."""
        return np.fmin(abs(self.min), abs(self.max))

    def hull(self, *args: Self | Float32Like) -> Self:
        """Return the smallest interval enclosing the interval and all `args`."""
        result = self

        for arg in args:
            result = result.union(arg)

        return result

    def isdisjoint(self, other: Self | Float32Like) -> bool:
        """Return ``True`` if the interval has no elements in common with `other`."""
        other = self._operand(other)

        if isinstance(other, RealInterval):
            return bool(self.min > other.max or self.max < other.min)

        return bool(self.min > other or self.max < other)

    def issubset(self, other: Self) -> bool:
        """Test whether every element in the interval is in `other`."""
        if not isinstance(other, RealInterval):
            return False

        return bool(self.min >= other.min and self.max <= other.max)

    def issuperset(self, other: Self) -> bool:
        """Test whether every element in `other` is in the interval."""
        if not isinstance(other, RealInterval):
            return False

        return bool(self.min <= other.min and self.max >= other.max)

    def abs(self) -> Self:
        """Return the interval of absolute values.

        Examples
        --------
        >>> print(RealInterval(-3.0, 2.0).abs())
        [0.0, 3.0]
        >>> print(RealInterval(-3.0, -2.0).abs())
        [2.0, 3.0]
        """
        if self.min < 0.0 <= self.max:
            return self._new(_ZERO, np.fmax(self.max, abs(self.min)))

        a = abs(self.min)
        b = abs(self.max)
        return self._new(np.fmin(a, b), np.fmax(a, b))

    def minimum(self, other: Self) -> Self:
        """Apply the minimum function bound-wise.

        The result is ``[min(x.min, y.min), min(x.max, y.max)]``.
        """
        if not isinstance(other, RealInterval):
            raise TypeError(f"expected RealInterval, got '{type(other).__name__}'")

        return self._new(np.fmin(self.min, other.min), np.fmin(self.max, other.max))

    def maximum(self, other: Self) -> Self:
        """Apply the maximum function bound-wise.

        The result is ``[max(x.min, y.min), max(x.max, y.max)]``.
        """
        if not isinstance(other, RealInterval):
            raise TypeError(f"expected RealInterval, got '{type(other).__name__}'")

        return self._new(np.fmax(self.min, other.min), np.fmax(self.max, other.max))

    def minf(self, value: Float32Like) -> Self:
        """Apply a scalar minimum to both bounds."""
        value = tofloat32(value)
        return self._new(np.fmin(self.min, value), np.fmin(self.max, value))

    def maxf(self, value: Float32Like) -> Self:
        """Apply a scalar maximum to both bounds."""
        value = tofloat32(value)
        return self._new(np.fmax(self.min, value), np.fmax(self.max, value))

    def round(self) -> Self:
        """Round both bounds to the nearest integer, with ties away from zero."""
        return self._new(round_half_away(self.min), round_half_away(self.max))

    def powf(self, exponent: Float32Like) -> Self:
        """Raise the interval to a real power.

        Raises
        ------
        InvariantError
            If the interval contains negative numbers.
        """
        exponent = tofloat32(exponent)

        if not self.min >= 0.0:
            raise InvariantError(f"powf requires min >= 0, got {self.min}")

        if exponent > 0.0:
            return self._new(np.power(self.min, exponent), np.power(self.max, exponent))

        return self._new(np.power(self.max, exponent), np.power(self.min, exponent))

    def powi(self, exponent: int) -> Self:
        """Raise the interval to an integer power.

        Bounds are ordered for the behaviour of positive exponents: even powers
        decrease on negative numbers, odd powers are increasing. A negative
        exponent on an interval not containing zero therefore yields ``min > max``,
        which is logged as a warning.

        Examples
        --------
        >>> print(RealInterval(-1.0, 2.0).powi(2))
        [0.0, 4.0]
        >>> print(RealInterval(-2.0, 1.0).powi(3))
        [-8.0, 1.0]
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int | np.integer):
            raise TypeError(f"expected int, got '{type(exponent).__name__}'")

        exponent = int(exponent)
        inf = _powi(self.min, exponent)
        sup = _powi(self.max, exponent)

        if exponent % 2 != 0:
            result = self._new(inf, sup)
        elif self.min < 0.0 <= self.max:
            result = self._new(_ZERO, np.fmax(inf, sup))
        elif 0.0 <= self.min:
            result = self._new(inf, sup)
        else:
            result = self._new(sup, inf)

        if result.min > result.max:
            logger.warning(
                "powi(%d) of %s produced inverted bounds %s", exponent, self, result
            )

        return result

    def mul_pow2(self, exponent: int) -> Self | None:
        """Multiply the interval by ``2**exponent`` through the exponent field.

        Returns ``None`` if the biased exponent of either bound would leave the range
        ``[0, 255]``.

        Examples
        --------
        >>> print(RealInterval(-1.5, 3.0).mul_pow2(2))
        [-6.0, 12.0]
        >>> print(RealInterval(1.0, 2.0).mul_pow2(200))
        None
        """
        if not (verify_ldexp(self.min, exponent) and verify_ldexp(self.max, exponent)):
            logger.debug("mul_pow2(%d) rejected for %s", exponent, self)
            return None

        return self.mul_pow2_unchecked(exponent)

    def mul_pow2_unchecked(self, exponent: int) -> Self:
        """Multiply the interval by ``2**exponent`` without overflow checking.

        If the exponent field of either bound overflows or underflows, the result is
        not specified.

        Raises
        ------
        OverflowError
            If the current context is strict and the exponent field overflows.
        """
        if getcontext().strict and not (
            verify_ldexp(self.min, exponent) and verify_ldexp(self.max, exponent)
        ):
            raise OverflowError("power-of-two multiply caused overflow")

        return self._new(ldexp(self.min, exponent), ldexp(self.max, exponent))

    def add(self, other: Self | Float32Like) -> Self:
        """Return the bound-wise sum with an interval or a scalar."""
        other = self._operand(other)

        if isinstance(other, RealInterval):
            return self._new(self.min + other.min, self.max + other.max)

        return self._new(self.min + other, self.max + other)

    def subtract(self, other: Self | Float32Like) -> Self:
        """Return the interval of all differences with an interval or a scalar."""
        other = self._operand(other)

        if isinstance(other, RealInterval):
            return self._new(self.min - other.max, self.max - other.min)

        return self._new(self.min - other, self.max - other)

    def multiply(self, other: Self | Float32Like) -> Self:
        """Return the interval of all products with an interval or a scalar.

        Scaling by a negative scalar swaps the bounds. The product of two intervals
        is the hull of the right operand scaled by each bound of the left one.
        """
        other = self._operand(other)

        if isinstance(other, RealInterval):
            return other.multiply(self.min).union(other.multiply(self.max))

        if other >= 0.0:
            return self._new(other * self.min, other * self.max)

        return self._new(other * self.max, other * self.min)

    def negate(self) -> Self:
        return self._new(-self.max, -self.min)

    def intersect(self, other: Self | Float32Like) -> Self | None:
        """Return the intersection, or ``None`` if the operands do not overlap."""
        other = self.ensure(self._operand(other))
        min = np.fmax(self.min, other.min)
        max = np.fmin(self.max, other.max)

        if not min <= max:
            return None

        return self._new(min, max)

    def union(self, other: Self | Float32Like) -> Self:
        """Return the interval hull of the operands.

        Disjoint operands produce an interval that also covers the gap between them.
        """
        other = self.ensure(self._operand(other))
        return self._new(np.fmin(self.min, other.min), np.fmax(self.max, other.max))

    @staticmethod
    def _operand(value) -> "RealInterval | np.float32":
        match value:
            case RealInterval():
                return value

            case np.floating() | np.integer() | float() | int():
                return tofloat32(value)

        raise TypeError(f"unsupported operand type: '{type(value).__name__}'")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min={torepr(self.min)}, max={torepr(self.max)})"

    def __str__(self) -> str:
        return f"[{tostr(self.min)}, {tostr(self.max)}]"

    def __format__(self, format_spec: str) -> str:
        spec = FormatSpec.parse(format_spec)

        if spec.zfill:
            raise ValueError("zero-padding is not allowed in interval format specifier")

        outer, inner = spec.split()
        min = format_value(self.min, inner)
        max = format_value(self.max, inner)
        return outer.format(f"[{min}, {max}]")

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return bool(other.min == self.min and other.max == self.max)

    def __hash__(self) -> int:
        return hash((float(self.min), float(self.max)))

    def __contains__(self, item) -> bool:
        if isinstance(item, RealInterval):
            return item.issubset(self)

        return self.contains(item)

    def __add__(self, rhs: Self | Float32Like) -> Self:
        if not isinstance(rhs, RealInterval | _SCALAR):
            return NotImplemented

        return self.add(rhs)

    def __sub__(self, rhs: Self | Float32Like) -> Self:
        if not isinstance(rhs, RealInterval | _SCALAR):
            return NotImplemented

        return self.subtract(rhs)

    def __mul__(self, rhs: Self | Float32Like) -> Self:
        if not isinstance(rhs, RealInterval | _SCALAR):
            return NotImplemented

        return self.multiply(rhs)

    def __pow__(self, rhs: int | float) -> Self:
        match rhs:
            case bool():
                return NotImplemented

            case int() | np.integer():
                return self.powi(rhs)

            case float() | np.floating():
                return self.powf(rhs)

        return NotImplemented

    def __and__(self, rhs: Self | Float32Like) -> Self | None:
        if not isinstance(rhs, RealInterval | _SCALAR):
            return NotImplemented

        return self.intersect(rhs)

    def __or__(self, rhs: Self | Float32Like) -> Self:
        if not isinstance(rhs, RealInterval | _SCALAR):
            return NotImplemented

        return self.union(rhs)

    def __radd__(self, lhs: Float32Like) -> Self:
        return self.__add__(lhs)

    def __rsub__(self, lhs: Float32Like) -> Self:
        if not isinstance(lhs, _SCALAR):
            return NotImplemented

        return self.negate().add(lhs)

    def __rmul__(self, lhs: Float32Like) -> Self:
        return self.__mul__(lhs)

    def __rand__(self, lhs: Float32Like) -> Self | None:
        return self.__and__(lhs)

    def __ror__(self, lhs: Float32Like) -> Self:
        return self.__or__(lhs)

    def __neg__(self) -> Self:
        return self.negate()

    def __pos__(self) -> Self:
        return self.copy()

    def __abs__(self) -> Self:
        return self.abs()

    def __round__(self) -> Self:
        return self.round()

    def __copy__(self) -> Self:
        return self.copy()
