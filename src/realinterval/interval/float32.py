import math
import operator

import numpy as np

from realinterval.misc.formatspec import FormatSpec

Float32Like = np.floating | np.integer | float | int | str

_EXPONENT_SHIFT = 23
_EXPONENT_MASK = 0xFF
_WORD_MASK = 0xFFFFFFFF


def tofloat32(value: Float32Like) -> np.float32:
    """Convert `value` to the nearest single-precision number.

    Raises
    ------
    TypeError
        If `value` is not a real scalar or a string.
    ValueError
        If `value` is a string that does not represent a number.
    """
    match value:
        case np.float32():
            return value

        case np.floating() | np.integer() | float() | int():
            return np.float32(value)

        case str():
            try:
                return np.float32(float(value))
            except ValueError:
                raise ValueError(f"could not convert string to float32: '{value}'")

    raise TypeError(f"unsupported endpoint type: {type(value).__name__}")


def tobits(value: Float32Like) -> int:
    """Return the binary32 bit pattern of `value` as an unsigned integer."""
    return int(np.array(tofloat32(value), dtype=np.float32).view(np.uint32))


def frombits(bits: int) -> np.float32:
    """Reinterpret the low 32 bits of `bits` as a binary32 number."""
    return np.array(bits & _WORD_MASK, dtype=np.uint32).view(np.float32)[()]


def exponent_field(value: Float32Like) -> int:
    """Return the biased 8-bit exponent field of `value`.

    Examples
    --------
    >>> exponent_field(1.0)
    127
    >>> exponent_field(0.0)
    0
    """
    return (tobits(value) >> _EXPONENT_SHIFT) & _EXPONENT_MASK


def verify_ldexp(value: Float32Like, exp: int) -> bool:
    """Return ``True`` if ``ldexp(value, exp)`` keeps the exponent field within
    ``[0, 255]``."""
    exp = operator.index(exp)
    field = exponent_field(value)

    if exp > 0:
        return exp <= _EXPONENT_MASK and field + exp <= _EXPONENT_MASK

    return field + exp >= 0


def ldexp(value: Float32Like, exp: int) -> np.float32:
    """Multiply `value` by ``2**exp`` by adding `exp` to the exponent field.

    The addition wraps at 32 bits. Zero, subnormals, infinities, and NaN are not
    treated specially, so the result is only meaningful when
    :func:`verify_ldexp` holds and `value` is a normal number.

    Examples
    --------
    >>> float(ldexp(3.0, 4))
    48.0
    >>> float(ldexp(-0.75, -1))
    -0.375
    """
    exp = operator.index(exp)
    return frombits(tobits(value) + (exp << _EXPONENT_SHIFT))


def round_half_away(value: np.float32) -> np.float32:
    """Round to the nearest integer, with ties rounded away from zero."""
    if not np.isfinite(value):
        return value

    result = np.trunc(value)

    # value - trunc(value) is exact in binary32
    if abs(value - result) >= 0.5:
        result += np.copysign(np.float32(1.0), value)

    return result


def tostr(value: np.float32) -> str:
    """Return the shortest decimal text that round-trips through binary32."""
    return str(value)


def torepr(value: np.float32) -> str:
    if not math.isfinite(value):
        return repr(float(value))

    return f"<{float(value).hex()}>"


def format_value(value: np.float32, spec: FormatSpec) -> str:
    """Format `value` according to `spec`.

    Without a precision or presentation type, the shortest binary32 text is used
    instead of the exact double expansion.
    """
    if spec.prec is None and spec.type is None:
        return spec.format(float(tostr(value)))

    return spec.format(float(value))
