import copy

import pytest

from realinterval import RealInterval
from realinterval.context import Context, getcontext, localcontext, setcontext


def test_localcontext():
    default = getcontext()
    assert not default.strict

    with localcontext(strict=True) as ctx:
        assert getcontext() is ctx
        assert ctx.strict

        with localcontext() as inner:
            assert inner.strict

    assert getcontext() is default


def test_setcontext():
    previous = getcontext()

    try:
        ctx = Context(strict=True)
        setcontext(ctx)
        assert getcontext() is ctx
        assert copy.copy(ctx).strict
        assert repr(ctx) == "Context(strict=True)"
    finally:
        setcontext(previous)


def test_strict_context_governs_unchecked_scaling():
    x = RealInterval(1.0, 2.0)
    previous = getcontext()

    try:
        setcontext(Context(strict=True))

        with pytest.raises(OverflowError):
            x.mul_pow2_unchecked(200)
    finally:
        setcontext(previous)

    assert x.mul_pow2_unchecked(2) == RealInterval(4.0, 8.0)


def test_localcontext_restores_on_error():
    previous = getcontext()

    with pytest.raises(OverflowError):
        with localcontext(strict=True):
            RealInterval(1.0, 2.0).mul_pow2_unchecked(200)

    assert getcontext() is previous
