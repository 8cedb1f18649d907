"""
##########################################
Configuration (:mod:`realinterval.context`)
##########################################

.. currentmodule:: realinterval.context

This module provides the per-thread configuration of interval operations.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Self


class Context:
    """Create a new context.

    Parameters
    ----------
    strict : bool, default=False
        If ``True``, :meth:`RealInterval.mul_pow2_unchecked` verifies that the
        exponent field of neither bound overflows and raises :exc:`OverflowError`
        otherwise. This is meant for debugging callers that rely on the unchecked
        variant.
    """

    __slots__ = ("_strict",)
    _strict: bool

    def __init__(self, strict: bool = False):
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def copy(self) -> Self:
        return self.__class__(self._strict)

    def __repr__(self):
        return f"{type(self).__name__}(strict={self._strict!r})"

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("realinterval")


def getcontext() -> Context:
    """Return the context consulted by :meth:`RealInterval.mul_pow2_unchecked`.

    A non-strict :class:`Context` is installed the first time this is called in a
    thread or task that has none yet.
    """
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Install `ctx`, so that its ``strict`` flag governs subsequent unchecked
    power-of-two scaling.

    Unlike :func:`localcontext`, the previous context is not restored.
    """
    _var.set(ctx)


@contextlib.contextmanager
def localcontext(ctx: Context | None = None, *, strict: bool | None = None):
    """Run a with-block under a fresh context derived from `ctx`.

    Parameters
    ----------
    ctx : Context, optional
        Context to derive from. Defaults to the current context.
    strict : bool, optional
        Overrides the ``strict`` flag of `ctx` inside the block.

    The previous context is restored when the block exits, even on error.

    Examples
    --------
    >>> with localcontext(strict=True) as ctx:
    ...     ctx.strict
    True
    >>> getcontext().strict
    False
    """
    if ctx is None:
        ctx = getcontext()

    if strict is None:
        strict = ctx.strict

    ctx = Context(strict)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
