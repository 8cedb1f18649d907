"""
###################################################
Interval arithmetic (:mod:`realinterval.interval`)
###################################################

.. currentmodule:: realinterval.interval

This module provides single-precision closed intervals.

Intervals
=========

.. autosummary::
    :toctree: generated/

    RealInterval

Single-precision helpers
========================

.. autosummary::
    :toctree: generated/

    exponent_field
    ldexp
    verify_ldexp

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    InvariantError

"""

from .float32 import exponent_field, ldexp, verify_ldexp
from .interval import InvariantError, RealInterval

__all__ = [
    "exponent_field",
    "ldexp",
    "verify_ldexp",
    "InvariantError",
    "RealInterval",
]
