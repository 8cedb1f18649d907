from .context import Context, getcontext, localcontext, setcontext
from .interval import InvariantError, RealInterval

__all__ = [
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "InvariantError",
    "RealInterval",
]
