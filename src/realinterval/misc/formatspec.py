import dataclasses
import re
from typing import Literal, Self

_PATTERN = re.compile(
    r"(?:(?P<fill>[\s\S])?(?P<align>[<>=^]))?"
    r"(?P<sign>[-+ ])?"
    r"(?P<z>z)?"
    r"(?P<alt>#)?"
    r"(?P<zfill>0)?"
    r"(?P<width>\d+)?"
    r"(?P<grouping>[_,])?"
    r"(?:\.(?P<prec>\d+))?"
    r"(?P<type>[eEfFgGn%])?"
)


@dataclasses.dataclass(frozen=True, slots=True)
class FormatSpec:
    r"""Parsed standard format specification for a real number.

    See `Python's documentation
    <https://docs.python.org/3/library/string.html#formatspec>`__ for the meaning of
    each field.

    Examples
    --------
    >>> x = FormatSpec.parse(">12.3f")
    >>> x.width, x.prec, x.type
    (12, 3, 'f')
    >>> str(x)
    '>12.3f'
    >>> outer, inner = x.split()
    >>> str(outer), str(inner)
    ('>12', '.3f')
    """

    fill: str = " "
    align: Literal["<", ">", "=", "^"] | None = None
    sign: Literal["+", "-", " "] = "-"
    z: bool = False
    alt: bool = False
    zfill: bool = False
    width: int | None = None
    grouping: Literal["_", ","] | None = None
    prec: int | None = None
    type: Literal["e", "E", "f", "F", "g", "G", "n", "%"] | None = None

    @classmethod
    def parse(cls, format_spec: str) -> Self:
        """Parse `format_spec`.

        Raises
        ------
        ValueError
            If `format_spec` is not a valid specification for a real number.
        """
        if not format_spec:
            return cls()

        if (match := _PATTERN.fullmatch(format_spec)) is None:
            raise ValueError(f"invalid format specifier: '{format_spec}'")

        return cls(
            fill=match.group("fill") or " ",
            align=match.group("align"),  # type: ignore
            sign=match.group("sign") or "-",  # type: ignore
            z=match.group("z") is not None,
            alt=match.group("alt") is not None,
            zfill=match.group("zfill") is not None,
            width=int(w) if (w := match.group("width")) is not None else None,
            grouping=match.group("grouping"),  # type: ignore
            prec=int(p) if (p := match.group("prec")) is not None else None,
            type=match.group("type"),  # type: ignore
        )

    def format(self, value: object) -> str:
        """Shorthand for ``format(value, str(self))``."""
        return format(value, str(self))

    def replace(self, **changes) -> Self:
        return dataclasses.replace(self, **changes)

    def split(self) -> tuple[Self, Self]:
        """Split into the layout part (fill, align, width) and the numeric part.

        The layout part applies to a whole rendered interval, the numeric part to
        each of its bounds.
        """
        outer = self.__class__(fill=self.fill, align=self.align, width=self.width)
        inner = self.replace(fill=" ", align=None, zfill=False, width=None)
        return outer, inner

    def __str__(self) -> str:
        result = ""

        if self.align is not None:
            if self.fill != " ":
                result += self.fill

            result += self.align

        if self.sign != "-":
            result += self.sign

        if self.z:
            result += "z"

        if self.alt:
            result += "#"

        if self.zfill:
            result += "0"

        if self.width is not None:
            result += str(self.width)

        if self.grouping is not None:
            result += self.grouping

        if self.prec is not None:
            result += f".{self.prec}"

        if self.type is not None:
            result += self.type

        return result

    def __bool__(self) -> bool:
        return self != self.__class__()
