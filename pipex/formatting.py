"""printf-style formatting with the conversions c, s, p, d, i, u, x, X and %.

Flags ``#``, ``0``, ``-``, ``+`` and space, a field width and a precision
are understood. Integers behave as 32-bit C ints (``d``/``i`` signed,
``u``/``x``/``X`` unsigned) and pointers as 64-bit addresses, so values
outside those ranges wrap. A ``%`` that does not start a complete
conversion is copied to the output unchanged.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Any

__all__ = ["FormatSpec", "format_string", "printf"]

_INT_MIN = -(2**31)
_UINT_MASK = 0xFFFFFFFF
_POINTER_MASK = 0xFFFFFFFFFFFFFFFF

_CONVERSION = re.compile(r"%([-+ 0#]*)([1-9][0-9]*)?(?:\.([0-9]*))?([cspdiuxX%])")


@dataclass(frozen=True)
class FormatSpec:
    """One parsed conversion: its flags, width, precision and specifier."""

    specifier: str
    alternate: bool = False
    zero_pad: bool = False
    left_align: bool = False
    plus: bool = False
    space: bool = False
    width: int = 0
    precision: int = 0
    has_precision: bool = False

    @classmethod
    def parse(cls, template: str, start: int) -> tuple[FormatSpec, int] | None:
        """Parse the conversion beginning at *start* in *template*.

        Returns the spec and the index just past its specifier, or None if
        no complete conversion begins there.
        """
        match = _CONVERSION.match(template, start)
        if match is None:
            return None
        flags, width, precision, specifier = match.groups()
        spec = cls(
            specifier=specifier,
            alternate="#" in flags,
            zero_pad="0" in flags,
            left_align="-" in flags,
            plus="+" in flags,
            space=" " in flags,
            width=int(width) if width else 0,
            precision=int(precision) if precision else 0,
            has_precision=precision is not None,
        )
        return spec, match.end()

    @property
    def _suppresses_zero(self) -> bool:
        return self.has_precision and self.precision == 0


def _int32(value: Any, spec: FormatSpec) -> int:
    if not isinstance(value, int):
        raise TypeError(f"%{spec.specifier} requires an integer, got {type(value).__name__}")
    value &= _UINT_MASK
    return value - 2**32 if value >= 2**31 else value


def _uint32(value: Any, spec: FormatSpec) -> int:
    if not isinstance(value, int):
        raise TypeError(f"%{spec.specifier} requires an integer, got {type(value).__name__}")
    return value & _UINT_MASK


def _decimal_digits(number: int) -> int:
    if number == 0:
        return 1
    if number == _INT_MIN:
        # The magnitude of INT_MIN does not fit in an int; it counts no digits.
        return 0
    return len(str(abs(number)))


def _render_char(spec: FormatSpec, value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        char = value
    elif isinstance(value, int):
        char = chr(value & 0xFF)
    else:
        raise TypeError(f"%c requires a character or an integer, got {type(value).__name__}")
    padding = " " * (spec.width - 1)
    return char + padding if spec.left_align else padding + char


def _render_str(spec: FormatSpec, value: Any) -> str:
    if value is None:
        value = "" if spec.has_precision and spec.precision < 6 else "(null)"
    elif not isinstance(value, str):
        raise TypeError(f"%s requires a string, got {type(value).__name__}")
    value = value.split("\0", 1)[0]
    length = len(value)
    if spec.has_precision and spec.precision < length:
        length = spec.precision
    shown = value[: max(length, 0)]
    padding = " " * (spec.width - length)
    return shown + padding if spec.left_align else padding + shown


def _render_int(spec: FormatSpec, value: Any) -> str:
    number = _int32(value, spec)
    if spec._suppresses_zero and number == 0:
        return " " * spec.width

    field = spec.width - max(_decimal_digits(number), spec.precision)
    if spec.plus or spec.space or number < 0:
        field -= 1
    field = max(field, 0)
    zero = spec.zero_pad and not spec.has_precision and not spec.left_align

    if number == _INT_MIN:
        body = "-2147483648"
    else:
        parts = []
        if number > 0 and spec.plus and not zero:
            parts.append("+")
        if number < 0:
            parts.append("-")
            number = -number
        if zero and spec.precision == 0:
            if spec.plus and number > 0:
                parts.append("+")
            parts.append("0" * field)
        parts.append("0" * (spec.precision - _decimal_digits(number)))
        parts.append(str(number))
        body = "".join(parts)

    prefix = " " if spec.space and not spec.plus and number >= 0 else ""
    if spec.left_align:
        return prefix + body + " " * field
    return prefix + ("" if zero else " " * field) + body


def _render_unsigned(spec: FormatSpec, value: Any) -> str:
    number = _uint32(value, spec)
    if spec._suppresses_zero and number == 0:
        return " " * spec.width

    digits = str(number)
    field = max(spec.width - max(len(digits), spec.precision), 0)
    zero = spec.zero_pad and not spec.has_precision and not spec.left_align
    body = ("0" * field if zero and spec.precision == 0 else "")
    body += "0" * (spec.precision - len(digits)) + digits

    if spec.left_align:
        return body + " " * field
    return ("" if zero else " " * field) + body


def _render_hex(spec: FormatSpec, value: Any) -> str:
    number = _uint32(value, spec)
    if spec._suppresses_zero and number == 0:
        return " " * spec.width

    digits = format(number, "X" if spec.specifier == "X" else "x")
    prefix_len = 2 if spec.alternate else 0
    field = max(spec.width - max(len(digits), spec.precision) - prefix_len, 0)
    zero = spec.zero_pad and not spec.has_precision and not spec.left_align

    body = "0" + spec.specifier if spec.alternate else ""
    if zero:
        body += "0" * field
    body += "0" * (spec.precision - len(digits)) + digits

    if spec.left_align:
        return body + " " * field
    return ("" if zero else " " * field) + body


def _render_pointer(spec: FormatSpec, value: Any) -> str:
    if value is None or value == 0:
        return _render_str(spec, "(nil)")
    if not isinstance(value, int):
        raise TypeError(f"%p requires an integer address, got {type(value).__name__}")
    digits = format(value & _POINTER_MASK, "x")
    counted = len(digits) + 2
    field = max(spec.width - counted, 0)
    zero = spec.zero_pad and not spec.left_align

    body = "0x" + ("0" * field if zero else "")
    body += "0" * (spec.precision - counted) + digits

    if spec.left_align:
        return body + " " * field
    return ("" if zero else " " * field) + body


_RENDERERS = {
    "c": _render_char,
    "s": _render_str,
    "p": _render_pointer,
    "d": _render_int,
    "i": _render_int,
    "u": _render_unsigned,
    "x": _render_hex,
    "X": _render_hex,
}


def format_string(template: str, *args: Any) -> str:
    """Return *template* with its conversions replaced by *args* in order.

    Raises TypeError if there are too few arguments or one has the wrong
    type for its conversion. Surplus arguments are ignored.
    """
    remaining = iter(args)
    pieces: list[str] = []
    position = 0
    while position < len(template):
        parsed = FormatSpec.parse(template, position)
        if parsed is None:
            pieces.append(template[position])
            position += 1
            continue
        spec, position = parsed
        if spec.specifier == "%":
            pieces.append("%")
            continue
        try:
            argument = next(remaining)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None
        pieces.append(_RENDERERS[spec.specifier](spec, argument))
    return "".join(pieces)


def printf(template: str, *args: Any) -> int:
    """Write the formatted text to standard output and return its length."""
    text = format_string(template, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text)