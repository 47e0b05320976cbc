"""Kernel-style formatted printing with 32-bit integer semantics."""

from __future__ import annotations

import enum
from typing import Any, Callable, Iterator, Tuple

_MASK = 0xFFFFFFFF
_SIGN_BIT = 0x80000000
_UPPER = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "0123456789abcdefghijklmnopqrstuvwxyz"
_DIGITS = "0123456789"


class Flag(enum.IntFlag):
    """Conversion flags understood by :func:`number`."""

    ZEROPAD = 1
    SIGN = 2
    PLUS = 4
    SPACE = 8
    LEFT = 16
    SPECIAL = 32
    SMALL = 64


_FLAG_CHARS = {
    "-": Flag.LEFT,
    "+": Flag.PLUS,
    " ": Flag.SPACE,
    "#": Flag.SPECIAL,
    "0": Flag.ZEROPAD,
}


def number(num: int, base: int, size: int, precision: int, flags: int) -> str:
    """Render a 32-bit integer in ``base`` with field width and precision."""
    flags = Flag(flags)
    digits = _LOWER if flags & Flag.SMALL else _UPPER
    if flags & Flag.LEFT:
        flags &= ~Flag.ZEROPAD
    if not 2 <= base <= 36:
        raise ValueError(f"base must lie between 2 and 36, not {base}")

    pad = "0" if flags & Flag.ZEROPAD else " "
    value = num & _MASK
    if flags & Flag.SIGN and value & _SIGN_BIT:
        sign = "-"
        value = -value & _MASK
    elif flags & Flag.PLUS:
        sign = "+"
    elif flags & Flag.SPACE:
        sign = " "
    else:
        sign = ""

    if sign:
        size -= 1
    if flags & Flag.SPECIAL:
        if base == 16:
            size -= 2
        elif base == 8:
            size -= 1

    rendered = []
    while True:
        value, remainder = divmod(value, base)
        rendered.append(digits[remainder])
        if not value:
            break
    body = "".join(reversed(rendered))

    precision = max(precision, len(body))
    size -= precision

    out = []
    if not flags & (Flag.ZEROPAD | Flag.LEFT):
        out.append(" " * max(size, 0))
        size = 0
    out.append(sign)
    if flags & Flag.SPECIAL:
        if base == 8:
            out.append("0")
        elif base == 16:
            out.append("0" + digits[33])
    if not flags & Flag.LEFT:
        out.append(pad * max(size, 0))
        size = 0
    out.append("0" * (precision - len(body)))
    out.append(body)
    out.append(" " * max(size, 0))
    return "".join(out)


def _skip_atoi(fmt: str, i: int) -> Tuple[int, int]:
    value = 0
    while i < len(fmt) and fmt[i] in _DIGITS:
        value = value * 10 + int(fmt[i])
        i += 1
    return value, i


def _int_arg(value: Any) -> int:
    if not isinstance(value, int):
        raise TypeError(f"integer conversion needs an int, not {type(value).__name__}")
    return value


def _char_arg(value: Any) -> str:
    if isinstance(value, str) and len(value) == 1:
        value = ord(value)
    return chr(_int_arg(value) & 0xFF)


def _str_arg(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"%s needs a str or bytes, not {type(value).__name__}")
    return value.split("\0", 1)[0]


def vsprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the resulting text.

    ``%n`` takes a callable that receives the number of characters written so far.
    """
    fmt = fmt.split("\0", 1)[0]
    pending: Iterator[Any] = iter(args)

    def next_arg() -> Any:
        try:
            return next(pending)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    out: list = []
    i = 0
    end = len(fmt)
    while i < end:
        ch = fmt[i]
        if ch != "%":
            out.append(ch)
            i += 1
            continue

        i += 1
        flags = Flag(0)
        while i < end and fmt[i] in _FLAG_CHARS:
            flags |= _FLAG_CHARS[fmt[i]]
            i += 1

        field_width = -1
        if i < end and fmt[i] in _DIGITS:
            field_width, i = _skip_atoi(fmt, i)
        elif i < end and fmt[i] == "*":
            # The '*' itself is left in place and later echoed as an unknown conversion.
            field_width = _int_arg(next_arg())
            if field_width < 0:
                field_width = -field_width
                flags |= Flag.LEFT

        precision = -1
        if i < end and fmt[i] == ".":
            i += 1
            if i < end and fmt[i] in _DIGITS:
                precision, i = _skip_atoi(fmt, i)
            elif i < end and fmt[i] == "*":
                precision = _int_arg(next_arg())
            precision = max(precision, 0)

        if i < end and fmt[i] in "hlL":
            i += 1

        conv = fmt[i] if i < end else ""
        if conv == "c":
            char = _char_arg(next_arg())
            padding = " " * max(field_width - 1, 0)
            out.append(char + padding if flags & Flag.LEFT else padding + char)
        elif conv == "s":
            text = _str_arg(next_arg())
            if precision >= 0:
                text = text[:precision]
            padding = " " * max(field_width - len(text), 0)
            out.append(text + padding if flags & Flag.LEFT else padding + text)
        elif conv == "o":
            out.append(number(_int_arg(next_arg()), 8, field_width, precision, flags))
        elif conv == "p":
            if field_width == -1:
                field_width = 8
                flags |= Flag.ZEROPAD
            out.append(number(_int_arg(next_arg()), 16, field_width, precision, flags))
        elif conv in "xX" and conv:
            if conv == "x":
                flags |= Flag.SMALL
            out.append(number(_int_arg(next_arg()), 16, field_width, precision, flags))
        elif conv in "diu" and conv:
            if conv != "u":
                flags |= Flag.SIGN
            out.append(number(_int_arg(next_arg()), 10, field_width, precision, flags))
        elif conv == "n":
            report: Callable[[int], Any] = next_arg()
            if not callable(report):
                raise TypeError("%n needs a callable to receive the count")
            report(sum(map(len, out)))
        else:
            if conv != "%":
                out.append("%")
            if conv:
                out.append(conv)
            else:
                break
        i += 1
    return "".join(out)