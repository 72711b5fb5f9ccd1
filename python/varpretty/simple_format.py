"""
Per-expression value formats.

A SimpleFormat changes how leaf values are displayed: integers and floats
through a printf-style verb, strings as a hexdump.
"""

import logging
from dataclasses import dataclass

from .variable import COMPLEX_KINDS, FLOAT_KINDS, INT_KINDS, UINT_KINDS, Kind, Variable

logger = logging.getLogger(__name__)

HEXDUMP_ROW = 16


@dataclass(frozen=True)
class SimpleFormat:
    """How leaf values of one expression should be shown."""
    int_format: str = ""     # e.g. "%x", "%#o", "%08d"
    float_format: str = ""   # e.g. "%0.2f", "%e"
    hexdump_string: bool = False

    def apply(self, v: Variable) -> str:
        """Return the leaf text of `v` rendered with this format."""
        if v.unreadable or not v.value:
            return v.value

        if v.kind in INT_KINDS or v.kind in UINT_KINDS:
            if not self.int_format:
                return v.value
            try:
                n = int(v.value, 10)
            except ValueError:
                return v.value
            return _printf(self.int_format, n, v.value)

        if v.kind in FLOAT_KINDS:
            if not self.float_format:
                return v.value
            try:
                x = float(v.value)
            except ValueError:
                return v.value
            return _printf(self.float_format, x, v.value)

        if v.kind in COMPLEX_KINDS:
            if not self.float_format or len(v.children) < 2:
                return v.value
            return self.format_complex(v.children[0].value, v.children[1].value) or v.value

        if v.kind == Kind.STRING:
            if not self.hexdump_string:
                return v.value
            return hexdump(v.value.encode("utf-8"))

        return v.value

    def format_complex(self, real: str, imag: str) -> str:
        """
        Render a complex number from its two parts, e.g. "(1.00+2.00i)".

        Returns an empty string if either part isn't a number.
        """
        try:
            re_part = float(real)
            im_part = float(imag)
        except ValueError:
            return ""
        signed = _with_plus_flag(self.float_format)
        re_text = _printf(self.float_format, re_part, real)
        im_text = _printf(signed, im_part, imag)
        return f"({re_text}{im_text}i)"


def _printf(verb: str, arg, fallback: str) -> str:
    """Apply a printf-style verb; Go's %O becomes a 0o-prefixed octal."""
    if verb.endswith("O"):
        verb = "%#" + verb[1:-1].replace("#", "") + "o"
    try:
        return verb % arg
    except (TypeError, ValueError) as e:
        logger.debug("format %r failed on %r: %s", verb, arg, e)
        return fallback


def _with_plus_flag(verb: str) -> str:
    if "+" in verb:
        return verb
    return "%+" + verb[1:]


def hexdigits(n: int) -> int:
    """Number of hex digits needed to print `n` (1 for zero)."""
    if n <= 0:
        return 1
    return len(f"{n:x}")


def hexdump(data: bytes) -> str:
    """
    Classic hexdump: offset, 16 bytes split in two groups, ASCII gutter.

        0 | 68 65 6c 6c 6f                                   |hello           |
    """
    width = hexdigits(len(data))
    lines = []
    for off in range(0, len(data), HEXDUMP_ROW):
        row = data[off:off + HEXDUMP_ROW]
        parts = [f"{off:>{width}x} | "]
        for c in range(HEXDUMP_ROW):
            if c == 8:
                parts.append(" ")
            if c < len(row):
                parts.append(f"{row[c]:02x} ")
            else:
                parts.append("   ")
        parts.append("|")
        for c in range(HEXDUMP_ROW):
            if c < len(row):
                ch = row[c]
                parts.append(chr(ch) if 0x20 <= ch <= 0x7e else ".")
            else:
                parts.append(" ")
        parts.append("|\n")
        lines.append("".join(parts))
    return "".join(lines)
