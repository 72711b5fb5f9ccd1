"""
Format directives

An expression may be prefixed by printf-style directives selecting how its
leaf values are shown:

    %x counter          integers in hex
    %x%0.2f point       integers in hex, floats with two decimals
    %#s buf             string as a hexdump
"""

from dataclasses import dataclass

from .simple_format import SimpleFormat


class DirectiveError(Exception):
    """Malformed format directive."""
    pass


@dataclass(frozen=True)
class Directive:
    """An expression together with the formats requested for it."""
    expr: str
    simple_format: SimpleFormat


_FLAG_CHARS = frozenset("0123456789%#+.-")
_INT_VERBS = frozenset("dxXoO")
_FLOAT_VERBS = frozenset("eEfFgG")


def parse_directives(text: str) -> Directive:
    """
    Split the leading directives off `text`.

    Raises:
        DirectiveError: on unknown verbs, unterminated directives or a
            missing expression
    """
    int_format = ""
    float_format = ""
    hexdump_string = False

    remaining = text.lstrip()
    while remaining.startswith("%"):
        end = _directive_end(remaining)
        directive = remaining[:end + 1]
        verb = directive[-1]
        if verb in _INT_VERBS:
            int_format = directive
        elif verb in _FLOAT_VERBS:
            float_format = directive
        elif verb == "s":
            if directive not in ("%s", "%#s"):
                raise DirectiveError(
                    f"invalid formatter {directive!r}: string length is set by the debugging session"
                )
            hexdump_string = directive == "%#s"
        elif verb in "av":
            raise DirectiveError(
                f"invalid formatter {directive!r}: load limits are set by the debugging session"
            )
        else:
            raise DirectiveError(f"unknown format string character {verb!r}")
        remaining = remaining[end + 1:].lstrip()

    expr = remaining.strip()
    if not expr:
        raise DirectiveError("no expression")

    return Directive(
        expr=expr,
        simple_format=SimpleFormat(
            int_format=int_format,
            float_format=float_format,
            hexdump_string=hexdump_string,
        ),
    )


def _directive_end(text: str) -> int:
    """Index of the verb character ending the directive at the start of `text`."""
    for i in range(1, len(text)):
        if text[i] not in _FLAG_CHARS:
            return i
    raise DirectiveError(f"non-terminated format string {text!r}")
