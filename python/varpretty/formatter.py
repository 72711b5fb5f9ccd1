"""
VarPretty Formatter

Renders a Variable tree as text, either on a single line or spread over
several indented lines. Rendering is a pure function of the tree: nothing is
cached and nothing is fetched.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from .shorten import shorten_type
from .simple_format import SimpleFormat
from .variable import COMPLEX_KINDS, Kind, Variable, kind_name

logger = logging.getLogger(__name__)

# Strings longer than this spread slices, arrays and structs over multiple
# lines when newlines are allowed
MAX_SHORT_STRING_LEN = 7

# One indentation level in multi-line output
INDENT = "\t"

_COMPOSITE_KINDS = frozenset({Kind.SLICE, Kind.ARRAY, Kind.STRUCT, Kind.MAP, Kind.INTERFACE})


@dataclass(frozen=True)
class _Flags:
    is_top_level: bool = True
    allow_newlines: bool = False
    include_type: bool = False
    use_full_type_names: bool = False

    def clear_top(self) -> "_Flags":
        return replace(self, is_top_level=False)

    def negate_include_type(self) -> "_Flags":
        return replace(self, include_type=not self.include_type)


def format_single_line(
    v: Variable,
    include_type: bool = False,
    use_full_type_names: bool = False,
) -> str:
    """
    Render `v` on a single line.

    Example:
        main.Point {X: 1, Y: 2}
    """
    flags = _Flags(include_type=include_type, use_full_type_names=use_full_type_names)
    return _render(v, flags, "", None)


def format_multi_line(
    v: Variable,
    base_indent: str = "",
    simple_format: Optional[SimpleFormat] = None,
) -> str:
    """
    Render `v` over multiple lines, always including its type.

    Nested containers holding composite values or long strings get one child
    per line, indented with one tab per level after `base_indent`.
    `simple_format`, when given, controls how leaf numbers are printed and
    may turn a top-level string into a hexdump.
    """
    flags = _Flags(allow_newlines=True, include_type=True)
    return _render(v, flags, base_indent, simple_format)


def _display_type(v: Variable, flags: _Flags) -> str:
    if flags.use_full_type_names:
        return v.type
    return shorten_type(v.type)


def _render(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    if v.unreadable:
        return f"(unreadable {v.unreadable})"

    if not flags.is_top_level and v.addr == 0 and not v.value:
        if flags.include_type and v.type != "void":
            return f"{_display_type(v, flags)} nil"
        return "nil"

    kind = v.kind
    if kind == Kind.SLICE:
        return _render_slice(v, flags, indent, sfmt)
    if kind == Kind.ARRAY:
        return _render_array(v, flags, indent, sfmt)
    if kind == Kind.PTR:
        return _render_pointer(v, flags, indent, sfmt)
    if kind == Kind.UNSAFE_POINTER:
        addr = v.children[0].addr if v.children else v.addr
        return f"unsafe.Pointer({addr:#x})"
    if kind == Kind.STRING:
        if flags.is_top_level and sfmt is not None and sfmt.hexdump_string:
            return sfmt.apply(v)
        return _render_string(v)
    if kind == Kind.CHAN:
        if flags.allow_newlines:
            return _render_struct(v, flags, indent, sfmt)
        if len(v.children) < 2:
            return f"{_display_type(v, flags)} nil"
        return f"{_display_type(v, flags)} {v.children[0].value}/{v.children[1].value}"
    if kind == Kind.STRUCT:
        return _render_struct(v, flags, indent, sfmt)
    if kind == Kind.INTERFACE:
        return _render_interface(v, flags, indent, sfmt)
    if kind == Kind.MAP:
        return _render_map(v, flags, indent, sfmt)
    if kind == Kind.FUNC:
        return v.value or "nil"
    if kind in COMPLEX_KINDS and len(v.children) >= 2:
        real, imag = v.children[0].value, v.children[1].value
        if sfmt is not None and sfmt.float_format:
            formatted = sfmt.format_complex(real, imag)
            if formatted:
                return formatted
        return f"({real} + {imag}i)"

    if v.value:
        if sfmt is not None:
            return sfmt.apply(v)
        return v.value
    return f"(unknown {kind_name(kind)})"


def _render_pointer(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    if not v.type:
        return "nil"
    if not v.children:
        return f"({v.type})(noaddr?)"
    target = v.children[0]
    if target.only_addr and target.addr != 0:
        return f"({v.type})({target.addr:#x})"
    return "*" + _render(target, flags.clear_top(), indent, sfmt)


def _render_interface(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    if v.addr == 0 or not v.children:
        # An escaped interface pointing to nil; only seen for variables that
        # went out of scope.
        return "nil"

    data = v.children[0]
    prefix = ""
    if flags.include_type:
        if data.kind == Kind.INVALID:
            prefix = f"{_display_type(v, flags)} "
            if data.addr == 0:
                return prefix + "nil"
        else:
            prefix = f"{_display_type(v, flags)}({_display_type(data, flags)}) "

    inner = flags.clear_top().negate_include_type()
    if data.kind == Kind.PTR:
        if not data.children:
            return prefix + "..."
        target = data.children[0]
        if target.addr == 0:
            return prefix + "nil"
        if target.only_addr:
            return prefix + f"{data.addr:#x}"
        return prefix + _render(target, inner, indent, sfmt)
    if data.only_addr:
        return prefix + f"*(*{quote(v.type)})({v.addr:#x})"
    return prefix + _render(data, inner, indent, sfmt)


def quote(s: str) -> str:
    """
    Double-quote `s` with Go-style escapes.

    quote('a"b\\n') -> '"a\\"b\\\\n"'
    """
    out = ['"']
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code < 0x10000:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _render_string(v: Variable) -> str:
    text = quote(v.value)
    loaded = len(v.value.encode("utf-8"))
    if loaded < v.len:
        text += f"...+{v.len - loaded} more"
    return text


def _render_slice(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    prefix = ""
    if flags.include_type:
        prefix = f"{_display_type(v, flags)} len: {v.len}, cap: {v.cap}, "
    if v.base == 0 and not v.children:
        return prefix + "nil"
    return prefix + _render_elements(v, flags, indent, sfmt)


def _render_array(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    prefix = ""
    if flags.include_type:
        prefix = f"{_display_type(v, flags)} "
    return prefix + _render_elements(v, flags, indent, sfmt)


def _render_elements(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    nl = flags.allow_newlines and _should_newline(v.children)
    elem_flags = replace(flags, is_top_level=False, include_type=False)
    items = [_render(c, elem_flags, indent + INDENT, sfmt) for c in v.children]

    marker = None
    if v.len > len(v.children):
        marker = f"...+{v.len - len(v.children)} more" if v.children else "..."
    return _join("[", items, marker, "]", nl, indent)


def _render_struct(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    if not v.children and v.len != 0:
        return f"(*{v.type})({v.addr:#x})"

    prefix = ""
    if flags.include_type:
        prefix = f"{_display_type(v, flags)} "

    nl = flags.allow_newlines and bool(v.children) and (
        flags.is_top_level or _should_newline(v.children)
    )
    field_flags = replace(flags, is_top_level=False, include_type=True)
    items = [
        f"{c.name}: {_render(c, field_flags, indent + INDENT, sfmt)}"
        for c in v.children
    ]

    marker = None
    if v.len > len(v.children):
        marker = f"...+{v.len - len(v.children)} more"
    return prefix + _join("{", items, marker, "}", nl, indent)


def _render_map(v: Variable, flags: _Flags, indent: str, sfmt: Optional[SimpleFormat]) -> str:
    prefix = ""
    if flags.include_type:
        prefix = f"{_display_type(v, flags)} "
    if v.base == 0 and not v.children:
        return prefix + "nil"

    pairs = len(v.children) // 2
    nl = flags.allow_newlines and pairs > 0
    key_flags = replace(flags, is_top_level=False, include_type=False, allow_newlines=False)
    value_flags = replace(flags, is_top_level=False, include_type=False)
    items = []
    for i in range(pairs):
        key = v.children[2 * i]
        value = v.children[2 * i + 1]
        items.append(
            _render(key, key_flags, indent + INDENT, sfmt)
            + ": "
            + _render(value, value_flags, indent + INDENT, sfmt)
        )

    marker = None
    if v.len > pairs:
        marker = f"...+{v.len - pairs} more" if pairs else "..."
    return prefix + _join("[", items, marker, "]", nl, indent)


def _join(open_: str, items: List[str], marker: Optional[str], close: str, nl: bool, indent: str) -> str:
    """
    Assemble a bracketed list.

    Single line: "[a, b,...+2 more]". Multi-line: one entry per line, every
    entry but the last followed by a comma, the closing bracket back at
    `indent`.
    """
    entries = list(items)
    if marker is not None:
        entries.append(marker)
    if nl:
        sep = "\n" + indent + INDENT
        return open_ + sep + ("," + sep).join(entries) + "\n" + indent + close
    body = ", ".join(items)
    if marker is not None:
        body = body + "," + marker if items else marker
    return open_ + body + close


def _should_newline(children: List[Variable]) -> bool:
    """
    Whether a container with these children reads better over several lines.

    True when any child, looking through pointers, is itself a container or
    interface, or is a string that is either pointed-to or long.
    """
    for c in children:
        kind, hasptr = c.recursive_kind()
        if kind in _COMPOSITE_KINDS:
            return True
        if kind == Kind.STRING and (hasptr or len(c.value) > MAX_SHORT_STRING_LEN):
            return True
    return False
