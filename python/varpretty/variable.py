"""
VarPretty Variable Model

The tree of typed, possibly truncated nodes produced by the debugging
session. The formatter only ever reads these objects.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union


class Kind(IntEnum):
    """Value kinds, numbered like Go's reflect.Kind."""
    INVALID = 0
    BOOL = 1
    INT = 2
    INT8 = 3
    INT16 = 4
    INT32 = 5
    INT64 = 6
    UINT = 7
    UINT8 = 8
    UINT16 = 9
    UINT32 = 10
    UINT64 = 11
    UINTPTR = 12
    FLOAT32 = 13
    FLOAT64 = 14
    COMPLEX64 = 15
    COMPLEX128 = 16
    ARRAY = 17
    CHAN = 18
    FUNC = 19
    INTERFACE = 20
    MAP = 21
    PTR = 22
    SLICE = 23
    STRING = 24
    STRUCT = 25
    UNSAFE_POINTER = 26

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    Kind.INVALID: "invalid",
    Kind.BOOL: "bool",
    Kind.INT: "int",
    Kind.INT8: "int8",
    Kind.INT16: "int16",
    Kind.INT32: "int32",
    Kind.INT64: "int64",
    Kind.UINT: "uint",
    Kind.UINT8: "uint8",
    Kind.UINT16: "uint16",
    Kind.UINT32: "uint32",
    Kind.UINT64: "uint64",
    Kind.UINTPTR: "uintptr",
    Kind.FLOAT32: "float32",
    Kind.FLOAT64: "float64",
    Kind.COMPLEX64: "complex64",
    Kind.COMPLEX128: "complex128",
    Kind.ARRAY: "array",
    Kind.CHAN: "chan",
    Kind.FUNC: "func",
    Kind.INTERFACE: "interface",
    Kind.MAP: "map",
    Kind.PTR: "ptr",
    Kind.SLICE: "slice",
    Kind.STRING: "string",
    Kind.STRUCT: "struct",
    Kind.UNSAFE_POINTER: "unsafe.Pointer",
}

_KINDS_BY_LABEL = {label: kind for kind, label in _KIND_LABELS.items()}

INT_KINDS = frozenset({Kind.INT, Kind.INT8, Kind.INT16, Kind.INT32, Kind.INT64})
UINT_KINDS = frozenset({
    Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64, Kind.UINTPTR,
})
FLOAT_KINDS = frozenset({Kind.FLOAT32, Kind.FLOAT64})
COMPLEX_KINDS = frozenset({Kind.COMPLEX64, Kind.COMPLEX128})


def kind_name(kind: int) -> str:
    """Display name of a kind; kinds newer than this table print as kindN."""
    try:
        return Kind(kind).label
    except ValueError:
        return f"kind{kind}"


def coerce_kind(raw: Union[int, str]) -> Union[Kind, int]:
    """
    Convert a kind as found in a debugger record to a Kind.

    Accepts the numeric reflection kind or its lowercase name. Integers
    outside the table are returned as-is so the formatter can fall through
    to its default arm.

    Raises:
        ValueError: for names that are not kinds
    """
    if isinstance(raw, bool):
        raise ValueError(f"invalid kind {raw!r}")
    if isinstance(raw, int):
        try:
            return Kind(raw)
        except ValueError:
            return raw
    if isinstance(raw, str):
        if raw in _KINDS_BY_LABEL:
            return _KINDS_BY_LABEL[raw]
        if raw == "pointer":
            return Kind.PTR
        if raw.isdigit():
            return coerce_kind(int(raw))
    raise ValueError(f"invalid kind {raw!r}")


@dataclass
class Variable:
    """
    One node of a value snapshot.

    `len` may exceed the number of loaded children when the session truncated
    the tree. Map children alternate key, value.
    """
    kind: Union[Kind, int] = Kind.INVALID
    type: str = ""
    value: str = ""
    name: str = ""
    len: int = 0
    cap: int = 0
    addr: int = 0
    base: int = 0
    children: List["Variable"] = field(default_factory=list)
    unreadable: str = ""
    only_addr: bool = False
    real_type: str = ""
    flags: int = 0
    location_expr: str = ""
    decl_line: int = 0

    def recursive_kind(self) -> Tuple[Union[Kind, int], bool]:
        """
        Kind of the first non-pointer node reached by following children[0].

        Returns (kind, hasptr) where hasptr tells whether at least one pointer
        was traversed. A pointer without children stops the walk.
        """
        v = self
        hasptr = False
        while v.kind == Kind.PTR:
            hasptr = True
            if not v.children:
                return Kind.PTR, True
            v = v.children[0]
        return v.kind, hasptr

    def child(self, name: str) -> Optional["Variable"]:
        """Return the child called `name`, or None."""
        for c in self.children:
            if c.name == name:
                return c
        return None
