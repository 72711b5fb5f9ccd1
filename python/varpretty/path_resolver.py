"""
Path Resolver for VarPretty

Resolves structured path expressions like "cfg.users[0].name" to a node of
a snapshot.

Supported syntax:
- Field access: a.b
- Index access: a[0]
- Map lookup: m["key"] or m[42]
- Dereference: a.* (pointers and interfaces)

Field, index and map access look through pointers and interfaces on their
own, the way Go selectors do.
"""

import json
import re
from dataclasses import dataclass
from typing import List

from .snapshot import Snapshot
from .variable import Kind, Variable


class PathResolutionError(Exception):
    """Error during path resolution."""
    pass


@dataclass
class PathSegment:
    """A segment in a path expression."""
    pass


@dataclass
class IdentSegment(PathSegment):
    """Field or variable name."""
    name: str


@dataclass
class IndexSegment(PathSegment):
    """Array/slice index."""
    index: int


@dataclass
class KeySegment(PathSegment):
    """Map key, compared against the key's leaf value."""
    key: str


@dataclass
class DerefSegment(PathSegment):
    """Dereference (pointers and interfaces)."""
    pass


_IDENT_RE = re.compile(r'^([a-zA-Z_][a-zA-Z0-9_]*)')
_INDEX_RE = re.compile(r'^\[(\d+)\]')
_STRING_KEY_RE = re.compile(r'^\[("(?:[^"\\]|\\.)*")\]')
_NUMBER_KEY_RE = re.compile(r'^\[(-?[0-9][0-9.eE+-]*)\]')


def tokenize_path(path: str) -> List[PathSegment]:
    """
    Parse a path string into segments.

    Examples:
        "p" -> [IdentSegment("p")]
        "p.Name" -> [IdentSegment("p"), IdentSegment("Name")]
        "xs[0].Name" -> [IdentSegment("xs"), IndexSegment(0), IdentSegment("Name")]
        "m[\"a\"]" -> [IdentSegment("m"), KeySegment("a")]
        "p.*" -> [IdentSegment("p"), DerefSegment()]
    """
    segments: List[PathSegment] = []
    remaining = path.strip()

    # First segment must be an identifier
    match = _IDENT_RE.match(remaining)
    if not match:
        raise PathResolutionError(f"Invalid path: expected identifier at start of '{path}'")

    segments.append(IdentSegment(match.group(1)))
    remaining = remaining[match.end():]

    while remaining:
        if remaining.startswith('.'):
            remaining = remaining[1:]

            if remaining.startswith('*'):
                segments.append(DerefSegment())
                remaining = remaining[1:]
                continue

            match = _IDENT_RE.match(remaining)
            if match:
                segments.append(IdentSegment(match.group(1)))
                remaining = remaining[match.end():]
                continue

            raise PathResolutionError(f"Invalid field access at: .{remaining}")

        elif remaining.startswith('['):
            match = _INDEX_RE.match(remaining)
            if match:
                segments.append(IndexSegment(int(match.group(1))))
                remaining = remaining[match.end():]
                continue

            match = _STRING_KEY_RE.match(remaining)
            if match:
                segments.append(KeySegment(json.loads(match.group(1))))
                remaining = remaining[match.end():]
                continue

            match = _NUMBER_KEY_RE.match(remaining)
            if match:
                segments.append(KeySegment(match.group(1)))
                remaining = remaining[match.end():]
                continue

            raise PathResolutionError(f"Invalid index access at: {remaining}")

        else:
            raise PathResolutionError(f"Unexpected character at: {remaining}")

    return segments


def resolve_path(snapshot: Snapshot, path: str) -> Variable:
    """
    Resolve a path expression to a Variable.

    Raises:
        PathResolutionError: If the path cannot be resolved
    """
    segments = tokenize_path(path)

    first = segments[0]
    value = snapshot.find(first.name)
    if value is None:
        raise PathResolutionError(f"Variable '{first.name}' not found in current scope")

    for segment in segments[1:]:
        value = _resolve_segment(value, segment)

    return value


def _resolve_segment(value: Variable, segment: PathSegment) -> Variable:
    """Resolve a single path segment."""

    if isinstance(segment, DerefSegment):
        if value.kind in (Kind.PTR, Kind.INTERFACE) and value.children:
            return _check_loaded(value.children[0], value)
        raise PathResolutionError(f"Cannot dereference type '{value.type}'")

    value = _auto_deref(value)

    if isinstance(segment, IdentSegment):
        if value.kind in (Kind.STRUCT, Kind.CHAN):
            child = value.child(segment.name)
            if child is not None:
                return child
        raise PathResolutionError(
            f"Field '{segment.name}' not found in type '{value.type}'"
        )

    if isinstance(segment, IndexSegment):
        if value.kind == Kind.MAP:
            return _map_lookup(value, str(segment.index))
        if value.kind not in (Kind.ARRAY, Kind.SLICE):
            raise PathResolutionError(f"Type '{value.type}' does not support indexing")
        if segment.index < len(value.children):
            return value.children[segment.index]
        if segment.index < value.len:
            raise PathResolutionError(
                f"Index [{segment.index}] was not loaded ({len(value.children)} of {value.len} elements available)"
            )
        raise PathResolutionError(
            f"Index [{segment.index}] out of bounds (len {value.len})"
        )

    if isinstance(segment, KeySegment):
        if value.kind != Kind.MAP:
            raise PathResolutionError(f"Type '{value.type}' is not a map")
        return _map_lookup(value, segment.key)

    raise PathResolutionError(f"Unknown segment type: {type(segment)}")


def _auto_deref(value: Variable) -> Variable:
    """Follow pointers and interfaces down to the first concrete value."""
    while value.kind in (Kind.PTR, Kind.INTERFACE) and value.children:
        value = _check_loaded(value.children[0], value)
    return value


def _check_loaded(target: Variable, via: Variable) -> Variable:
    if target.only_addr:
        raise PathResolutionError(
            f"Target of '{via.name or via.type}' was not loaded ({target.addr:#x})"
        )
    return target


def _map_lookup(value: Variable, key: str) -> Variable:
    for i in range(0, len(value.children) - 1, 2):
        if value.children[i].value == key:
            return value.children[i + 1]
    raise PathResolutionError(f"Key {key!r} not found in loaded map entries")
