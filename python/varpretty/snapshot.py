"""
VarPretty Snapshot Loader

Converts the JSON variable records returned by the debugging session into
Variable trees. Records use the Delve API field names:

    {"name": "p", "addr": 824634330880, "type": "*main.Point", "kind": 22,
     "value": "", "len": 0, "cap": 0, "children": [...], ...}
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .variable import Variable, coerce_kind

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Malformed snapshot data."""
    pass


# JSON key -> (Variable attribute, expected type)
_FIELDS = {
    "name": ("name", str),
    "addr": ("addr", int),
    "onlyAddr": ("only_addr", bool),
    "type": ("type", str),
    "realType": ("real_type", str),
    "flags": ("flags", int),
    "value": ("value", str),
    "len": ("len", int),
    "cap": ("cap", int),
    "base": ("base", int),
    "unreadable": ("unreadable", str),
    "LocationExpr": ("location_expr", str),
    "DeclLine": ("decl_line", int),
}

_ARGS_KEYS = ("args", "Args")
_LOCALS_KEYS = ("locals", "Locals", "Variables", "variables")


@dataclass
class Snapshot:
    """Function arguments and local variables captured at one stop."""
    args: List[Variable] = field(default_factory=list)
    locals: List[Variable] = field(default_factory=list)

    def variables(self) -> List[Variable]:
        """Arguments first, then locals."""
        return self.args + self.locals

    def find(self, name: str) -> Optional[Variable]:
        """Look a top-level variable up by name; locals shadow arguments."""
        for v in reversed(self.variables()):
            if v.name == name:
                return v
        return None


def variable_from_json(data: Dict[str, Any], path: str = "$") -> Variable:
    """
    Build a Variable tree from one decoded JSON record.

    Raises:
        SnapshotError: if the record or one of its children is malformed
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"{path}: expected an object, got {type(data).__name__}")

    kwargs: Dict[str, Any] = {}

    if "kind" in data:
        try:
            kwargs["kind"] = coerce_kind(data["kind"])
        except ValueError as e:
            raise SnapshotError(f"{path}.kind: {e}") from None

    for key, (attr, expected) in _FIELDS.items():
        if key not in data or data[key] is None:
            continue
        raw = data[key]
        if expected is int and (isinstance(raw, bool) or not isinstance(raw, int)):
            raise SnapshotError(f"{path}.{key}: expected an integer, got {raw!r}")
        if expected is not int and not isinstance(raw, expected):
            raise SnapshotError(f"{path}.{key}: expected {expected.__name__}, got {raw!r}")
        kwargs[attr] = raw

    children = data.get("children") or []
    if not isinstance(children, list):
        raise SnapshotError(f"{path}.children: expected an array")
    kwargs["children"] = [
        variable_from_json(child, f"{path}.children[{i}]")
        for i, child in enumerate(children)
    ]

    return Variable(**kwargs)


def snapshot_from_json(data: Any) -> Snapshot:
    """
    Build a Snapshot from decoded JSON.

    Accepted shapes:
        {"args": [...], "locals": [...]}   (also Args / Locals / Variables)
        [...]                              all treated as locals
        {"name": ..., "kind": ...}         a single variable
    """
    if isinstance(data, list):
        return Snapshot(locals=_variable_list(data, "$"))

    if not isinstance(data, dict):
        raise SnapshotError(f"$: expected an object or an array, got {type(data).__name__}")

    args_key = _first_key(data, _ARGS_KEYS)
    locals_key = _first_key(data, _LOCALS_KEYS)
    if args_key is None and locals_key is None:
        if "kind" in data:
            return Snapshot(locals=[variable_from_json(data)])
        raise SnapshotError("$: no args or locals found")

    snap = Snapshot()
    if args_key is not None:
        snap.args = _variable_list(data[args_key], f"$.{args_key}")
    if locals_key is not None:
        snap.locals = _variable_list(data[locals_key], f"$.{locals_key}")
    return snap


def load_snapshot(path: str) -> Snapshot:
    """
    Read a snapshot JSON file.

    Raises:
        SnapshotError: if the file can't be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SnapshotError(f"cannot read {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{path}: invalid JSON: {e}") from e

    snap = snapshot_from_json(data)
    logger.debug("loaded %s: %d args, %d locals", path, len(snap.args), len(snap.locals))
    return snap


def _variable_list(data: Any, path: str) -> List[Variable]:
    if not isinstance(data, list):
        raise SnapshotError(f"{path}: expected an array")
    return [variable_from_json(item, f"{path}[{i}]") for i, item in enumerate(data)]


def _first_key(data: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        if key in data:
            return key
    return None
