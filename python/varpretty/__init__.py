"""
VarPretty - readable Go variable snapshots

Formats the value trees a Go debugger returns into text:
- Single-line and multi-line pretty printing
- Shortened type and function names
- Structured path access (a.b[0].c) into a snapshot
"""

__version__ = "0.1.0"

from .formatter import format_multi_line, format_single_line
from .shorten import shorten_function_name, shorten_type
from .simple_format import SimpleFormat
from .snapshot import Snapshot, SnapshotError, load_snapshot
from .variable import Kind, Variable

__all__ = [
    "Kind",
    "SimpleFormat",
    "Snapshot",
    "SnapshotError",
    "Variable",
    "format_multi_line",
    "format_single_line",
    "load_snapshot",
    "shorten_function_name",
    "shorten_type",
]
