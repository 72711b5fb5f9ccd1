"""
VarPretty Commands

Subcommands operating on a loaded snapshot. Each returns the text to show;
failures raise CommandError with a message fit for the user.
"""

import logging
import shlex
from typing import Callable, Dict, List

from .config import Settings
from .directives import DirectiveError, parse_directives
from .formatter import format_multi_line, format_single_line
from .path_resolver import PathResolutionError, resolve_path
from .shorten import shorten_function_name, shorten_type
from .snapshot import Snapshot
from .variable import Kind, Variable, kind_name

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command could not be carried out."""
    pass


HELP_TEXT = """
VarPretty - Go variable snapshots, readable

SUBCOMMANDS:
    locals [--full]                 Print all local variables
    args [--full]                   Print function arguments
    pp [%fmt] <path> [--oneline]    Pretty print a variable or path expression
    type <path>                     Show type information for a path
    shorten [--func] <name>         Shorten a type (or function) name
    help                            Show this help message

PATHS:
    p.Name, xs[0], m["key"], p.*

FORMAT DIRECTIVES (pp only):
    %x, %X, %o, %O, %d      integer format
    %0.2f, %e, %g           float format
    %#s                     hexdump strings

OPTIONS:
    --full      Show full import paths in type names (single-line output)
    --oneline   Print on a single line

EXAMPLES:
    locals
    pp cfg.Users[0]
    pp %x%0.2f point
    shorten github.com/foo/bar/baz.MyType
"""


def run_command(snapshot: Snapshot, line: str, settings: Settings) -> str:
    """
    Execute one command line against `snapshot`.

    Raises:
        CommandError: for unknown commands, bad arguments or unresolvable paths
    """
    try:
        # non-POSIX mode keeps the quotes of map keys like m["a"]
        args = shlex.split(line, posix=False)
    except ValueError as e:
        raise CommandError(f"Cannot parse command: {e}") from None

    if not args:
        args = ["help"]

    subcommand = args[0]
    handler = _COMMANDS.get(subcommand)
    if handler is None:
        raise CommandError(f"Unknown subcommand: {subcommand}. Try 'help'")

    try:
        return handler(snapshot, args[1:], settings)
    except (PathResolutionError, DirectiveError) as e:
        logger.debug("%s failed: %s", subcommand, e)
        raise CommandError(str(e)) from e


def _cmd_help(snapshot: Snapshot, args: List[str], settings: Settings) -> str:
    return HELP_TEXT.strip()


def _print_variables(variables: List[Variable], args: List[str], settings: Settings, empty: str) -> str:
    if not variables:
        return empty
    full = settings.full_types or "--full" in args
    return "\n".join(
        f"{v.name} = {format_single_line(v, include_type=True, use_full_type_names=full)}"
        for v in variables
    )


def _cmd_locals(snapshot: Snapshot, args: List[str], settings: Settings) -> str:
    """Print all local variables."""
    return _print_variables(snapshot.locals, args, settings, "No local variables in current scope.")


def _cmd_args(snapshot: Snapshot, args: List[str], settings: Settings) -> str:
    """Print function arguments."""
    return _print_variables(snapshot.args, args, settings, "No arguments for current function.")


def _cmd_pp(snapshot: Snapshot, args: List[str], settings: Settings) -> str:
    """Pretty print a specific path expression."""
    oneline = "--oneline" in args
    full = settings.full_types or "--full" in args
    expr_args = [a for a in args if not a.startswith("--")]

    if not expr_args:
        raise CommandError("Usage: pp [%fmt] <path> [--oneline] [--full]")

    directive = parse_directives(" ".join(expr_args))
    value = resolve_path(snapshot, directive.expr)

    if oneline:
        return format_single_line(value, include_type=True, use_full_type_names=full)
    return format_multi_line(value, "", directive.simple_format)


def _cmd_type(snapshot: Snapshot, args: List[str], settings: Settings) -> str:
    """Get type information for a path."""
    if not args:
        raise CommandError("Usage: type <path>")

    value = resolve_path(snapshot, args[0])

    lines = [
        f"Type: {value.type}",
        f"Short: {shorten_type(value.type)}",
        f"Kind: {kind_name(value.kind)}",
    ]
    if value.real_type and value.real_type != value.type:
        lines.append(f"Real type: {value.real_type}")
    if value.kind in (Kind.SLICE, Kind.ARRAY, Kind.STRING, Kind.MAP, Kind.CHAN):
        lines.append(f"Len: {value.len}")
    if value.kind in (Kind.SLICE, Kind.CHAN):
        lines.append(f"Cap: {value.cap}")
    if value.addr:
        lines.append(f"Address: {value.addr:#x}")

    # Show fields for structs
    if value.kind == Kind.STRUCT and value.children:
        lines.append("Fields:")
        for child in value.children:
            lines.append(f"  {child.name}: {shorten_type(child.type)}")

    return "\n".join(lines)


def _cmd_shorten(snapshot: Snapshot, args: List[str], settings: Settings) -> str:
    """Shorten a type or function name."""
    func = "--func" in args
    names = [a for a in args if not a.startswith("--")]
    if not names:
        raise CommandError("Usage: shorten [--func] <name>")
    # type names may contain spaces: "interface {}"
    name = " ".join(names)
    if len(name) >= 2 and name[0] == name[-1] and name[0] in "\"'":
        name = name[1:-1]
    if func:
        return shorten_function_name(name)
    return shorten_type(name)


_COMMANDS: Dict[str, Callable[[Snapshot, List[str], Settings], str]] = {
    "help": _cmd_help,
    "locals": _cmd_locals,
    "args": _cmd_args,
    "pp": _cmd_pp,
    "type": _cmd_type,
    "shorten": _cmd_shorten,
}

COMMAND_NAMES = sorted(_COMMANDS)
