"""
VarPretty interactive prompt with prompt_toolkit

Provides:
- Tab completion for commands and variable paths
- Persistent history
- Ctrl+C handling

Falls back to a plain input() loop in non-TTY environments.

Environment variables:
- VARPRETTY_SIMPLE_MODE=1: Force simple mode (no prompt_toolkit)
- TERM=dumb: Also disables prompt_toolkit (for expect scripts)
"""

import logging
import os
import sys
from typing import Callable, Iterable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

from .commands import COMMAND_NAMES, CommandError, run_command
from .config import Settings
from .path_resolver import PathResolutionError, resolve_path
from .shorten import shorten_type
from .snapshot import Snapshot
from .variable import Kind

logger = logging.getLogger(__name__)

QUIT_COMMANDS = (":q", ":quit", ":exit")

STYLE = Style.from_dict({
    'prompt': '#00aa00 bold',
})


def _should_use_enhanced_mode(settings: Settings) -> bool:
    """
    Check if enhanced mode should be used.

    Returns False if:
    - Not in a TTY
    - VARPRETTY_SIMPLE_MODE=1 is set
    - TERM=dumb (common in expect scripts)
    """
    if settings.simple_mode:
        return False

    # Check for dumb terminal (expect scripts often set this)
    if os.environ.get('TERM', '') == 'dumb':
        return False

    # Check TTY
    if not (hasattr(sys.stdin, 'isatty') and sys.stdin.isatty()):
        return False
    if not (hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()):
        return False

    return True


class PathCompleter(Completer):
    """
    Tab completion for commands and snapshot paths.

    The first word completes to a command; later words complete variable
    names, then struct fields after a '.'.
    """

    def __init__(self, snapshot: Snapshot):
        self.snapshot = snapshot

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """Get completions for the current document."""
        text = document.text_before_cursor
        words = text.split()

        if not words or (len(words) == 1 and not text.endswith(" ")):
            word = words[0] if words else ""
            for cmd in COMMAND_NAMES + list(QUIT_COMMANDS):
                if cmd.startswith(word):
                    yield Completion(cmd, start_position=-len(word), display_meta="command")
            return

        word = "" if text.endswith(" ") else words[-1]
        if word.startswith("%") or word.startswith("--"):
            return
        yield from self._path_completions(word)

    def _path_completions(self, word: str) -> Iterable[Completion]:
        if "." not in word:
            for v in self.snapshot.variables():
                if v.name.startswith(word):
                    yield Completion(
                        v.name,
                        start_position=-len(word),
                        display_meta=shorten_type(v.type),
                    )
            return

        base_path, partial_field = word.rsplit(".", 1)
        try:
            value = resolve_path(self.snapshot, base_path)
        except PathResolutionError:
            return

        while value.kind in (Kind.PTR, Kind.INTERFACE) and value.children:
            value = value.children[0]
        if value.kind not in (Kind.STRUCT, Kind.CHAN):
            return

        for child in value.children:
            if child.name.startswith(partial_field):
                yield Completion(
                    f"{base_path}.{child.name}",
                    start_position=-len(word),
                    display=child.name,
                    display_meta=shorten_type(child.type),
                )


def _open_history(history_file: str) -> History:
    path = os.path.expanduser(history_file)
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return FileHistory(path)
    except OSError as e:
        logger.warning("history disabled, cannot use %s: %s", path, e)
        return InMemoryHistory()


def create_prompt_session(snapshot: Snapshot, settings: Settings) -> PromptSession:
    """Create the prompt_toolkit session used by the enhanced REPL."""
    bindings = KeyBindings()

    @bindings.add('c-c')
    def handle_ctrl_c(event):
        """Clear the current line."""
        event.current_buffer.reset()

    return PromptSession(
        history=_open_history(settings.history_file),
        completer=PathCompleter(snapshot),
        complete_while_typing=False,
        key_bindings=bindings,
        enable_history_search=True,
        style=STYLE,
        mouse_support=False,
    )


def handle_line(
    snapshot: Snapshot,
    line: str,
    settings: Settings,
    output_callback: Callable[[str], None],
    error_callback: Callable[[str], None],
) -> bool:
    """
    Run one REPL line. Returns False when the user asked to quit.
    """
    text = line.strip()
    if not text:
        return True
    if text in QUIT_COMMANDS:
        return False
    try:
        output_callback(run_command(snapshot, text, settings))
    except CommandError as e:
        error_callback(str(e))
    return True


def run_repl(
    snapshot: Snapshot,
    settings: Settings,
    output_callback: Callable[[str], None] = print,
    error_callback: Optional[Callable[[str], None]] = None,
) -> None:
    """
    Run the interactive loop until :q, Ctrl+D or end of input.
    """
    if error_callback is None:
        def error_callback(msg: str) -> None:
            print(f"error: {msg}", file=sys.stderr)

    names: List[str] = [v.name for v in snapshot.variables()]
    output_callback(f"[VarPretty] {len(names)} variables loaded. Type 'help' for commands, :q to exit.")

    if _should_use_enhanced_mode(settings):
        session = create_prompt_session(snapshot, settings)
        read_line = lambda: session.prompt([('class:prompt', '(vp) ')])
    else:
        logger.debug("prompt_toolkit disabled, using plain input")
        read_line = lambda: input('(vp) ')

    while True:
        try:
            line = read_line()
        except KeyboardInterrupt:
            output_callback("(Use :q to exit)")
            continue
        except EOFError:
            break

        if not handle_line(snapshot, line, settings, output_callback, error_callback):
            break
