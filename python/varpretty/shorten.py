"""
Type and function name shortening.

Collapses long import paths so that `github.com/foo/bar/baz.MyType` is shown
as `baz.MyType`. Anything the parser does not fully understand is returned
unchanged: the original name is always a safe fallback.
"""

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

# Anonymous composites whose bodies we refuse to rewrite
_ANONYMOUS_PREFIXES = ("interface {", "interface{", "struct {", "struct{", "func (", "func(")

_EMPTY_COMPOSITES = frozenset({"interface {}", "interface{}", "struct {}", "struct{}"})

_IDENT_PUNCTUATION = frozenset("_./@%-")


def shorten_type(typ: str) -> str:
    """
    Shorten a type name for display.

    Examples:
        "long/package/path/pkg.A" -> "pkg.A"
        "map[long/path/pkg.A][]long/path/pkg.B" -> "map[pkg.A][]pkg.B"
        "fmt.Stringer" -> "fmt.Stringer"
    """
    out = _shorten_type_ex(typ)
    if out is None:
        logger.debug("leaving type name unshortened: %r", typ)
        return typ
    return out


def _shorten_type_ex(typ: str) -> Optional[str]:
    """Shorten `typ`, returning None when its structure isn't recognized."""
    if typ.startswith("["):
        # []T or [N]T
        rbrk = typ.find("]")
        if rbrk < 0:
            return None
        sub = _shorten_type_ex(typ[rbrk + 1:])
        if sub is None:
            return None
        return typ[:rbrk + 1] + sub

    if typ.startswith("*"):
        sub = _shorten_type_ex(typ[1:])
        if sub is None:
            return None
        return "*" + sub

    if typ.startswith("map["):
        depth = 1
        for i in range(4, len(typ)):
            ch = typ[i]
            if ch == "[":
                depth += 1
            elif ch == "]":
                depth -= 1
                if depth == 0:
                    key = _shorten_type_ex(typ[4:i])
                    val = _shorten_type_ex(typ[i + 1:])
                    if key is None or val is None:
                        return None
                    return "map[" + key + "]" + val
        return None

    if typ in _EMPTY_COMPOSITES:
        return typ

    if _contains_anonymous_type(typ):
        return None

    lbrk = typ.find("[")
    if lbrk >= 0:
        # Generic instantiation: Name[Arg1, Arg2]
        if not typ.endswith("]"):
            return None
        name = _shorten_type_ex(typ[:lbrk])
        if name is None:
            return None
        args = _split_type_args(typ[lbrk + 1:-1])
        if args is None:
            return None
        short_args = []
        for arg in args:
            short = _shorten_type_ex(arg.strip())
            if short is None:
                return None
            short_args.append(short)
        return name + "[" + ", ".join(short_args) + "]"

    slashes = 0
    last_slash = -1
    for i, ch in enumerate(typ):
        if not (ch.isalpha() or ch.isdigit() or ch in _IDENT_PUNCTUATION):
            return None
        if ch == "/":
            last_slash = i
            slashes += 1
    if slashes <= 1:
        return typ
    return typ[last_slash + 1:]


def _contains_anonymous_type(typ: str) -> bool:
    """True if `typ` holds an anonymous struct, interface or func with a body."""
    for prefix in _ANONYMOUS_PREFIXES:
        idx = typ.find(prefix)
        if idx >= 0 and idx + len(prefix) < len(typ):
            if typ[idx + len(prefix)] not in "})":
                return True
    return False


def _split_type_args(params: str) -> Optional[List[str]]:
    """
    Split a type argument list on top-level commas.

    "a.T, map[k]v, b.U[x, y]" -> ["a.T", " map[k]v", " b.U[x, y]"]

    Returns None when brackets are unbalanced.
    """
    result = []
    depth = 0
    start = 0
    for i, ch in enumerate(params):
        if ch in "[({":
            depth += 1
        elif ch in "])}":
            depth -= 1
            if depth < 0:
                return None
        elif ch == "," and depth == 0:
            result.append(params[start:i])
            start = i + 1
    if depth != 0:
        return None
    result.append(params[start:])
    return result


def shorten_function_name(fnname: str) -> str:
    """
    Shorten a function symbol name.

    "github.com/foo/bar.(*T).Method" -> "bar.(*T).Method"
    "main.main" -> "main.main"
    """
    pkgname = _package_name(fnname)
    last_slash = pkgname.rfind("/")
    if last_slash >= 0:
        return fnname[last_slash + 1:]
    return fnname


def _instantiation_start(fnname: str) -> int:
    """Index of the generic instantiation bracket of a symbol, or its length."""
    if fnname.startswith("type.."):
        return len(fnname)
    lbrk = fnname.find("[")
    if lbrk < 0 or fnname.rfind("]") < 0:
        return len(fnname)
    return lbrk


def _package_name(name: str) -> str:
    """Package path of a symbol: everything up to the first '.' after the last '/'."""
    pathend = name.rfind("/", 0, _instantiation_start(name))
    if pathend < 0:
        pathend = 0
    dot = name.find(".", pathend)
    if dot < 0:
        return ""
    return name[:dot]
