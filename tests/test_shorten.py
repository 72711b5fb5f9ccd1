"""
Tests for type and function name shortening.

Run with: python -m pytest tests/test_shorten.py -v
"""
import pytest

import helpers  # noqa: F401  (puts the package on sys.path)
from varpretty.shorten import _split_type_args, shorten_function_name, shorten_type


class TestShortenType:
    """Import paths collapse to their last component."""

    @pytest.mark.parametrize("src,expected", [
        ("long/package/path/pkg.A", "pkg.A"),
        ("[]long/package/path/pkg.A", "[]pkg.A"),
        ("map[long/package/path/pkg.A]long/package/path/pkg.B", "map[pkg.A]pkg.B"),
        ("map[long/package/path/pkg.A]interface {}", "map[pkg.A]interface {}"),
        ("map[long/package/path/pkg.A]interface{}", "map[pkg.A]interface{}"),
        ("map[long/package/path/pkg.A]struct {}", "map[pkg.A]struct {}"),
        ("map[long/package/path/pkg.A]struct{}", "map[pkg.A]struct{}"),
        ("map[long/package/path/pkg.A]map[long/package/path/pkg.B]long/package/path/pkg.C",
         "map[pkg.A]map[pkg.B]pkg.C"),
        ("map[long/package/path/pkg.A][]long/package/path/pkg.B", "map[pkg.A][]pkg.B"),
        ("map[uint64]*github.com/aarzilli/dwarf5/dwarf.typeUnit", "map[uint64]*dwarf.typeUnit"),
        ("uint8", "uint8"),
        ("encoding/binary", "encoding/binary"),
    ])
    def test_table(self, src, expected):
        assert shorten_type(src) == expected

    def test_multi_segment_path(self):
        assert shorten_type("github.com/foo/bar/baz.MyType") == "baz.MyType"

    def test_already_minimal(self):
        assert shorten_type("fmt.Stringer") == "fmt.Stringer"
        assert shorten_type("net/http.Request") == "net/http.Request"
        assert shorten_type("") == ""

    def test_array_and_pointer_prefixes(self):
        assert shorten_type("[5]a/b/c.T") == "[5]c.T"
        assert shorten_type("*[]*a/b/c.T") == "*[]*c.T"
        assert shorten_type("**a/b/c.T") == "**c.T"

    def test_versioned_and_escaped_paths(self):
        assert shorten_type("example.com/mod@v1.2.3/sub/pkg.T") == "pkg.T"
        assert shorten_type("a/b%2ec/d.T") == "d.T"
        assert shorten_type("git.host/my-org/my-repo/pkg.T") == "pkg.T"


class TestShortenTypeGenerics:
    """Generic instantiations shorten the name and every argument."""

    def test_single_argument(self):
        assert shorten_type("github.com/x/y/pkg.List[github.com/x/y/pkg.Elem]") == "pkg.List[pkg.Elem]"

    def test_several_arguments(self):
        assert shorten_type("a/b/c.Pair[int,a/b/c.T]") == "c.Pair[int, c.T]"

    def test_nested_instantiation(self):
        assert shorten_type("a/b/c.T[a/b/c.U[x, y]]") == "c.T[c.U[x, y]]"

    def test_map_argument(self):
        assert shorten_type("a/b/c.T[map[string]a/b/c.U]") == "c.T[map[string]c.U]"

    def test_unclosed_instantiation(self):
        assert shorten_type("a/b/c.T[int") == "a/b/c.T[int"

    def test_failing_argument_keeps_original(self):
        src = "a/b/c.T[struct { X int }]"
        assert shorten_type(src) == src


class TestShortenTypeFailsClosed:
    """Anything not understood comes back unchanged."""

    @pytest.mark.parametrize("src", [
        "struct { a int }",
        "struct {a int}",
        "interface { M() }",
        "func(int) string",
        "func (a/b/c.T) M()",
        "map[string]struct { X a/b/c.T }",
        "[]interface { Error() string }",
        "a/b/c.T<int>",
        "a/b c/d.T",
        "map[a/b/c.K",
        "[abc",
    ])
    def test_unchanged(self, src):
        assert shorten_type(src) == src

    def test_empty_composites(self):
        for src in ("interface {}", "interface{}", "struct {}", "struct{}"):
            assert shorten_type(src) == src


class TestShortenTypeIdempotent:
    @pytest.mark.parametrize("src", [
        "github.com/foo/bar/baz.MyType",
        "map[long/package/path/pkg.A][]long/package/path/pkg.B",
        "a/b/c.T[a/b/c.U[x, y]]",
        "*[3]a/b/c.T",
        "fmt.Stringer",
        "func(int) string",
        "encoding/binary",
    ])
    def test_twice_is_once(self, src):
        once = shorten_type(src)
        assert shorten_type(once) == once


class TestSplitTypeArgs:
    def test_simple(self):
        assert _split_type_args("int, string") == ["int", " string"]

    def test_nested(self):
        assert _split_type_args("a.T[x, y], map[k]v") == ["a.T[x, y]", " map[k]v"]

    def test_unbalanced(self):
        assert _split_type_args("a.T[x") is None
        assert _split_type_args("x]") is None


class TestShortenFunctionName:
    @pytest.mark.parametrize("src,expected", [
        ("github.com/foo/bar.(*T).Method", "bar.(*T).Method"),
        ("github.com/foo/bar.Func.func1", "bar.Func.func1"),
        ("main.main", "main.main"),
        ("runtime.gopark", "runtime.gopark"),
        ("net/http.(*Server).Serve", "http.(*Server).Serve"),
        ("gopkg.in/yaml.v2.Unmarshal", "yaml.v2.Unmarshal"),
        ("noslash", "noslash"),
    ])
    def test_table(self, src, expected):
        assert shorten_function_name(src) == expected

    def test_slash_inside_instantiation_ignored(self):
        assert shorten_function_name("pkg.F[github.com/x/y.T]") == "pkg.F[github.com/x/y.T]"
        assert shorten_function_name("github.com/a/b.G[github.com/x/y.T]") == "b.G[github.com/x/y.T]"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
