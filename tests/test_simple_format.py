"""
Tests for printf-style leaf formats and the string hexdump.

Run with: python -m pytest tests/test_simple_format.py -v
"""
import pytest

from helpers import int_var, leaf, str_var
from varpretty.simple_format import SimpleFormat, hexdigits, hexdump
from varpretty.variable import Kind, Variable


class TestHexdigits:
    @pytest.mark.parametrize("n,expected", [
        (0, 1), (1, 1), (15, 1), (16, 2), (255, 2), (256, 3), (0x10000, 5),
    ])
    def test_hexdigits(self, n, expected):
        assert hexdigits(n) == expected


class TestHexdump:
    def test_short_row(self):
        expected = (
            "0 | 68 69 " + "   " * 6 + " " + "   " * 8
            + "|hi" + " " * 14 + "|\n"
        )
        assert hexdump(b"hi") == expected

    def test_full_row(self):
        out = hexdump(b"0123456789abcdef")
        assert out == (
            "00 | 30 31 32 33 34 35 36 37  38 39 61 62 63 64 65 66 "
            "|0123456789abcdef|\n"
        )

    def test_offsets_are_padded(self):
        lines = hexdump(b"A" * 17).splitlines()
        assert len(lines) == 2
        assert lines[0].startswith(" 0 | 41 ")
        assert lines[1].startswith("10 | 41 ")

    def test_non_printable_bytes(self):
        out = hexdump(b"a\x00\xff\n")
        assert out.endswith("|a..." + " " * 12 + "|\n")

    def test_empty(self):
        assert hexdump(b"") == ""


class TestIntegerFormats:
    @pytest.mark.parametrize("verb,value,expected", [
        ("%x", 255, "ff"),
        ("%X", 255, "FF"),
        ("%o", 8, "10"),
        ("%O", 15, "0o17"),
        ("%d", 42, "42"),
        ("%08d", 42, "00000042"),
        ("%x", -255, "-ff"),
    ])
    def test_verbs(self, verb, value, expected):
        assert SimpleFormat(int_format=verb).apply(int_var(value)) == expected

    def test_unsigned(self):
        v = leaf(Kind.UINT8, "200", type_="uint8")
        assert SimpleFormat(int_format="%x").apply(v) == "c8"

    def test_no_format(self):
        assert SimpleFormat().apply(int_var(255)) == "255"

    def test_unparseable_value(self):
        v = leaf(Kind.INT, "abc")
        assert SimpleFormat(int_format="%x").apply(v) == "abc"

    def test_unreadable(self):
        v = Variable(kind=Kind.INT, value="", unreadable="bad address")
        assert SimpleFormat(int_format="%x").apply(v) == ""

    def test_other_kinds_untouched(self):
        v = leaf(Kind.BOOL, "true")
        assert SimpleFormat(int_format="%x", float_format="%e").apply(v) == "true"


class TestFloatFormats:
    def test_fixed(self):
        v = leaf(Kind.FLOAT64, "3.14159")
        assert SimpleFormat(float_format="%0.2f").apply(v) == "3.14"

    def test_exponent(self):
        v = leaf(Kind.FLOAT32, "1234.5")
        assert SimpleFormat(float_format="%e").apply(v) == "1.234500e+03"

    def test_int_format_does_not_apply(self):
        v = leaf(Kind.FLOAT64, "1.5")
        assert SimpleFormat(int_format="%x").apply(v) == "1.5"

    def test_special_values(self):
        v = leaf(Kind.FLOAT64, "+Inf")
        assert SimpleFormat(float_format="%0.2f").apply(v) == "inf"


class TestComplexFormats:
    def test_format_complex(self):
        assert SimpleFormat(float_format="%0.2f").format_complex("1", "2") == "(1.00+2.00i)"
        assert SimpleFormat(float_format="%0.2f").format_complex("1", "-2") == "(1.00-2.00i)"

    def test_explicit_plus_flag(self):
        assert SimpleFormat(float_format="%+0.1f").format_complex("1", "2") == "(+1.0+2.0i)"

    def test_not_numbers(self):
        assert SimpleFormat(float_format="%0.2f").format_complex("x", "2") == ""

    def test_apply_on_complex(self):
        v = Variable(
            kind=Kind.COMPLEX64, value="(1 + 2i)",
            children=[leaf(Kind.FLOAT32, "1"), leaf(Kind.FLOAT32, "2")],
        )
        assert SimpleFormat(float_format="%0.1f").apply(v) == "(1.0+2.0i)"


class TestStringFormats:
    def test_hexdump(self):
        assert SimpleFormat(hexdump_string=True).apply(str_var("hi")) == hexdump(b"hi")

    def test_plain(self):
        assert SimpleFormat().apply(str_var("hi")) == "hi"

    def test_utf8_bytes(self):
        out = SimpleFormat(hexdump_string=True).apply(str_var("é"))
        assert out.startswith("0 | c3 a9 ")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
