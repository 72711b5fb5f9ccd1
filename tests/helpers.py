"""
VarPretty test helpers

Builders for Variable trees shaped like the ones Delve returns, and a sample
snapshot used by the command, CLI and REPL tests.
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "python"))

from varpretty.variable import Kind, Variable


def leaf(kind, value, name="", type_="", addr=0xc000010000, length=0):
    return Variable(kind=kind, value=value, name=name, type=type_, addr=addr, len=length)


def int_var(value, name="", type_="int"):
    return leaf(Kind.INT, str(value), name=name, type_=type_)


def str_var(value, name="", length=None):
    if length is None:
        length = len(value.encode("utf-8"))
    return leaf(Kind.STRING, value, name=name, type_="string", length=length)


def struct_var(type_, fields, name="", length=None, addr=0xc000020000):
    if length is None:
        length = len(fields)
    return Variable(kind=Kind.STRUCT, type=type_, name=name, len=length, addr=addr, children=list(fields))


def slice_var(type_, elems, name="", length=None, cap=None, base=0xc000030000):
    if length is None:
        length = len(elems)
    if cap is None:
        cap = length
    return Variable(
        kind=Kind.SLICE, type=type_, name=name, len=length, cap=cap,
        base=base, addr=0xc000040000, children=list(elems),
    )


def map_var(type_, pairs, name="", length=None, base=0xc000050000):
    children = []
    for k, v in pairs:
        children.extend([k, v])
    if length is None:
        length = len(pairs)
    return Variable(
        kind=Kind.MAP, type=type_, name=name, len=length,
        base=base, addr=0xc000060000, children=children,
    )


def ptr_var(type_, target, name="", addr=0xc000070000):
    return Variable(kind=Kind.PTR, type=type_, name=name, addr=addr, children=[target])


def point(x=5, y=9, name=""):
    return struct_var("main.T", [int_var(x, "X"), int_var(y, "Y")], name=name)


# A snapshot as ListFunctionArgs / ListLocalVars would return it
SAMPLE_SNAPSHOT = {
    "args": [
        {"name": "n", "kind": 2, "type": "int", "value": "255", "addr": 824634330880},
    ],
    "locals": [
        {
            "name": "p", "kind": 22, "type": "*main.Point", "addr": 824634330888,
            "children": [{
                "kind": 25, "type": "main.Point", "addr": 824634335232, "len": 2,
                "children": [
                    {"name": "X", "kind": 2, "type": "int", "value": "1", "addr": 824634335232},
                    {"name": "Y", "kind": 2, "type": "int", "value": "2", "addr": 824634335240},
                ],
            }],
        },
        {
            "name": "names", "kind": 23, "type": "[]string", "addr": 824634330896,
            "len": 3, "cap": 4, "base": 824634400000,
            "children": [
                {"kind": 24, "type": "string", "value": "alice", "len": 5, "addr": 824634400000},
                {"kind": 24, "type": "string", "value": "bob", "len": 3, "addr": 824634400016},
            ],
        },
        {
            "name": "ages", "kind": "map", "type": "map[string]int", "addr": 824634330920,
            "len": 2, "base": 824634500000,
            "children": [
                {"kind": "string", "type": "string", "value": "alice", "len": 5, "addr": 824634500008},
                {"kind": "int", "type": "int", "value": "30", "addr": 824634500016},
                {"kind": "string", "type": "string", "value": "bob", "len": 3, "addr": 824634500024},
                {"kind": "int", "type": "int", "value": "25", "addr": 824634500032},
            ],
        },
        {
            "name": "cfg", "kind": 25, "type": "github.com/acme/app/internal/config.Config",
            "addr": 824634330944, "len": 2,
            "children": [
                {"name": "Host", "kind": 24, "type": "string", "value": "localhost", "len": 9, "addr": 824634330944},
                {"name": "Port", "kind": 2, "type": "int", "value": "8080", "addr": 824634330960},
            ],
        },
    ],
}
