"""Native functions. Each builtin takes the evaluated argument list and returns an Object; builtins check their own
arity and argument types and report failures as Error values.
"""

from types import MappingProxyType

from monkey.runtime.object import Builtin, Error, Integer, NULL, String


def _len(args):
    if len(args) != 1:
        return Error(f"wrong number of arguments. got={len(args)}, want=1")

    match args[0]:
        case String(value=value):
            return Integer(len(value))
        case other:
            return Error(f"argument to `len` not supported, got {other.type}")


def _puts(args):
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS = MappingProxyType({
    "len": Builtin(_len, "len"),
    "puts": Builtin(_puts, "puts"),
})
