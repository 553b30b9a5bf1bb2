"""Type expression parser using Lark."""

import os
import re
import threading
from typing import Any

from lark import Lark
from lark.exceptions import LarkError, VisitError
from lark.visitors import Transformer

from ..errors import TypeExpressionParseError
from .types import TypeDescriptor

_g_parser: Lark | None = None
_g_parser_lock = threading.Lock()

# Identifiers whose trailing digits are a size, e.g. array8, tuple3
_SIZED_NAME = re.compile(r"^(array|tuple)(\d\w*)?$")


def _split_size(name: str) -> tuple[str, int | None]:
    match = _SIZED_NAME.match(name)
    if not match:
        return name, None

    base, suffix = match.groups()
    if not suffix:
        if base == "array":
            raise TypeExpressionParseError("array requires a numeric size, e.g. array8<u8>")
        return base, None
    if not suffix.isdigit():
        raise TypeExpressionParseError(f"Malformed size suffix in {name!r}")
    if suffix.startswith("0"):
        raise TypeExpressionParseError(f"Size of {name!r} must be a positive number without leading zeros")
    return base, int(suffix)


class TreeTransformer(Transformer):
    """Transform parse tree into type descriptors."""

    def start(self, args: list[Any]) -> TypeDescriptor:
        return args[0]

    def name(self, args: list[Any]) -> str:
        return str(args[0])

    def params(self, args: list[Any]) -> tuple[TypeDescriptor, ...]:
        return tuple(args)

    def type_expr(self, args: list[Any]) -> TypeDescriptor:
        name, size = _split_size(args[0])
        params = args[1] if len(args) > 1 else ()
        return TypeDescriptor(name=name, params=params, size=size)


def _get_parser() -> Lark:
    global _g_parser

    with _g_parser_lock:
        if not _g_parser:
            with open(f"{os.path.dirname(__file__)}/typeexpr.lark", encoding="utf-8") as f:
                grammar = f.read()
            _g_parser = Lark(grammar, parser="lalr")
        return _g_parser


def parse_type_expression(text: str) -> TypeDescriptor:
    """Parse a type expression such as ``List<tuple2<u32,bytes>>``."""
    try:
        tree = _get_parser().parse(text)
        return TreeTransformer().transform(tree)
    except VisitError as err:
        if isinstance(err.orig_exc, TypeExpressionParseError):
            raise err.orig_exc from None
        raise
    except LarkError as err:
        raise TypeExpressionParseError(f"Malformed type expression {text!r}") from err
