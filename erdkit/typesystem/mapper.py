"""Resolution of parsed type descriptors into catalogue types."""

import logging
import threading
from collections.abc import Callable

from ..errors import InvalidTypeExpressionError, TypeNotFoundError
from .parser import parse_type_expression
from .types import (
    ADDRESS,
    BIG_INT,
    BIG_UINT,
    BOOL,
    BYTES,
    I8,
    I16,
    I32,
    I64,
    STRING,
    TOKEN_IDENTIFIER,
    U8,
    U16,
    U32,
    U64,
    Type,
    TypeDescriptor,
    TypeKind,
    array_of,
    composite_of,
    list_of,
    option_of,
    optional_of,
    tuple_of,
    variadic_of,
)

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES: dict[str, Type] = {
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "usize": U32,
    "i8": I8,
    "i16": I16,
    "i32": I32,
    "i64": I64,
    "isize": I32,
    "BigUint": BIG_UINT,
    "BigInt": BIG_INT,
    "bool": BOOL,
    "bytes": BYTES,
    "BoxedBytes": BYTES,
    "ManagedBuffer": BYTES,
    "Address": ADDRESS,
    "ManagedAddress": ADDRESS,
    "String": STRING,
    "utf-8 string": STRING,
    "TokenIdentifier": TOKEN_IDENTIFIER,
    "EgldOrEsdtTokenIdentifier": TOKEN_IDENTIFIER,
}

# Generics taking exactly one type parameter
GENERIC_TYPES: dict[str, Callable[[Type], Type]] = {
    "Option": option_of,
    "List": list_of,
    "Vec": list_of,
    "VarArgs": variadic_of,
    "MultiResultVec": variadic_of,
    "variadic": variadic_of,
    "OptionalArg": optional_of,
    "OptionalResult": optional_of,
    "optional": optional_of,
}

# Generics taking one or more type parameters
VARIABLE_ARITY_TYPES: dict[str, Callable[..., Type]] = {
    "MultiArg": composite_of,
    "MultiResult": composite_of,
    "multi": composite_of,
    "tuple": tuple_of,
}


def known_type_names() -> list[str]:
    """Return every type name the mapper understands."""
    return [*PRIMITIVE_TYPES, *GENERIC_TYPES, *VARIABLE_ARITY_TYPES, "arrayN", "tupleN"]


class TypeMapper:
    """Map type descriptors to concrete types.

    Results of map_expression() are memoised per expression string; the cache
    may be shared by concurrent callers.
    """

    def __init__(self) -> None:
        self._cache: dict[str, Type] = {}
        self._lock = threading.Lock()

    def map_expression(self, expression: str) -> Type:
        """Parse and map a type expression (cached)."""
        with self._lock:
            cached = self._cache.get(expression)
        if cached is not None:
            return cached

        logger.debug("Type cache miss for %r", expression)
        mapped = self.map_type(parse_type_expression(expression))

        with self._lock:
            return self._cache.setdefault(expression, mapped)

    def map_type(self, descriptor: TypeDescriptor) -> Type:
        """Resolve a descriptor, depth-first, into a catalogue type."""
        name = descriptor.name

        if name in PRIMITIVE_TYPES:
            self._expect_arity(descriptor, 0)
            return PRIMITIVE_TYPES[name]

        if name == "array":
            if descriptor.size is None:
                raise InvalidTypeExpressionError(f"{descriptor} is missing its array size")
            self._expect_arity(descriptor, 1)
            return array_of(descriptor.size, self._map_single_value(descriptor.params[0], descriptor))

        if name in GENERIC_TYPES:
            self._expect_arity(descriptor, 1)
            constructor = GENERIC_TYPES[name]
            param = descriptor.params[0]
            if constructor in (variadic_of, optional_of):
                return constructor(self._map_multi_member(param, descriptor))
            return constructor(self._map_single_value(param, descriptor))

        if name in VARIABLE_ARITY_TYPES:
            if descriptor.size is not None:
                self._expect_arity(descriptor, descriptor.size)
            elif not descriptor.params:
                raise InvalidTypeExpressionError(f"{name} needs at least one type parameter")

            if name == "tuple":
                members = [self._map_single_value(p, descriptor) for p in descriptor.params]
            else:
                members = [self._map_multi_member(p, descriptor) for p in descriptor.params]
            return VARIABLE_ARITY_TYPES[name](*members)

        raise TypeNotFoundError(name)

    def _map_single_value(self, param: TypeDescriptor, parent: TypeDescriptor) -> Type:
        mapped = self.map_type(param)
        if mapped.is_multi_value:
            raise InvalidTypeExpressionError(f"{mapped} cannot be nested inside {parent.name}")
        return mapped

    def _map_multi_member(self, param: TypeDescriptor, parent: TypeDescriptor) -> Type:
        mapped = self.map_type(param)
        if mapped.kind in (TypeKind.VARIADIC, TypeKind.OPTIONAL):
            raise InvalidTypeExpressionError(f"{mapped} cannot be nested inside {parent.name}")
        return mapped

    @staticmethod
    def _expect_arity(descriptor: TypeDescriptor, arity: int) -> None:
        if len(descriptor.params) != arity:
            raise InvalidTypeExpressionError(
                f"{descriptor} expects {arity} type parameter(s), got {len(descriptor.params)}"
            )


_default_mapper = TypeMapper()


def map_type_expression(expression: str) -> Type:
    """Parse and map a type expression using the shared, cached mapper."""
    return _default_mapper.map_expression(expression)
