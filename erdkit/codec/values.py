"""Typed values: a payload paired with its catalogue type."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..address import Address
from ..errors import InvalidArgumentError
from ..typesystem.types import (
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
    TypeKind,
    array_of,
    composite_of,
    list_of,
    option_of,
    optional_of,
    tuple_of,
    variadic_of,
)


def numeric_bounds(t: Type) -> tuple[int | None, int | None]:
    """Inclusive (min, max) of a numerical type; None means unbounded."""
    if t.size is None:
        return (None if t.signed else 0), None
    bits = t.size * 8
    if t.signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def _check_members(t: Type, items: Any, member_types: Iterable[Type]) -> None:
    if not isinstance(items, tuple):
        raise InvalidArgumentError(f"{t} value must be a tuple of typed values")
    member_types = list(member_types)
    if len(items) != len(member_types):
        raise InvalidArgumentError(f"{t} expects {len(member_types)} item(s), got {len(items)}")
    for item, member_type in zip(items, member_types):
        if not isinstance(item, TypedValue) or item.type != member_type:
            raise InvalidArgumentError(f"{t} expects an item of type {member_type}, got {item!r}")


def _validate(t: Type, value: Any) -> None:
    kind = t.kind

    if kind == TypeKind.NUMERICAL:
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidArgumentError(f"{t} value must be an int, got {value!r}")
        low, high = numeric_bounds(t)
        if (low is not None and value < low) or (high is not None and value > high):
            raise InvalidArgumentError(f"{value} is out of range for {t}")
    elif kind == TypeKind.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidArgumentError(f"{t} value must be a bool, got {value!r}")
    elif kind == TypeKind.ADDRESS:
        if not isinstance(value, Address):
            raise InvalidArgumentError(f"{t} value must be an Address, got {value!r}")
    elif kind == TypeKind.BYTES:
        if not isinstance(value, bytes):
            raise InvalidArgumentError(f"{t} value must be bytes, got {value!r}")
    elif kind in (TypeKind.STRING, TypeKind.TOKEN_IDENTIFIER):
        if not isinstance(value, str):
            raise InvalidArgumentError(f"{t} value must be a str, got {value!r}")
    elif kind in (TypeKind.OPTION, TypeKind.OPTIONAL):
        if value is not None:
            _check_members(t, (value,), t.params)
    elif kind in (TypeKind.LIST, TypeKind.VARIADIC):
        items = value if isinstance(value, tuple) else None
        _check_members(t, items, [t.element] * len(items or ()))
    elif kind == TypeKind.ARRAY:
        _check_members(t, value, [t.element] * (t.size or 0))
    elif kind in (TypeKind.TUPLE, TypeKind.COMPOSITE):
        _check_members(t, value, t.params)
    else:
        raise InvalidArgumentError(f"Unsupported type {t}")


@dataclass(frozen=True, slots=True)
class TypedValue:
    """A value of a catalogue type.

    Payloads by kind:
    - numerical: int; boolean: bool; address: Address; bytes: bytes
    - string, token identifier: str
    - option, optional: TypedValue or None
    - list, array, tuple, variadic, composite: tuple of TypedValue
    """

    type: Type
    value: Any

    def __post_init__(self) -> None:
        _validate(self.type, self.value)

    def to_native(self) -> Any:
        """Convert back to plain Python values, recursively."""
        kind = self.type.kind
        if kind in (TypeKind.OPTION, TypeKind.OPTIONAL):
            return None if self.value is None else self.value.to_native()
        if isinstance(self.value, tuple):
            return [item.to_native() for item in self.value]
        return self.value

    def __str__(self) -> str:
        return f"{self.type}({self.to_native()!r})"


def u8(value: int) -> TypedValue:
    return TypedValue(U8, value)


def u16(value: int) -> TypedValue:
    return TypedValue(U16, value)


def u32(value: int) -> TypedValue:
    return TypedValue(U32, value)


def u64(value: int) -> TypedValue:
    return TypedValue(U64, value)


def i8(value: int) -> TypedValue:
    return TypedValue(I8, value)


def i16(value: int) -> TypedValue:
    return TypedValue(I16, value)


def i32(value: int) -> TypedValue:
    return TypedValue(I32, value)


def i64(value: int) -> TypedValue:
    return TypedValue(I64, value)


def big_uint(value: int) -> TypedValue:
    return TypedValue(BIG_UINT, value)


def big_int(value: int) -> TypedValue:
    return TypedValue(BIG_INT, value)


def boolean(value: bool) -> TypedValue:
    return TypedValue(BOOL, value)


def address(value: Address | str) -> TypedValue:
    """Address value from an Address or a bech32 string."""
    if isinstance(value, str):
        value = Address.from_bech32(value)
    return TypedValue(ADDRESS, value)


def bytes_value(value: bytes | bytearray | str) -> TypedValue:
    """Bytes value; strings are UTF-8 encoded."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return TypedValue(BYTES, bytes(value))


def string(value: str) -> TypedValue:
    return TypedValue(STRING, value)


def token_identifier(value: str) -> TypedValue:
    return TypedValue(TOKEN_IDENTIFIER, value)


def option(element_type: Type, value: TypedValue | None = None) -> TypedValue:
    return TypedValue(option_of(element_type), value)


def list_value(element_type: Type, items: Iterable[TypedValue]) -> TypedValue:
    return TypedValue(list_of(element_type), tuple(items))


def array_value(element_type: Type, items: Iterable[TypedValue]) -> TypedValue:
    items = tuple(items)
    return TypedValue(array_of(len(items), element_type), items)


def tuple_value(*items: TypedValue) -> TypedValue:
    return TypedValue(tuple_of(*(item.type for item in items)), items)


def variadic(element_type: Type, items: Iterable[TypedValue]) -> TypedValue:
    return TypedValue(variadic_of(element_type), tuple(items))


def composite(*items: TypedValue) -> TypedValue:
    return TypedValue(composite_of(*(item.type for item in items)), items)


def optional(element_type: Type, value: TypedValue | None = None) -> TypedValue:
    return TypedValue(optional_of(element_type), value)
