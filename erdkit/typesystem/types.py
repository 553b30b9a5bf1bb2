"""Type descriptors and the closed catalogue of ABI types."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

from dataclasses_json import DataClassJsonMixin


@dataclass(frozen=True)
class TypeDescriptor(DataClassJsonMixin):
    """Parsed, unresolved type expression.

    For sized identifiers (``array8``, ``tuple3``):
    - name is the bare identifier (``array``, ``tuple``)
    - size is the numeric suffix (None when the identifier has none)
    """

    name: str
    params: tuple["TypeDescriptor", ...] = field(default_factory=tuple)
    size: int | None = None

    def __str__(self) -> str:
        name = self.name if self.size is None else f"{self.name}{self.size}"
        if not self.params:
            return name
        return f"{name}<{','.join(str(p) for p in self.params)}>"


class TypeKind(StrEnum):
    """Every kind of type the codec knows how to handle."""

    NUMERICAL = auto()
    BOOLEAN = auto()
    ADDRESS = auto()
    BYTES = auto()
    STRING = auto()
    TOKEN_IDENTIFIER = auto()
    OPTION = auto()
    LIST = auto()
    ARRAY = auto()
    TUPLE = auto()
    VARIADIC = auto()  # Trailing, absorbs any number of arguments
    COMPOSITE = auto()  # K arguments per occurrence
    OPTIONAL = auto()  # Trailing, zero or one argument


MULTI_VALUE_KINDS = frozenset([TypeKind.VARIADIC, TypeKind.COMPOSITE, TypeKind.OPTIONAL])


@dataclass(frozen=True, slots=True)
class Type:
    """A resolved member of the type catalogue.

    - size: byte width of fixed-width numerics and addresses, element count of
      arrays, None otherwise
    - signed: two's complement numerics
    """

    kind: TypeKind
    name: str
    params: tuple["Type", ...] = ()
    size: int | None = None
    signed: bool = False

    @property
    def is_fixed_size(self) -> bool:
        if self.kind == TypeKind.NUMERICAL:
            return self.size is not None
        if self.kind in (TypeKind.BOOLEAN, TypeKind.ADDRESS):
            return True
        if self.kind in (TypeKind.ARRAY, TypeKind.TUPLE):
            return all(p.is_fixed_size for p in self.params)
        return False

    @property
    def is_multi_value(self) -> bool:
        return self.kind in MULTI_VALUE_KINDS

    @property
    def element(self) -> "Type":
        """The sole type parameter of a one-parameter generic."""
        if len(self.params) != 1:
            raise TypeError(f"{self} has no single element type")
        return self.params[0]

    def __str__(self) -> str:
        name = self.name
        if self.kind == TypeKind.ARRAY:
            name = f"{self.name}{self.size}"
        if not self.params:
            return name
        return f"{name}<{','.join(str(p) for p in self.params)}>"


def _numerical(name: str, size: int | None, signed: bool) -> Type:
    return Type(TypeKind.NUMERICAL, name, size=size, signed=signed)


U8 = _numerical("u8", 1, False)
U16 = _numerical("u16", 2, False)
U32 = _numerical("u32", 4, False)
U64 = _numerical("u64", 8, False)
I8 = _numerical("i8", 1, True)
I16 = _numerical("i16", 2, True)
I32 = _numerical("i32", 4, True)
I64 = _numerical("i64", 8, True)
BIG_UINT = _numerical("BigUint", None, False)
BIG_INT = _numerical("BigInt", None, True)

BOOL = Type(TypeKind.BOOLEAN, "bool")
ADDRESS = Type(TypeKind.ADDRESS, "Address", size=32)
BYTES = Type(TypeKind.BYTES, "bytes")
STRING = Type(TypeKind.STRING, "utf-8 string")
TOKEN_IDENTIFIER = Type(TypeKind.TOKEN_IDENTIFIER, "TokenIdentifier")


def option_of(t: Type) -> Type:
    return Type(TypeKind.OPTION, "Option", (t,))


def list_of(t: Type) -> Type:
    return Type(TypeKind.LIST, "List", (t,))


def array_of(size: int, t: Type) -> Type:
    if size < 1:
        raise ValueError("array size must be positive")
    return Type(TypeKind.ARRAY, "array", (t,), size=size)


def tuple_of(*members: Type) -> Type:
    if not members:
        raise ValueError("tuple needs at least one member")
    return Type(TypeKind.TUPLE, "tuple", tuple(members))


def variadic_of(t: Type) -> Type:
    return Type(TypeKind.VARIADIC, "variadic", (t,))


def composite_of(*members: Type) -> Type:
    if not members:
        raise ValueError("composite needs at least one member")
    return Type(TypeKind.COMPOSITE, "multi", tuple(members))


def optional_of(t: Type) -> Type:
    return Type(TypeKind.OPTIONAL, "optional", (t,))


def count_parts(t: Type) -> int:
    """Number of data parts consumed by one occurrence of a type."""
    if t.kind == TypeKind.COMPOSITE:
        return sum(count_parts(p) for p in t.params)
    return 1
