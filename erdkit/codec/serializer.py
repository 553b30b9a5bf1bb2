"""Conversion between typed argument lists and hex data parts."""

import logging
import re
from collections.abc import Iterable, Iterator, Sequence

from ..constants import ARGUMENTS_SEPARATOR
from ..errors import SerializerError
from ..typesystem.types import Type, TypeKind, count_parts
from .binary import BinaryCodec
from .values import TypedValue

logger = logging.getLogger(__name__)

_HEX_PART = re.compile(r"(?:[0-9a-fA-F]{2})*")


def check_multi_value_positions(types: Sequence[Type]) -> None:
    """Ensure multi-value types only appear at the end of a parameter list.

    Several optional parameters may trail each other; a variadic or composite
    parameter must be the last one.
    """
    for index, t in enumerate(types[:-1]):
        if t.kind == TypeKind.OPTIONAL and types[index + 1].kind == TypeKind.OPTIONAL:
            continue
        if t.is_multi_value:
            raise SerializerError(f"{t} is only allowed as the last argument (found at position {index})")


class _PartsReader:
    def __init__(self, buffers: Sequence[bytes]) -> None:
        self._buffers = buffers
        self._index = 0

    @property
    def remaining(self) -> int:
        return len(self._buffers) - self._index

    def next(self) -> bytes:
        buffer = self._buffers[self._index]
        self._index += 1
        return buffer


class ArgSerializer:
    """Serialize typed values into data parts, and back."""

    def __init__(self, codec: BinaryCodec | None = None) -> None:
        self._codec = codec or BinaryCodec()

    def values_to_string(self, values: Iterable[TypedValue]) -> str:
        """Encode values into a single ``@``-joined string."""
        return ARGUMENTS_SEPARATOR.join(self.values_to_strings(values))

    def values_to_strings(self, values: Iterable[TypedValue]) -> list[str]:
        """Encode values into hex data parts, one per positional argument."""
        return [buffer.hex() for buffer in self.values_to_buffers(values)]

    def values_to_buffers(self, values: Iterable[TypedValue]) -> list[bytes]:
        """Encode values into raw data parts, expanding trailing multi-values."""
        values = list(values)
        check_multi_value_positions([v.type for v in values])

        buffers: list[bytes] = []
        absent_optional: TypedValue | None = None
        for value in values:
            if value.type.kind == TypeKind.OPTIONAL:
                if value.value is None:
                    absent_optional = absent_optional or value
                elif absent_optional is not None:
                    raise SerializerError(f"{value.type} cannot follow an absent {absent_optional.type}")

            for part in self._flatten(value):
                buffers.append(self._codec.encode_top_level(part))

        logger.debug("Serialized %d argument(s) into %d data part(s)", len(values), len(buffers))
        return buffers

    def _flatten(self, value: TypedValue) -> Iterator[TypedValue]:
        kind = value.type.kind
        if kind in (TypeKind.VARIADIC, TypeKind.COMPOSITE):
            for item in value.value:
                yield from self._flatten(item)
        elif kind == TypeKind.OPTIONAL:
            if value.value is not None:
                yield from self._flatten(value.value)
        else:
            yield value

    def string_to_values(self, joined: str, types: Iterable[Type]) -> list[TypedValue]:
        """Decode an ``@``-joined string of hex data parts."""
        parts = joined.split(ARGUMENTS_SEPARATOR) if joined else []
        return self.strings_to_values(parts, types)

    def strings_to_values(self, parts: Iterable[str], types: Iterable[Type]) -> list[TypedValue]:
        """Decode hex data parts against the declared types."""
        buffers: list[bytes] = []
        for part in parts:
            if not _HEX_PART.fullmatch(part):
                raise SerializerError(f"Data part {part!r} is not valid hex")
            buffers.append(bytes.fromhex(part))
        return self.buffers_to_values(buffers, types)

    def buffers_to_values(self, buffers: Sequence[bytes], types: Iterable[Type]) -> list[TypedValue]:
        """Decode raw data parts against the declared types.

        The last declared type may be variadic and absorb all remaining parts.
        """
        types = list(types)
        check_multi_value_positions(types)

        reader = _PartsReader(buffers)
        values = [self._read(reader, t) for t in types]

        if reader.remaining:
            raise SerializerError(f"{reader.remaining} unexpected trailing data part(s)")
        return values

    def _read(self, reader: _PartsReader, t: Type) -> TypedValue:
        kind = t.kind

        if kind == TypeKind.VARIADIC:
            width = count_parts(t.element)
            if reader.remaining % width:
                raise SerializerError(
                    f"{reader.remaining} data part(s) cannot be split into groups of {width} for {t}"
                )
            items: list[TypedValue] = []
            while reader.remaining:
                items.append(self._read(reader, t.element))
            return TypedValue(t, tuple(items))

        if kind == TypeKind.COMPOSITE:
            return TypedValue(t, tuple(self._read(reader, member) for member in t.params))

        if kind == TypeKind.OPTIONAL:
            if not reader.remaining:
                return TypedValue(t, None)
            return TypedValue(t, self._read(reader, t.element))

        if not reader.remaining:
            raise SerializerError(f"Missing data part for {t}")
        return self._codec.decode_top_level(reader.next(), t)
