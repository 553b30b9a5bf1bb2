"""Binary encoding of typed values, in top-level and nested mode.

Top-level mode is used for a value that is itself one argument: the argument
boundary delimits it, so variable-size values carry no length header and
numbers use their minimal big-endian form (zero is empty).

Nested mode is used inside composites (list items, tuple members, option
payloads): fixed-size values keep their width, variable-size values get a
4-byte big-endian length header and lists a 4-byte item count.
"""

import struct
from typing import Any

from ..address import Address
from ..constants import ADDRESS_LENGTH, LENGTH_HEADER_SIZE
from ..errors import CodecError
from ..typesystem.types import Type, TypeKind
from .values import TypedValue

# Struct format characters for fixed-width integers, keyed by (width, signed)
FORMAT_CHARS: dict[tuple[int, bool], str] = {
    (1, False): "B",
    (2, False): "H",
    (4, False): "I",
    (8, False): "Q",
    (1, True): "b",
    (2, True): "h",
    (4, True): "i",
    (8, True): "q",
}

_LENGTH_HEADER = struct.Struct(">I")

_OPTION_ABSENT = 0x00
_OPTION_PRESENT = 0x01


def minimal_bytes(value: int, signed: bool) -> bytes:
    """Shortest big-endian representation; zero is empty."""
    if value == 0:
        return b""
    if not signed:
        return value.to_bytes((value.bit_length() + 7) // 8, byteorder="big")
    length = (value if value >= 0 else ~value).bit_length() // 8 + 1
    return value.to_bytes(length, byteorder="big", signed=True)


def _length_header(length: int) -> bytes:
    return _LENGTH_HEADER.pack(length)


def _read(data: bytes | memoryview, offset: int, size: int) -> bytes:
    if size > len(data) - offset:
        raise CodecError(f"Need {size} byte(s) at offset {offset}, only {len(data) - offset} left")
    return bytes(data[offset : offset + size])


def _read_length(data: bytes | memoryview, offset: int) -> int:
    return _LENGTH_HEADER.unpack(_read(data, offset, LENGTH_HEADER_SIZE))[0]


def _utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise CodecError("Invalid UTF-8 payload") from err


def _multi_value_error(t: Type) -> CodecError:
    return CodecError(f"{t} expands into several arguments and has no single encoding")


class BinaryCodec:
    """Encode and decode typed values."""

    def encode_nested(self, value: TypedValue) -> bytes:
        t = value.type
        kind = t.kind

        if kind == TypeKind.NUMERICAL:
            if t.size is not None:
                return struct.pack(">" + FORMAT_CHARS[(t.size, t.signed)], value.value)
            payload = minimal_bytes(value.value, t.signed)
            return _length_header(len(payload)) + payload

        if kind == TypeKind.BOOLEAN:
            return b"\x01" if value.value else b"\x00"

        if kind == TypeKind.ADDRESS:
            return value.value.pubkey

        if kind == TypeKind.BYTES:
            return _length_header(len(value.value)) + value.value

        if kind in (TypeKind.STRING, TypeKind.TOKEN_IDENTIFIER):
            encoded = value.value.encode("utf-8")
            return _length_header(len(encoded)) + encoded

        if kind == TypeKind.OPTION:
            if value.value is None:
                return bytes([_OPTION_ABSENT])
            return bytes([_OPTION_PRESENT]) + self.encode_nested(value.value)

        if kind == TypeKind.LIST:
            return _length_header(len(value.value)) + self._encode_items(value.value)

        if kind in (TypeKind.ARRAY, TypeKind.TUPLE):
            return self._encode_items(value.value)

        raise _multi_value_error(t)

    def encode_top_level(self, value: TypedValue) -> bytes:
        t = value.type
        kind = t.kind

        if kind == TypeKind.NUMERICAL:
            return minimal_bytes(value.value, t.signed)

        if kind == TypeKind.BOOLEAN:
            return b"\x01" if value.value else b""

        if kind == TypeKind.ADDRESS:
            return value.value.pubkey

        if kind == TypeKind.BYTES:
            return value.value

        if kind in (TypeKind.STRING, TypeKind.TOKEN_IDENTIFIER):
            return value.value.encode("utf-8")

        if kind == TypeKind.OPTION:
            if value.value is None:
                return b""
            return bytes([_OPTION_PRESENT]) + self.encode_nested(value.value)

        if kind in (TypeKind.LIST, TypeKind.ARRAY, TypeKind.TUPLE):
            return self._encode_items(value.value)

        raise _multi_value_error(t)

    def _encode_items(self, items: tuple[TypedValue, ...]) -> bytes:
        return b"".join(self.encode_nested(item) for item in items)

    def decode_nested(
        self, data: bytes | memoryview, t: Type, offset: int = 0
    ) -> tuple[TypedValue, int]:
        """Decode a nested value.

        Args:
            data: The buffer to decode from.
            t: The expected type.
            offset: Starting offset in data.

        Returns:
            Tuple of (value, bytes_consumed).
        """
        kind = t.kind
        payload: Any

        if kind == TypeKind.NUMERICAL:
            if t.size is not None:
                raw = _read(data, offset, t.size)
                payload = struct.unpack(">" + FORMAT_CHARS[(t.size, t.signed)], raw)[0]
                return TypedValue(t, payload), t.size
            length = _read_length(data, offset)
            raw = _read(data, offset + LENGTH_HEADER_SIZE, length)
            payload = int.from_bytes(raw, byteorder="big", signed=t.signed)
            return TypedValue(t, payload), LENGTH_HEADER_SIZE + length

        if kind == TypeKind.BOOLEAN:
            return TypedValue(t, self._decode_bool_byte(_read(data, offset, 1)[0])), 1

        if kind == TypeKind.ADDRESS:
            return TypedValue(t, Address(_read(data, offset, ADDRESS_LENGTH))), ADDRESS_LENGTH

        if kind in (TypeKind.BYTES, TypeKind.STRING, TypeKind.TOKEN_IDENTIFIER):
            length = _read_length(data, offset)
            raw = _read(data, offset + LENGTH_HEADER_SIZE, length)
            payload = raw if kind == TypeKind.BYTES else _utf8(raw)
            return TypedValue(t, payload), LENGTH_HEADER_SIZE + length

        if kind == TypeKind.OPTION:
            marker = _read(data, offset, 1)[0]
            if marker == _OPTION_ABSENT:
                return TypedValue(t, None), 1
            if marker != _OPTION_PRESENT:
                raise CodecError(f"Invalid option marker {marker:#04x}")
            inner, consumed = self.decode_nested(data, t.element, offset + 1)
            return TypedValue(t, inner), 1 + consumed

        if kind == TypeKind.LIST:
            count = _read_length(data, offset)
            # Every nested item takes at least one byte
            if count > len(data) - offset - LENGTH_HEADER_SIZE:
                raise CodecError(f"List of {count} item(s) exceeds the remaining buffer")
            items, consumed = self._decode_items(
                data, [t.element] * count, offset + LENGTH_HEADER_SIZE
            )
            return TypedValue(t, items), LENGTH_HEADER_SIZE + consumed

        if kind == TypeKind.ARRAY:
            items, consumed = self._decode_items(data, [t.element] * (t.size or 0), offset)
            return TypedValue(t, items), consumed

        if kind == TypeKind.TUPLE:
            items, consumed = self._decode_items(data, list(t.params), offset)
            return TypedValue(t, items), consumed

        raise _multi_value_error(t)

    def decode_top_level(self, data: bytes | memoryview, t: Type) -> TypedValue:
        """Decode a value that occupies the whole buffer."""
        kind = t.kind
        data = bytes(data)

        if kind == TypeKind.NUMERICAL:
            if t.size is not None and len(data) > t.size:
                raise CodecError(f"{len(data)} byte(s) do not fit into {t}")
            return TypedValue(t, int.from_bytes(data, byteorder="big", signed=t.signed))

        if kind == TypeKind.BOOLEAN:
            if not data:
                return TypedValue(t, False)
            if len(data) != 1:
                raise CodecError(f"Invalid boolean encoding {data.hex()}")
            return TypedValue(t, self._decode_bool_byte(data[0]))

        if kind == TypeKind.ADDRESS:
            if len(data) != ADDRESS_LENGTH:
                raise CodecError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(data)}")
            return TypedValue(t, Address(data))

        if kind == TypeKind.BYTES:
            return TypedValue(t, data)

        if kind in (TypeKind.STRING, TypeKind.TOKEN_IDENTIFIER):
            return TypedValue(t, _utf8(data))

        if kind == TypeKind.OPTION:
            if not data:
                return TypedValue(t, None)
            if data[0] != _OPTION_PRESENT:
                raise CodecError(f"Invalid option marker {data[0]:#04x}")
            inner, consumed = self.decode_nested(data, t.element, 1)
            self._expect_consumed(data, 1 + consumed)
            return TypedValue(t, inner)

        if kind == TypeKind.LIST:
            items: list[TypedValue] = []
            offset = 0
            while offset < len(data):
                item, consumed = self.decode_nested(data, t.element, offset)
                items.append(item)
                offset += consumed
            return TypedValue(t, tuple(items))

        if kind in (TypeKind.ARRAY, TypeKind.TUPLE):
            value, consumed = self.decode_nested(data, t)
            self._expect_consumed(data, consumed)
            return value

        raise _multi_value_error(t)

    def _decode_items(
        self, data: bytes | memoryview, types: list[Type], offset: int
    ) -> tuple[tuple[TypedValue, ...], int]:
        items: list[TypedValue] = []
        start = offset
        for item_type in types:
            item, consumed = self.decode_nested(data, item_type, offset)
            items.append(item)
            offset += consumed
        return tuple(items), offset - start

    @staticmethod
    def _decode_bool_byte(byte: int) -> bool:
        if byte not in (0, 1):
            raise CodecError(f"Invalid boolean byte {byte:#04x}")
        return byte == 1

    @staticmethod
    def _expect_consumed(data: bytes, consumed: int) -> None:
        if consumed != len(data):
            raise CodecError(f"{len(data) - consumed} unexpected trailing byte(s)")
