"""Inference of typed values from plain Python call arguments."""

import logging
from collections.abc import Sequence
from typing import Any

from ..abi import EndpointDefinition
from ..address import Address
from ..constants import ADDRESS_LENGTH
from ..errors import AddressError, ArgumentCountError, CannotInferTypeError, InvalidArgumentError
from ..typesystem.types import Type, TypeKind
from .serializer import check_multi_value_positions
from .values import TypedValue

logger = logging.getLogger(__name__)


def _describe(native: Any) -> str:
    return f"{type(native).__name__} {native!r}"


class NativeSerializer:
    """Convert native arguments into typed values, guided by an endpoint definition."""

    def native_to_typed_values(
        self, args: Sequence[Any], endpoint: EndpointDefinition
    ) -> list[TypedValue]:
        args = list(args)
        types = endpoint.input_types
        check_multi_value_positions(types)
        self._check_count(args, endpoint)

        values: list[TypedValue] = []
        for index, t in enumerate(types):
            if t.kind == TypeKind.VARIADIC:
                values.append(self._to_variadic(args[index:], t))
                break
            native = args[index] if index < len(args) else None
            values.append(self.convert(native, t))

        logger.debug("Inferred %d typed value(s) for %s", len(values), endpoint.name)
        return values

    @staticmethod
    def _check_count(args: list[Any], endpoint: EndpointDefinition) -> None:
        types = endpoint.input_types
        required = sum(1 for t in types if t.kind not in (TypeKind.OPTIONAL, TypeKind.VARIADIC))
        has_variadic = bool(types) and types[-1].kind == TypeKind.VARIADIC

        if has_variadic:
            if len(args) < required:
                raise ArgumentCountError(endpoint.name, f"at least {required}", len(args))
            return

        if not required <= len(args) <= len(types):
            expected = str(required) if required == len(types) else f"{required} to {len(types)}"
            raise ArgumentCountError(endpoint.name, expected, len(args))

    def _to_variadic(self, natives: list[Any], t: Type) -> TypedValue:
        if len(natives) == 1 and isinstance(natives[0], TypedValue) and natives[0].type == t:
            return natives[0]
        return TypedValue(t, tuple(self.convert(native, t.element) for native in natives))

    def convert(self, native: Any, t: Type) -> TypedValue:
        """Convert one native value to the given type."""
        if isinstance(native, TypedValue):
            if native.type != t and t.kind in (TypeKind.OPTION, TypeKind.OPTIONAL):
                return TypedValue(t, self.convert(native, t.element))
            if native.type != t:
                raise CannotInferTypeError(f"Expected a value of type {t}, got one of type {native.type}")
            return native

        kind = t.kind

        if kind == TypeKind.NUMERICAL:
            return TypedValue(t, self._to_int(native, t))

        if kind == TypeKind.BOOLEAN:
            if not isinstance(native, bool):
                raise CannotInferTypeError(f"Cannot use {_describe(native)} as {t}")
            return TypedValue(t, native)

        if kind == TypeKind.ADDRESS:
            return TypedValue(t, self._to_address(native, t))

        if kind == TypeKind.BYTES:
            if isinstance(native, str):
                return TypedValue(t, native.encode("utf-8"))
            if isinstance(native, (bytes, bytearray, memoryview)):
                return TypedValue(t, bytes(native))
            raise CannotInferTypeError(f"Cannot use {_describe(native)} as {t}")

        if kind in (TypeKind.STRING, TypeKind.TOKEN_IDENTIFIER):
            if not isinstance(native, str):
                raise CannotInferTypeError(f"Cannot use {_describe(native)} as {t}")
            return TypedValue(t, native)

        if kind in (TypeKind.OPTION, TypeKind.OPTIONAL):
            if native is None:
                return TypedValue(t, None)
            return TypedValue(t, self.convert(native, t.element))

        if kind == TypeKind.LIST:
            items = self._to_sequence(native, t)
            return TypedValue(t, tuple(self.convert(item, t.element) for item in items))

        if kind == TypeKind.ARRAY:
            items = self._to_sequence(native, t)
            if len(items) != t.size:
                raise InvalidArgumentError(f"{t} expects exactly {t.size} item(s), got {len(items)}")
            return TypedValue(t, tuple(self.convert(item, t.element) for item in items))

        if kind in (TypeKind.TUPLE, TypeKind.COMPOSITE):
            items = self._to_sequence(native, t)
            if len(items) != len(t.params):
                raise CannotInferTypeError(
                    f"{t} expects {len(t.params)} item(s), got {len(items)}"
                )
            return TypedValue(t, tuple(self.convert(item, m) for item, m in zip(items, t.params)))

        if kind == TypeKind.VARIADIC:
            return self._to_variadic(self._to_sequence(native, t), t)

        raise CannotInferTypeError(f"Cannot infer a value of type {t}")

    @staticmethod
    def _to_int(native: Any, t: Type) -> int:
        if isinstance(native, bool):
            raise CannotInferTypeError(f"Cannot use {_describe(native)} as {t}")
        if isinstance(native, int):
            return native
        if isinstance(native, str):
            text = native.strip()
            try:
                if text.lower().startswith("0x"):
                    return int(text, 16)
                return int(text, 10)
            except ValueError:
                raise CannotInferTypeError(f"Cannot parse {native!r} as {t}") from None
        raise CannotInferTypeError(f"Cannot use {_describe(native)} as {t}")

    @staticmethod
    def _to_address(native: Any, t: Type) -> Address:
        if isinstance(native, Address):
            return native
        if isinstance(native, str):
            try:
                return Address.from_bech32(native)
            except AddressError as err:
                raise InvalidArgumentError(str(err)) from err
        if isinstance(native, (bytes, bytearray)) and len(native) == ADDRESS_LENGTH:
            return Address(bytes(native))
        raise CannotInferTypeError(f"Cannot use {_describe(native)} as {t}")

    @staticmethod
    def _to_sequence(native: Any, t: Type) -> list[Any]:
        if not isinstance(native, (list, tuple)):
            raise CannotInferTypeError(f"Expected a list or tuple for {t}, got {_describe(native)}")
        return list(native)


def native_to_typed_values(args: Sequence[Any], endpoint: EndpointDefinition) -> list[TypedValue]:
    """Convert native call arguments using the endpoint's declared input types."""
    return NativeSerializer().native_to_typed_values(args, endpoint)
