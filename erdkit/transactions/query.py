"""Read-only contract queries and decoding of their responses."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..abi import AbiRegistry
from ..address import Address
from ..codec.native import NativeSerializer
from ..codec.serializer import ArgSerializer
from ..codec.values import TypedValue
from ..errors import BadUsageError, SmartContractQueryError
from .outcome import RETURN_CODE_OK

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmartContractQuery:
    """A call to a contract's view function, with arguments already encoded."""

    contract: Address
    function: str
    arguments: tuple[bytes, ...] = ()
    caller: Address | None = None
    value: int = 0

    def encoded_arguments(self) -> list[str]:
        return [argument.hex() for argument in self.arguments]


@dataclass(frozen=True)
class SmartContractQueryResponse:
    function: str = ""
    return_code: str = ""
    return_message: str = ""
    return_data_parts: tuple[bytes, ...] = ()


class SmartContractQueryBuilder:
    """Build contract queries and decode their responses.

    With an ABI, query arguments may be plain Python values and responses
    are decoded against the endpoint outputs. Without one, arguments must
    be TypedValues and responses are returned as raw parts.
    """

    def __init__(self, abi: AbiRegistry | None = None, serializer: ArgSerializer | None = None) -> None:
        self._abi = abi
        self._serializer = serializer or ArgSerializer()
        self._native_serializer = NativeSerializer()

    def create_query(
        self,
        *,
        contract: Address,
        function: str,
        arguments: Sequence[Any] = (),
        caller: Address | None = None,
        value: int = 0,
    ) -> SmartContractQuery:
        if self._abi:
            endpoint = self._abi.get_endpoint(function)
            typed = self._native_serializer.native_to_typed_values(arguments, endpoint)
        elif all(isinstance(arg, TypedValue) for arg in arguments):
            typed = list(arguments)
        else:
            raise BadUsageError("Can't convert args to TypedValues")

        return SmartContractQuery(
            contract=contract,
            function=function,
            arguments=tuple(self._serializer.values_to_buffers(typed)),
            caller=caller,
            value=value,
        )

    def parse_query_response(self, response: SmartContractQueryResponse) -> list[Any]:
        if response.return_code != RETURN_CODE_OK:
            raise SmartContractQueryError(response.return_code, response.return_message)

        if not self._abi:
            return list(response.return_data_parts)

        if not response.function:
            raise BadUsageError("The response does not name the queried function")

        endpoint = self._abi.get_endpoint(response.function)
        typed = self._serializer.buffers_to_values(
            list(response.return_data_parts), endpoint.output_types
        )
        logger.debug("Decoded %d output value(s) of %s", len(typed), response.function)
        return [value.to_native() for value in typed]
