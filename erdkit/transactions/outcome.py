"""Parsing of contract call outcomes, as reported by the network."""

import logging
from dataclasses import dataclass
from typing import Any

from ..abi import AbiRegistry
from ..codec.serializer import ArgSerializer
from ..codec.values import TypedValue
from ..errors import BadUsageError

logger = logging.getLogger(__name__)

RETURN_CODE_OK = "ok"


@dataclass(frozen=True)
class SmartContractCallOutcome:
    """Direct outcome of a contract call, already extracted from a network response."""

    function: str = ""
    return_data_parts: tuple[bytes, ...] = ()
    return_code: str = ""
    return_message: str = ""


@dataclass(frozen=True)
class ParsedSmartContractCallOutcome:
    values: list[Any]
    values_typed: list[TypedValue] | None
    return_code: str
    return_message: str


class SmartContractTransactionsOutcomeParser:
    """Decode the return data of contract calls against the endpoint outputs."""

    def __init__(self, abi: AbiRegistry | None = None, serializer: ArgSerializer | None = None) -> None:
        self._abi = abi
        self._serializer = serializer or ArgSerializer()

    def parse_execute(
        self, outcome: SmartContractCallOutcome, function: str | None = None
    ) -> ParsedSmartContractCallOutcome:
        if not self._abi:
            return ParsedSmartContractCallOutcome(
                values=list(outcome.return_data_parts),
                values_typed=None,
                return_code=outcome.return_code,
                return_message=outcome.return_message,
            )

        function_name = function or outcome.function
        if not function_name:
            raise BadUsageError(
                "Function name is not available in the transaction outcome, thus the endpoint "
                "definition cannot be picked. Maybe provide the function explicitly?"
            )

        endpoint = self._abi.get_endpoint(function_name)

        typed: list[TypedValue] = []
        if outcome.return_code == RETURN_CODE_OK:
            typed = self._serializer.buffers_to_values(
                list(outcome.return_data_parts), endpoint.output_types
            )
        else:
            logger.debug(
                "Call to %s failed with %r, skipping output decoding",
                function_name,
                outcome.return_code,
            )

        return ParsedSmartContractCallOutcome(
            values=[value.to_native() for value in typed],
            values_typed=typed,
            return_code=outcome.return_code,
            return_message=outcome.return_message,
        )
