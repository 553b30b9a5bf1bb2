"""Token transfers and the data parts of the built-in transfer functions."""

from collections.abc import Sequence
from dataclasses import dataclass

from ..address import Address
from ..codec.serializer import ArgSerializer
from ..codec.values import address, big_uint, token_identifier, u32, u64
from ..constants import (
    ESDT_TRANSFER_FUNCTION_NAME,
    ESDTNFT_TRANSFER_FUNCTION_NAME,
    MULTI_ESDTNFT_TRANSFER_FUNCTION_NAME,
)


@dataclass(frozen=True)
class Token:
    """A token; nonce 0 denotes a fungible token."""

    identifier: str
    nonce: int = 0


@dataclass(frozen=True)
class TokenTransfer:
    token: Token
    amount: int


class TokenComputer:
    def is_fungible(self, token: Token) -> bool:
        return token.nonce == 0


class TokenTransfersDataBuilder:
    """Build the leading data parts of token transfer calls."""

    def __init__(self, serializer: ArgSerializer | None = None) -> None:
        self._serializer = serializer or ArgSerializer()

    def build_args_for_esdt_transfer(self, transfer: TokenTransfer) -> list[str]:
        return [ESDT_TRANSFER_FUNCTION_NAME] + self._serializer.values_to_strings(
            [token_identifier(transfer.token.identifier), big_uint(transfer.amount)]
        )

    def build_args_for_single_esdt_nft_transfer(
        self, transfer: TokenTransfer, receiver: Address
    ) -> list[str]:
        return [ESDTNFT_TRANSFER_FUNCTION_NAME] + self._serializer.values_to_strings(
            [
                token_identifier(transfer.token.identifier),
                u64(transfer.token.nonce),
                big_uint(transfer.amount),
                address(receiver),
            ]
        )

    def build_args_for_multi_esdt_nft_transfer(
        self, receiver: Address, transfers: Sequence[TokenTransfer]
    ) -> list[str]:
        values = [address(receiver), u32(len(transfers))]
        for transfer in transfers:
            values.extend(
                [
                    token_identifier(transfer.token.identifier),
                    u64(transfer.token.nonce),
                    big_uint(transfer.amount),
                ]
            )
        return [MULTI_ESDTNFT_TRANSFER_FUNCTION_NAME] + self._serializer.values_to_strings(values)
