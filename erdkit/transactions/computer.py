"""Fee computation and signing payloads for transactions."""

import base64
import json
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol

from ..address import Address
from ..constants import (
    MIN_TRANSACTION_VERSION_THAT_SUPPORTS_OPTIONS,
    TRANSACTION_OPTIONS_TX_GUARDED,
    TRANSACTION_OPTIONS_TX_HASH_SIGN,
)
from ..errors import BadUsageError, NotEnoughGasError
from .config import NetworkConfig
from .transaction import Transaction


class Signer(Protocol):
    """Anything able to sign a byte buffer (key handling lives elsewhere)."""

    def sign(self, data: bytes) -> bytes: ...


def _to_base64_or_none(value: str | bytes) -> str | None:
    if not value:
        return None
    raw = value.encode("utf-8") if isinstance(value, str) else value
    return base64.b64encode(raw).decode("ascii")


class TransactionComputer:
    """Helpers working on Transaction objects."""

    def compute_transaction_fee(self, transaction: Transaction, network_config: NetworkConfig) -> int:
        move_balance_gas = (
            network_config.min_gas_limit + len(transaction.data) * network_config.gas_per_data_byte
        )
        if move_balance_gas > transaction.gas_limit:
            raise NotEnoughGasError(transaction.gas_limit)

        fee_for_move = move_balance_gas * transaction.gas_price
        if move_balance_gas == transaction.gas_limit:
            return fee_for_move

        diff = transaction.gas_limit - move_balance_gas
        modified_gas_price = int(
            (Decimal(transaction.gas_price) * Decimal(network_config.gas_price_modifier)).quantize(
                Decimal(1), rounding=ROUND_HALF_UP
            )
        )
        return fee_for_move + diff * modified_gas_price

    def compute_bytes_for_signing(self, transaction: Transaction) -> bytes:
        self._ensure_valid_transaction_fields(transaction)
        serialized = json.dumps(self._to_plain_object(transaction), separators=(",", ":"))
        return serialized.encode("utf-8")

    def apply_signature(self, transaction: Transaction, signer: Signer) -> None:
        transaction.signature = signer.sign(self.compute_bytes_for_signing(transaction))

    def has_options_set_for_guarded_transaction(self, transaction: Transaction) -> bool:
        return (transaction.options & TRANSACTION_OPTIONS_TX_GUARDED) == TRANSACTION_OPTIONS_TX_GUARDED

    def has_options_set_for_hash_signing(self, transaction: Transaction) -> bool:
        return (transaction.options & TRANSACTION_OPTIONS_TX_HASH_SIGN) == TRANSACTION_OPTIONS_TX_HASH_SIGN

    def apply_guardian(self, transaction: Transaction, guardian: Address) -> None:
        if transaction.version < MIN_TRANSACTION_VERSION_THAT_SUPPORTS_OPTIONS:
            transaction.version = MIN_TRANSACTION_VERSION_THAT_SUPPORTS_OPTIONS

        transaction.options |= TRANSACTION_OPTIONS_TX_GUARDED
        transaction.guardian = guardian

    def _to_plain_object(self, transaction: Transaction) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "nonce": transaction.nonce,
            "value": str(transaction.value),
            "receiver": transaction.receiver.to_bech32(),
            "sender": transaction.sender.to_bech32(),
            "senderUsername": _to_base64_or_none(transaction.sender_username),
            "receiverUsername": _to_base64_or_none(transaction.receiver_username),
            "gasPrice": transaction.gas_price,
            "gasLimit": transaction.gas_limit,
            "data": _to_base64_or_none(transaction.data),
            "chainID": transaction.chain_id,
            "version": transaction.version,
            "options": transaction.options or None,
            "guardian": transaction.guardian.to_bech32() if transaction.guardian else None,
        }
        # Absent fields are left out entirely
        return {key: value for key, value in obj.items() if value is not None}

    def _ensure_valid_transaction_fields(self, transaction: Transaction) -> None:
        if not transaction.chain_id:
            raise BadUsageError("The `chain_id` field is not set")

        if transaction.version < MIN_TRANSACTION_VERSION_THAT_SUPPORTS_OPTIONS:
            if self.has_options_set_for_guarded_transaction(
                transaction
            ) or self.has_options_set_for_hash_signing(transaction):
                raise BadUsageError(
                    "Non-empty transaction options requires transaction version >= "
                    f"{MIN_TRANSACTION_VERSION_THAT_SUPPORTS_OPTIONS}"
                )
