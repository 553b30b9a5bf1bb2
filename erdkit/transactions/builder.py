"""Assembly of a transaction from data parts."""

import logging
from collections.abc import Sequence

from ..address import Address
from ..constants import ARGUMENTS_SEPARATOR
from .config import TransactionsFactoryConfig
from .transaction import Transaction

logger = logging.getLogger(__name__)


class TransactionBuilder:
    """Join data parts into a payload and compute the final gas limit."""

    def __init__(
        self,
        *,
        config: TransactionsFactoryConfig,
        sender: Address,
        receiver: Address,
        data_parts: Sequence[str],
        gas_limit: int,
        add_data_movement_gas: bool,
        amount: int = 0,
    ) -> None:
        self._config = config
        self._sender = sender
        self._receiver = receiver
        self._data_parts = list(data_parts)
        self._gas_limit = gas_limit
        self._add_data_movement_gas = add_data_movement_gas
        self._amount = amount

    def _compute_gas_limit(self, payload: bytes) -> int:
        if not self._add_data_movement_gas:
            return self._gas_limit

        data_movement_gas = self._config.min_gas_limit + self._config.gas_limit_per_byte * len(payload)
        return data_movement_gas + self._gas_limit

    def build(self) -> Transaction:
        payload = ARGUMENTS_SEPARATOR.join(self._data_parts).encode("utf-8")
        gas_limit = self._compute_gas_limit(payload)

        logger.debug(
            "Built transaction to %s: %d data byte(s), gas limit %d",
            self._receiver,
            len(payload),
            gas_limit,
        )
        return Transaction(
            sender=self._sender,
            receiver=self._receiver,
            gas_limit=gas_limit,
            chain_id=self._config.chain_id,
            value=self._amount,
            gas_price=self._config.gas_price,
            data=payload,
        )
