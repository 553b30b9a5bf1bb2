"""Transaction object model."""

from dataclasses import dataclass, field

from ..address import Address
from ..constants import (
    TRANSACTION_MIN_GAS_PRICE,
    TRANSACTION_OPTIONS_DEFAULT,
    TRANSACTION_VERSION_DEFAULT,
)


@dataclass
class Transaction:
    """A transaction, as assembled by the factories and later signed."""

    sender: Address
    receiver: Address
    gas_limit: int
    chain_id: str
    nonce: int = 0
    value: int = 0
    sender_username: str = ""
    receiver_username: str = ""
    gas_price: int = TRANSACTION_MIN_GAS_PRICE
    data: bytes = b""
    version: int = TRANSACTION_VERSION_DEFAULT
    options: int = TRANSACTION_OPTIONS_DEFAULT
    guardian: Address | None = None
    signature: bytes = field(default=b"", repr=False)
    guardian_signature: bytes = field(default=b"", repr=False)
