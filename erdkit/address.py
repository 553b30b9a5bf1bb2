"""Account and contract addresses (32-byte public keys, bech32 encoded)."""

from dataclasses import dataclass, field

from bech32 import bech32_decode, bech32_encode, convertbits

from .constants import ADDRESS_LENGTH, DEFAULT_ADDRESS_HRP
from .errors import AddressError

# Contract addresses start with this many zero bytes
_SC_HEX_PUBKEY_PREFIX_LENGTH = 8


@dataclass(frozen=True, slots=True)
class Address:
    """A 32-byte public key together with its human-readable bech32 prefix."""

    pubkey: bytes
    hrp: str = field(default=DEFAULT_ADDRESS_HRP, compare=False)

    def __post_init__(self) -> None:
        if len(self.pubkey) != ADDRESS_LENGTH:
            raise AddressError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(self.pubkey)}")

    @classmethod
    def from_bech32(cls, value: str) -> "Address":
        hrp, data = bech32_decode(value)
        if hrp is None or data is None:
            raise AddressError(f"Invalid bech32 address: {value}")

        pubkey = convertbits(data, 5, 8, False)
        if pubkey is None:
            raise AddressError(f"Invalid bech32 payload: {value}")
        return cls(bytes(pubkey), hrp)

    @classmethod
    def from_hex(cls, value: str, hrp: str = DEFAULT_ADDRESS_HRP) -> "Address":
        try:
            return cls(bytes.fromhex(value), hrp)
        except ValueError as err:
            raise AddressError(f"Invalid hex address: {value}") from err

    @classmethod
    def zero(cls, hrp: str = DEFAULT_ADDRESS_HRP) -> "Address":
        return cls(bytes(ADDRESS_LENGTH), hrp)

    def to_bech32(self) -> str:
        words = convertbits(self.pubkey, 8, 5)
        if words is None:
            raise AddressError("Cannot convert public key to bech32 words")
        return bech32_encode(self.hrp, words)

    def to_hex(self) -> str:
        return self.pubkey.hex()

    def is_smart_contract(self) -> bool:
        return self.pubkey[:_SC_HEX_PUBKEY_PREFIX_LENGTH] == bytes(_SC_HEX_PUBKEY_PREFIX_LENGTH)

    def __str__(self) -> str:
        return self.to_bech32()
