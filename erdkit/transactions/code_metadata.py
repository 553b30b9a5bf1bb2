"""Contract code metadata flags, sent along with deploy and upgrade."""

from dataclasses import dataclass

from ..errors import CodecError

# First byte
_UPGRADEABLE = 0x01
_READABLE = 0x04
# Second byte
_PAYABLE = 0x02
_PAYABLE_BY_CONTRACT = 0x04

CODE_METADATA_LENGTH = 2


@dataclass(frozen=True)
class CodeMetadata:
    upgradeable: bool = True
    readable: bool = True
    payable: bool = False
    payable_by_contract: bool = True

    @classmethod
    def from_bytes(cls, data: bytes) -> "CodeMetadata":
        if len(data) != CODE_METADATA_LENGTH:
            raise CodecError(f"Code metadata must be {CODE_METADATA_LENGTH} bytes, got {len(data)}")
        return cls(
            upgradeable=bool(data[0] & _UPGRADEABLE),
            readable=bool(data[0] & _READABLE),
            payable=bool(data[1] & _PAYABLE),
            payable_by_contract=bool(data[1] & _PAYABLE_BY_CONTRACT),
        )

    def to_bytes(self) -> bytes:
        first = (_UPGRADEABLE if self.upgradeable else 0) | (_READABLE if self.readable else 0)
        second = (_PAYABLE if self.payable else 0) | (
            _PAYABLE_BY_CONTRACT if self.payable_by_contract else 0
        )
        return bytes([first, second])

    def to_hex(self) -> str:
        return self.to_bytes().hex()
