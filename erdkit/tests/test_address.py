"""Tests for bech32 addresses"""

import pytest

from erdkit.address import Address
from erdkit.constants import CONTRACT_DEPLOY_ADDRESS
from erdkit.errors import AddressError

ALICE = "erd1qyu5wthldzr8wx5c9ucg8kjagg0jfs53s8nr3zpz3hypefsdd8ssycr6th"
ALICE_HEX = "0139472eff6886771a982f3083da5d421f24c29181e63888228dc81ca60d69e1"


def describe_address():
    def decodes_bech32(expect):
        alice = Address.from_bech32(ALICE)
        expect(alice.to_hex()) == ALICE_HEX
        expect(alice.hrp) == "erd"

    def encodes_bech32(expect):
        expect(Address.from_hex(ALICE_HEX).to_bech32()) == ALICE
        expect(str(Address.from_hex(ALICE_HEX))) == ALICE

    def keeps_custom_prefix(expect):
        address = Address.from_hex(ALICE_HEX, hrp="test")
        expect(address.to_bech32().startswith("test1")) == True
        expect(Address.from_bech32(address.to_bech32())) == address

    def compares_by_public_key_only(expect):
        expect(Address.from_hex(ALICE_HEX, hrp="test")) == Address.from_hex(ALICE_HEX)
        expect(Address.from_hex(ALICE_HEX)) != Address.zero()

    def detects_contract_addresses(expect):
        expect(Address.zero().to_bech32()) == CONTRACT_DEPLOY_ADDRESS
        expect(Address.zero().is_smart_contract()) == True
        expect(Address.from_bech32(ALICE).is_smart_contract()) == False

    def rejects_invalid_bech32():
        with pytest.raises(AddressError):
            Address.from_bech32("erd1invalid")
        with pytest.raises(AddressError):
            Address.from_bech32(ALICE[:-1] + "x")

    def rejects_wrong_length():
        with pytest.raises(AddressError):
            Address(bytes(31))
        with pytest.raises(AddressError):
            Address.from_hex("0102")
        with pytest.raises(AddressError):
            Address.from_hex("not hex")
