"""Tests for contract deploy, call and upgrade transactions"""

import pytest

from erdkit.address import Address
from erdkit.codec import big_uint, u32
from erdkit.constants import CONTRACT_DEPLOY_ADDRESS
from erdkit.errors import ArgumentCountError, BadUsageError
from erdkit.transactions import (
    SmartContractTransactionsFactory,
    Token,
    TokenTransfer,
    TransactionsFactoryConfig,
)
from erdkit.transactions.builder import TransactionBuilder

ALICE = Address.from_bech32("erd1qyu5wthldzr8wx5c9ucg8kjagg0jfs53s8nr3zpz3hypefsdd8ssycr6th")
CONTRACT = Address.from_hex("00000000000000000500" + "11" * 22)
BYTECODE = b"\x00asm\x01\x00\x00\x00"

FOO_HEX = "464f4f2d366365313762"  # FOO-6ce17b
ADD_HEX = "616464"  # add

config = TransactionsFactoryConfig(chain_id="D")


def describe_execute():
    def encodes_typed_arguments_without_abi(expect):
        factory = SmartContractTransactionsFactory(config=config)
        tx = factory.create_transaction_for_execute(
            sender=ALICE, contract=CONTRACT, function="add", gas_limit=6_000_000, arguments=[u32(7)]
        )
        expect(tx.data) == b"add@07"
        expect(tx.sender) == ALICE
        expect(tx.receiver) == CONTRACT
        expect(tx.gas_limit) == 6_000_000
        expect(tx.chain_id) == "D"

    def infers_native_arguments_with_abi(expect, adder_abi):
        factory = SmartContractTransactionsFactory(config=config, abi=adder_abi)
        tx = factory.create_transaction_for_execute(
            sender=ALICE, contract=CONTRACT, function="add", gas_limit=6_000_000, arguments=[7]
        )
        expect(tx.data) == b"add@07"

    def rejects_native_arguments_without_abi():
        factory = SmartContractTransactionsFactory(config=config)
        with pytest.raises(BadUsageError):
            factory.create_transaction_for_execute(
                sender=ALICE, contract=CONTRACT, function="add", gas_limit=1, arguments=[7]
            )

    def checks_argument_count(adder_abi):
        factory = SmartContractTransactionsFactory(config=config, abi=adder_abi)
        with pytest.raises(ArgumentCountError):
            factory.create_transaction_for_execute(
                sender=ALICE, contract=CONTRACT, function="add", gas_limit=1, arguments=[1, 2]
            )

    def sets_native_amount(expect):
        factory = SmartContractTransactionsFactory(config=config)
        tx = factory.create_transaction_for_execute(
            sender=ALICE,
            contract=CONTRACT,
            function="add",
            gas_limit=6_000_000,
            native_transfer_amount=1_000_000_000_000_000_000,
        )
        expect(tx.value) == 1_000_000_000_000_000_000
        expect(tx.data) == b"add"

    def rejects_native_amount_with_token_transfers():
        factory = SmartContractTransactionsFactory(config=config)
        with pytest.raises(BadUsageError):
            factory.create_transaction_for_execute(
                sender=ALICE,
                contract=CONTRACT,
                function="add",
                gas_limit=6_000_000,
                native_transfer_amount=1,
                token_transfers=[TokenTransfer(Token("FOO-6ce17b"), 10)],
            )


def describe_token_transfers():
    def wraps_call_in_fungible_transfer(expect):
        factory = SmartContractTransactionsFactory(config=config)
        tx = factory.create_transaction_for_execute(
            sender=ALICE,
            contract=CONTRACT,
            function="add",
            gas_limit=6_000_000,
            arguments=[u32(7)],
            token_transfers=[TokenTransfer(Token("FOO-6ce17b"), 10)],
        )
        expect(tx.receiver) == CONTRACT
        expect(tx.data.decode()) == f"ESDTTransfer@{FOO_HEX}@0a@{ADD_HEX}@07"

    def sends_single_nft_to_self(expect):
        factory = SmartContractTransactionsFactory(config=config)
        tx = factory.create_transaction_for_execute(
            sender=ALICE,
            contract=CONTRACT,
            function="add",
            gas_limit=6_000_000,
            token_transfers=[TokenTransfer(Token("FOO-6ce17b", nonce=10), 1)],
        )
        expect(tx.receiver) == ALICE
        expect(tx.data.decode()) == (
            f"ESDTNFTTransfer@{FOO_HEX}@0a@01@{CONTRACT.to_hex()}@{ADD_HEX}"
        )

    def sends_multiple_transfers_to_self(expect):
        factory = SmartContractTransactionsFactory(config=config)
        tx = factory.create_transaction_for_execute(
            sender=ALICE,
            contract=CONTRACT,
            function="add",
            gas_limit=6_000_000,
            token_transfers=[
                TokenTransfer(Token("FOO-6ce17b"), 10),
                TokenTransfer(Token("FOO-6ce17b", nonce=2), 1),
            ],
        )
        expect(tx.receiver) == ALICE
        expect(tx.data.decode()) == (
            f"MultiESDTNFTTransfer@{CONTRACT.to_hex()}@02"
            f"@{FOO_HEX}@@0a"
            f"@{FOO_HEX}@02@01"
            f"@{ADD_HEX}"
        )


def describe_deploy():
    def targets_the_deploy_address(expect):
        factory = SmartContractTransactionsFactory(config=config)
        tx = factory.create_transaction_for_deploy(
            sender=ALICE, bytecode=BYTECODE, gas_limit=10_000_000, arguments=[big_uint(0)]
        )
        expect(tx.receiver.to_bech32()) == CONTRACT_DEPLOY_ADDRESS
        expect(tx.data.decode()) == f"{BYTECODE.hex()}@0500@0504@"
        expect(tx.gas_limit) == 10_000_000

    def encodes_code_metadata(expect, adder_abi):
        factory = SmartContractTransactionsFactory(config=config, abi=adder_abi)
        tx = factory.create_transaction_for_deploy(
            sender=ALICE,
            bytecode=BYTECODE,
            gas_limit=10_000_000,
            arguments=[5],
            is_upgradeable=False,
            is_payable=True,
        )
        expect(tx.data.decode()) == f"{BYTECODE.hex()}@0500@0406@05"


def describe_upgrade():
    def calls_upgrade_contract(expect, adder_abi):
        factory = SmartContractTransactionsFactory(config=config, abi=adder_abi)
        tx = factory.create_transaction_for_upgrade(
            sender=ALICE, contract=CONTRACT, bytecode=BYTECODE, gas_limit=10_000_000, arguments=[7]
        )
        expect(tx.receiver) == CONTRACT
        expect(tx.data.decode()) == f"upgradeContract@{BYTECODE.hex()}@0504@07"


def describe_transaction_builder():
    def adds_data_movement_gas(expect):
        tx = TransactionBuilder(
            config=config,
            sender=ALICE,
            receiver=CONTRACT,
            data_parts=["add", "07"],
            gas_limit=1_000_000,
            add_data_movement_gas=True,
        ).build()
        expect(tx.data) == b"add@07"
        expect(tx.gas_limit) == 50_000 + 1_500 * 6 + 1_000_000
        expect(tx.gas_price) == 1_000_000_000
