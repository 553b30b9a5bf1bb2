"""Tests for delegation contract transactions"""

import pytest

from erdkit.address import Address
from erdkit.constants import DELEGATION_MANAGER_SC_ADDRESS_HEX
from erdkit.errors import BadUsageError
from erdkit.transactions import DelegationTransactionsFactory, TransactionsFactoryConfig

ALICE = Address.from_bech32("erd1qyu5wthldzr8wx5c9ucg8kjagg0jfs53s8nr3zpz3hypefsdd8ssycr6th")
DELEGATION_CONTRACT = Address.from_hex("000000000000000000010000000000000000000000000000000000000011ffff")

config = TransactionsFactoryConfig(chain_id="D")
factory = DelegationTransactionsFactory(config=config)


def data_movement_gas(tx):
    return config.min_gas_limit + config.gas_limit_per_byte * len(tx.data)


def describe_new_delegation_contract():
    def calls_the_delegation_manager(expect):
        tx = factory.create_transaction_for_new_delegation_contract(
            sender=ALICE, total_delegation_cap=5000, service_fee=10, amount=1250 * 10**18
        )
        expect(tx.data) == b"createNewDelegationContract@1388@0a"
        expect(tx.sender) == ALICE
        expect(tx.receiver.to_hex()) == DELEGATION_MANAGER_SC_ADDRESS_HEX
        expect(tx.value) == 1250 * 10**18
        expect(tx.chain_id) == "D"
        expect(tx.gas_limit) == 60_102_500

    def pads_numbers_to_whole_bytes(expect):
        tx = factory.create_transaction_for_new_delegation_contract(
            sender=ALICE, total_delegation_cap=0, service_fee=0x123, amount=0
        )
        expect(tx.data) == b"createNewDelegationContract@00@0123"

    def rejects_negative_amounts():
        with pytest.raises(BadUsageError):
            factory.create_transaction_for_new_delegation_contract(
                sender=ALICE, total_delegation_cap=-1, service_fee=0, amount=0
            )


def describe_nodes():
    def adds_keys_with_their_signatures(expect):
        tx = factory.create_transaction_for_adding_nodes(
            sender=ALICE,
            delegation_contract=DELEGATION_CONTRACT,
            public_keys=[b"\xab\xab"],
            signed_messages=[b"\x01\x02"],
        )
        expect(tx.data) == b"addNodes@abab@0102"
        expect(tx.receiver) == DELEGATION_CONTRACT
        expect(tx.gas_limit) == 7_077_000

    def rejects_unsigned_keys():
        with pytest.raises(BadUsageError):
            factory.create_transaction_for_adding_nodes(
                sender=ALICE,
                delegation_contract=DELEGATION_CONTRACT,
                public_keys=[b"\xaa", b"\xbb"],
                signed_messages=[b"\x01"],
            )

    def charges_gas_per_staked_node(expect):
        tx = factory.create_transaction_for_staking_nodes(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, public_keys=[b"\xaa", b"\xbb"]
        )
        expect(tx.data) == b"stakeNodes@aa@bb"
        expect(tx.gas_limit) == 18_074_000

    def lists_keys_after_the_function(expect):
        keys = [b"\xaa", b"\xbb"]
        for create, function in [
            (factory.create_transaction_for_removing_nodes, b"removeNodes"),
            (factory.create_transaction_for_unbonding_nodes, b"unBondNodes"),
            (factory.create_transaction_for_unstaking_nodes, b"unStakeNodes"),
            (factory.create_transaction_for_unjailing_nodes, b"unJailNodes"),
        ]:
            tx = create(sender=ALICE, delegation_contract=DELEGATION_CONTRACT, public_keys=keys)
            expect(tx.data) == function + b"@aa@bb"

    def adds_unbond_and_unstake_gas(expect):
        keys = [b"\xaa"]
        unbond = factory.create_transaction_for_unbonding_nodes(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, public_keys=keys
        )
        unstake = factory.create_transaction_for_unstaking_nodes(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, public_keys=keys
        )
        expect(unbond.gas_limit) == 12_000_000 + data_movement_gas(unbond)
        expect(unstake.gas_limit) == 12_000_000 + data_movement_gas(unstake)


def describe_settings():
    def changes_service_fee(expect):
        tx = factory.create_transaction_for_changing_service_fee(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, service_fee=10
        )
        expect(tx.data) == b"changeServiceFee@0a"
        expect(tx.gas_limit) == 11_000_000 + data_movement_gas(tx)

    def modifies_delegation_cap(expect):
        tx = factory.create_transaction_for_modifying_delegation_cap(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, delegation_cap=5000
        )
        expect(tx.data) == b"modifyTotalDelegationCap@1388"

    def toggles_automatic_activation(expect):
        enabled = factory.create_transaction_for_setting_automatic_activation(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT
        )
        disabled = factory.create_transaction_for_setting_automatic_activation(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, enabled=False
        )
        expect(enabled.data) == b"setAutomaticActivation@74727565"
        expect(disabled.data) == b"setAutomaticActivation@66616c7365"

    def toggles_cap_check_on_redelegated_rewards(expect):
        tx = factory.create_transaction_for_setting_cap_check_on_redelegate_rewards(
            sender=ALICE, delegation_contract=DELEGATION_CONTRACT, enabled=False
        )
        expect(tx.data) == b"setCheckCapOnReDelegateRewards@66616c7365"

    def sets_metadata(expect):
        tx = factory.create_transaction_for_setting_metadata(
            sender=ALICE,
            delegation_contract=DELEGATION_CONTRACT,
            name="name",
            website="website",
            identifier="id",
        )
        expect(tx.data) == b"setMetaData@6e616d65@77656273697465@6964"
        expect(tx.value) == 0
