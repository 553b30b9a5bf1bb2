"""Factory for delegation transactions: delegation contracts and their validator nodes."""

from collections.abc import Sequence

from ..address import Address
from ..codec.serializer import ArgSerializer
from ..codec.values import TypedValue, bytes_value, string
from ..constants import DELEGATION_MANAGER_SC_ADDRESS_HEX
from ..errors import BadUsageError
from .builder import TransactionBuilder
from .config import TransactionsFactoryConfig
from .transaction import Transaction


def _padded_hex(value: int) -> str:
    """Hex of a non-negative integer, left padded to an even length ("00" for zero)."""
    if value < 0:
        raise BadUsageError(f"Expected a non-negative amount, got {value}")
    digits = f"{value:x}"
    return "0" + digits if len(digits) % 2 else digits


def _bool_to_string(value: bool) -> str:
    return "true" if value else "false"


class DelegationTransactionsFactory:
    """Create transactions that manage delegation contracts.

    Every transaction pays data movement gas on top of the execution gas
    configured for its function.
    """

    def __init__(self, *, config: TransactionsFactoryConfig) -> None:
        self._config = config
        self._serializer = ArgSerializer()
        self._delegation_manager = Address.from_hex(DELEGATION_MANAGER_SC_ADDRESS_HEX)

    def create_transaction_for_new_delegation_contract(
        self, *, sender: Address, total_delegation_cap: int, service_fee: int, amount: int
    ) -> Transaction:
        parts = [
            "createNewDelegationContract",
            _padded_hex(total_delegation_cap),
            _padded_hex(service_fee),
        ]
        gas_limit = (
            self._config.gas_limit_create_delegation_contract
            + self._config.additional_gas_for_delegation_operations
        )
        return self._build(sender, self._delegation_manager, parts, gas_limit, amount)

    def create_transaction_for_adding_nodes(
        self,
        *,
        sender: Address,
        delegation_contract: Address,
        public_keys: Sequence[bytes],
        signed_messages: Sequence[bytes],
    ) -> Transaction:
        if len(public_keys) != len(signed_messages):
            raise BadUsageError("The number of public keys should match the number of signed messages")

        values: list[TypedValue] = []
        for key, message in zip(public_keys, signed_messages):
            values += [bytes_value(key), bytes_value(message)]

        parts = ["addNodes"] + self._serializer.values_to_strings(values)
        gas_limit = self._nodes_management_gas_limit(len(public_keys))
        return self._build(sender, delegation_contract, parts, gas_limit)

    def create_transaction_for_removing_nodes(
        self, *, sender: Address, delegation_contract: Address, public_keys: Sequence[bytes]
    ) -> Transaction:
        parts = self._nodes_parts("removeNodes", public_keys)
        gas_limit = self._nodes_management_gas_limit(len(public_keys))
        return self._build(sender, delegation_contract, parts, gas_limit)

    def create_transaction_for_staking_nodes(
        self, *, sender: Address, delegation_contract: Address, public_keys: Sequence[bytes]
    ) -> Transaction:
        parts = self._nodes_parts("stakeNodes", public_keys)
        gas_limit = self._nodes_management_gas_limit(len(public_keys)) + self._config.gas_limit_stake
        return self._build(sender, delegation_contract, parts, gas_limit)

    def create_transaction_for_unbonding_nodes(
        self, *, sender: Address, delegation_contract: Address, public_keys: Sequence[bytes]
    ) -> Transaction:
        parts = self._nodes_parts("unBondNodes", public_keys)
        gas_limit = self._nodes_management_gas_limit(len(public_keys)) + self._config.gas_limit_unbond
        return self._build(sender, delegation_contract, parts, gas_limit)

    def create_transaction_for_unstaking_nodes(
        self, *, sender: Address, delegation_contract: Address, public_keys: Sequence[bytes]
    ) -> Transaction:
        parts = self._nodes_parts("unStakeNodes", public_keys)
        gas_limit = self._nodes_management_gas_limit(len(public_keys)) + self._config.gas_limit_unstake
        return self._build(sender, delegation_contract, parts, gas_limit)

    def create_transaction_for_unjailing_nodes(
        self, *, sender: Address, delegation_contract: Address, public_keys: Sequence[bytes]
    ) -> Transaction:
        parts = self._nodes_parts("unJailNodes", public_keys)
        gas_limit = self._nodes_management_gas_limit(len(public_keys))
        return self._build(sender, delegation_contract, parts, gas_limit)

    def create_transaction_for_changing_service_fee(
        self, *, sender: Address, delegation_contract: Address, service_fee: int
    ) -> Transaction:
        parts = ["changeServiceFee", _padded_hex(service_fee)]
        return self._build(sender, delegation_contract, parts, self._operations_gas_limit())

    def create_transaction_for_modifying_delegation_cap(
        self, *, sender: Address, delegation_contract: Address, delegation_cap: int
    ) -> Transaction:
        parts = ["modifyTotalDelegationCap", _padded_hex(delegation_cap)]
        return self._build(sender, delegation_contract, parts, self._operations_gas_limit())

    def create_transaction_for_setting_automatic_activation(
        self, *, sender: Address, delegation_contract: Address, enabled: bool = True
    ) -> Transaction:
        parts = ["setAutomaticActivation"] + self._serializer.values_to_strings(
            [string(_bool_to_string(enabled))]
        )
        return self._build(sender, delegation_contract, parts, self._operations_gas_limit())

    def create_transaction_for_setting_cap_check_on_redelegate_rewards(
        self, *, sender: Address, delegation_contract: Address, enabled: bool = True
    ) -> Transaction:
        parts = ["setCheckCapOnReDelegateRewards"] + self._serializer.values_to_strings(
            [string(_bool_to_string(enabled))]
        )
        return self._build(sender, delegation_contract, parts, self._operations_gas_limit())

    def create_transaction_for_setting_metadata(
        self,
        *,
        sender: Address,
        delegation_contract: Address,
        name: str,
        website: str,
        identifier: str,
    ) -> Transaction:
        parts = ["setMetaData"] + self._serializer.values_to_strings(
            [string(name), string(website), string(identifier)]
        )
        return self._build(sender, delegation_contract, parts, self._operations_gas_limit())

    def _nodes_parts(self, function: str, public_keys: Sequence[bytes]) -> list[str]:
        keys = [bytes_value(key) for key in public_keys]
        return [function] + self._serializer.values_to_strings(keys)

    def _nodes_management_gas_limit(self, num_nodes: int) -> int:
        return (
            self._config.gas_limit_delegation_operations
            + self._config.additional_gas_limit_per_validator_node * num_nodes
        )

    def _operations_gas_limit(self) -> int:
        return (
            self._config.gas_limit_delegation_operations
            + self._config.additional_gas_for_delegation_operations
        )

    def _build(
        self, sender: Address, receiver: Address, parts: list[str], gas_limit: int, amount: int = 0
    ) -> Transaction:
        return TransactionBuilder(
            config=self._config,
            sender=sender,
            receiver=receiver,
            data_parts=parts,
            gas_limit=gas_limit,
            add_data_movement_gas=True,
            amount=amount,
        ).build()
