"""Configuration objects for transaction factories and fee computation."""

from dataclasses import dataclass
from decimal import Decimal

from ..constants import DEFAULT_GAS_LIMIT_PER_BYTE, DEFAULT_MIN_GAS_LIMIT, TRANSACTION_MIN_GAS_PRICE


@dataclass(frozen=True)
class TransactionsFactoryConfig:
    """Settings shared by the transaction factories.

    The ``gas_limit_*`` fields are execution gas limits of the system
    functions; data movement gas is added on top where it applies.
    """

    chain_id: str
    min_gas_limit: int = DEFAULT_MIN_GAS_LIMIT
    gas_limit_per_byte: int = DEFAULT_GAS_LIMIT_PER_BYTE
    gas_price: int = TRANSACTION_MIN_GAS_PRICE

    # Token management
    gas_limit_issue: int = 60_000_000
    gas_limit_toggle_burn_role_globally: int = 60_000_000
    gas_limit_esdt_local_mint: int = 300_000
    gas_limit_esdt_local_burn: int = 300_000
    gas_limit_set_special_role: int = 60_000_000
    gas_limit_pausing: int = 60_000_000
    gas_limit_freezing: int = 60_000_000
    gas_limit_wiping: int = 60_000_000
    gas_limit_esdt_nft_create: int = 3_000_000
    gas_limit_esdt_nft_update_attributes: int = 1_000_000
    gas_limit_esdt_nft_add_quantity: int = 1_000_000
    gas_limit_esdt_nft_burn: int = 1_000_000
    gas_limit_store_per_byte: int = 10_000
    gas_limit_esdt_modify_royalties: int = 500_000
    gas_limit_esdt_modify_creator: int = 500_000
    gas_limit_esdt_metadata_update: int = 500_000
    gas_limit_set_new_uris: int = 500_000
    gas_limit_nft_metadata_recreate: int = 500_000
    gas_limit_nft_change_to_dynamic: int = 500_000
    gas_limit_update_token_id: int = 500_000
    issue_cost: int = 50_000_000_000_000_000

    # Delegation
    gas_limit_stake: int = 5_000_000
    gas_limit_unstake: int = 5_000_000
    gas_limit_unbond: int = 5_000_000
    gas_limit_create_delegation_contract: int = 50_000_000
    gas_limit_delegation_operations: int = 1_000_000
    additional_gas_limit_per_validator_node: int = 6_000_000
    additional_gas_for_delegation_operations: int = 10_000_000


@dataclass(frozen=True)
class NetworkConfig:
    """Network parameters needed to compute transaction fees."""

    min_gas_limit: int = DEFAULT_MIN_GAS_LIMIT
    gas_per_data_byte: int = DEFAULT_GAS_LIMIT_PER_BYTE
    gas_price_modifier: Decimal = Decimal("0.01")
