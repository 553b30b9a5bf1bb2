"""Factory for token management transactions: issuing, roles and NFT operations."""

import logging
from collections.abc import Sequence
from enum import StrEnum

from ..address import Address
from ..codec.serializer import ArgSerializer
from ..codec.values import TypedValue, address, big_uint, bytes_value, string
from ..constants import ESDT_CONTRACT_ADDRESS_HEX
from ..errors import BadUsageError
from .builder import TransactionBuilder
from .config import TransactionsFactoryConfig
from .transaction import Transaction

logger = logging.getLogger(__name__)


class TokenType(StrEnum):
    NFT = "NFT"
    SFT = "SFT"
    META = "META"
    FNG = "FNG"


def _bool_to_string(value: bool) -> str:
    return "true" if value else "false"


def _properties(flags: Sequence[tuple[str, bool]]) -> list[TypedValue]:
    """Name / "true"|"false" pairs of token properties."""
    values: list[TypedValue] = []
    for name, enabled in flags:
        values += [string(name), string(_bool_to_string(enabled))]
    return values


def _roles(user: Address, token_identifier: str, flags: Sequence[tuple[str, bool]]) -> list[TypedValue]:
    return [string(token_identifier), address(user)] + [string(role) for role, add in flags if add]


class TokenManagementTransactionsFactory:
    """Create transactions that issue tokens and manage them.

    Issuing, roles and token-wide settings are addressed to the ESDT system
    contract; operations on a sender's own balance are addressed to the sender.
    """

    def __init__(self, *, config: TransactionsFactoryConfig) -> None:
        self._config = config
        self._serializer = ArgSerializer()
        self._esdt_contract = Address.from_hex(ESDT_CONTRACT_ADDRESS_HEX)

    def create_transaction_for_issuing_fungible(
        self,
        *,
        sender: Address,
        token_name: str,
        token_ticker: str,
        initial_supply: int,
        num_decimals: int,
        can_freeze: bool = False,
        can_wipe: bool = False,
        can_pause: bool = False,
        can_change_owner: bool = False,
        can_upgrade: bool = False,
        can_add_special_roles: bool = False,
    ) -> Transaction:
        self._notify_about_burn_role_globally()

        values = [
            string(token_name),
            string(token_ticker),
            big_uint(initial_supply),
            big_uint(num_decimals),
        ] + _properties(
            [
                ("canFreeze", can_freeze),
                ("canWipe", can_wipe),
                ("canPause", can_pause),
                ("canChangeOwner", can_change_owner),
                ("canUpgrade", can_upgrade),
                ("canAddSpecialRoles", can_add_special_roles),
            ]
        )
        return self._issue(sender, "issue", values)

    def create_transaction_for_issuing_semi_fungible(
        self,
        *,
        sender: Address,
        token_name: str,
        token_ticker: str,
        can_freeze: bool = False,
        can_wipe: bool = False,
        can_pause: bool = False,
        can_transfer_nft_create_role: bool = False,
        can_change_owner: bool = False,
        can_upgrade: bool = False,
        can_add_special_roles: bool = False,
    ) -> Transaction:
        self._notify_about_burn_role_globally()

        values = [string(token_name), string(token_ticker)] + self._non_fungible_properties(
            can_freeze,
            can_wipe,
            can_pause,
            can_transfer_nft_create_role,
            can_change_owner,
            can_upgrade,
            can_add_special_roles,
        )
        return self._issue(sender, "issueSemiFungible", values)

    def create_transaction_for_issuing_non_fungible(
        self,
        *,
        sender: Address,
        token_name: str,
        token_ticker: str,
        can_freeze: bool = False,
        can_wipe: bool = False,
        can_pause: bool = False,
        can_transfer_nft_create_role: bool = False,
        can_change_owner: bool = False,
        can_upgrade: bool = False,
        can_add_special_roles: bool = False,
    ) -> Transaction:
        self._notify_about_burn_role_globally()

        values = [string(token_name), string(token_ticker)] + self._non_fungible_properties(
            can_freeze,
            can_wipe,
            can_pause,
            can_transfer_nft_create_role,
            can_change_owner,
            can_upgrade,
            can_add_special_roles,
        )
        return self._issue(sender, "issueNonFungible", values)

    def create_transaction_for_registering_meta_esdt(
        self,
        *,
        sender: Address,
        token_name: str,
        token_ticker: str,
        num_decimals: int,
        can_freeze: bool = False,
        can_wipe: bool = False,
        can_pause: bool = False,
        can_transfer_nft_create_role: bool = False,
        can_change_owner: bool = False,
        can_upgrade: bool = False,
        can_add_special_roles: bool = False,
    ) -> Transaction:
        self._notify_about_burn_role_globally()

        values = [
            string(token_name),
            string(token_ticker),
            big_uint(num_decimals),
        ] + self._non_fungible_properties(
            can_freeze,
            can_wipe,
            can_pause,
            can_transfer_nft_create_role,
            can_change_owner,
            can_upgrade,
            can_add_special_roles,
        )
        return self._issue(sender, "registerMetaESDT", values)

    def create_transaction_for_registering_and_setting_roles(
        self,
        *,
        sender: Address,
        token_name: str,
        token_ticker: str,
        token_type: TokenType,
        num_decimals: int,
    ) -> Transaction:
        self._notify_about_burn_role_globally()

        values = [
            string(token_name),
            string(token_ticker),
            string(TokenType(token_type).value),
            big_uint(num_decimals),
        ]
        return self._issue(sender, "registerAndSetAllRoles", values)

    def create_transaction_for_setting_burn_role_globally(
        self, *, sender: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            self._esdt_contract,
            "setBurnRoleGlobally",
            [string(token_identifier)],
            self._config.gas_limit_toggle_burn_role_globally,
        )

    def create_transaction_for_unsetting_burn_role_globally(
        self, *, sender: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            self._esdt_contract,
            "unsetBurnRoleGlobally",
            [string(token_identifier)],
            self._config.gas_limit_toggle_burn_role_globally,
        )

    def create_transaction_for_setting_special_role_on_fungible_token(
        self,
        *,
        sender: Address,
        user: Address,
        token_identifier: str,
        add_role_local_mint: bool = False,
        add_role_local_burn: bool = False,
        add_role_esdt_transfer_role: bool = False,
    ) -> Transaction:
        values = _roles(
            user,
            token_identifier,
            [
                ("ESDTRoleLocalMint", add_role_local_mint),
                ("ESDTRoleLocalBurn", add_role_local_burn),
                ("ESDTTransferRole", add_role_esdt_transfer_role),
            ],
        )
        return self._build(
            sender,
            self._esdt_contract,
            "setSpecialRole",
            values,
            self._config.gas_limit_set_special_role,
        )

    def create_transaction_for_setting_special_role_on_semi_fungible_token(
        self,
        *,
        sender: Address,
        user: Address,
        token_identifier: str,
        add_role_nft_create: bool = False,
        add_role_nft_burn: bool = False,
        add_role_nft_add_quantity: bool = False,
        add_role_esdt_transfer_role: bool = False,
        add_role_esdt_modify_creator: bool = False,
    ) -> Transaction:
        values = _roles(
            user,
            token_identifier,
            [
                ("ESDTRoleNFTCreate", add_role_nft_create),
                ("ESDTRoleNFTBurn", add_role_nft_burn),
                ("ESDTRoleNFTAddQuantity", add_role_nft_add_quantity),
                ("ESDTTransferRole", add_role_esdt_transfer_role),
                ("ESDTRoleModifyCreator", add_role_esdt_modify_creator),
            ],
        )
        return self._build(
            sender,
            self._esdt_contract,
            "setSpecialRole",
            values,
            self._config.gas_limit_set_special_role,
        )

    # Meta ESDTs take the same roles as semi-fungible tokens
    create_transaction_for_setting_special_role_on_meta_esdt = (
        create_transaction_for_setting_special_role_on_semi_fungible_token
    )

    def create_transaction_for_setting_special_role_on_non_fungible_token(
        self,
        *,
        sender: Address,
        user: Address,
        token_identifier: str,
        add_role_nft_create: bool = False,
        add_role_nft_burn: bool = False,
        add_role_nft_update_attributes: bool = False,
        add_role_nft_add_uri: bool = False,
        add_role_esdt_transfer_role: bool = False,
        add_role_esdt_modify_creator: bool = False,
        add_role_nft_recreate: bool = False,
        add_role_esdt_set_new_uri: bool = False,
        add_role_esdt_modify_royalties: bool = False,
    ) -> Transaction:
        values = _roles(
            user,
            token_identifier,
            [
                ("ESDTRoleNFTCreate", add_role_nft_create),
                ("ESDTRoleNFTBurn", add_role_nft_burn),
                ("ESDTRoleNFTUpdateAttributes", add_role_nft_update_attributes),
                ("ESDTRoleNFTAddURI", add_role_nft_add_uri),
                ("ESDTTransferRole", add_role_esdt_transfer_role),
                ("ESDTRoleModifyCreator", add_role_esdt_modify_creator),
                ("ESDTRoleNFTRecreate", add_role_nft_recreate),
                ("ESDTRoleSetNewURI", add_role_esdt_set_new_uri),
                ("ESDTRoleModifyRoyalties", add_role_esdt_modify_royalties),
            ],
        )
        return self._build(
            sender,
            self._esdt_contract,
            "setSpecialRole",
            values,
            self._config.gas_limit_set_special_role,
        )

    def create_transaction_for_creating_nft(
        self,
        *,
        sender: Address,
        token_identifier: str,
        initial_quantity: int,
        name: str,
        royalties: int,
        hash: str,  # pylint: disable=redefined-builtin
        attributes: bytes,
        uris: Sequence[str],
    ) -> Transaction:
        values = [
            string(token_identifier),
            big_uint(initial_quantity),
            string(name),
            big_uint(royalties),
            string(hash),
            bytes_value(attributes),
        ] + [string(uri) for uri in uris]

        # Approximation of the bytes the NFT keeps in storage
        nft_data_length = (
            len(name.encode("utf-8"))
            + len(hash.encode("utf-8"))
            + len(attributes)
            + sum(len(uri.encode("utf-8")) for uri in uris)
        )
        storage_gas_limit = self._config.gas_limit_store_per_byte * nft_data_length

        return self._build(
            sender,
            sender,
            "ESDTNFTCreate",
            values,
            self._config.gas_limit_esdt_nft_create + storage_gas_limit,
        )

    def create_transaction_for_pausing(self, *, sender: Address, token_identifier: str) -> Transaction:
        return self._build(
            sender, sender, "pause", [string(token_identifier)], self._config.gas_limit_pausing
        )

    def create_transaction_for_unpausing(self, *, sender: Address, token_identifier: str) -> Transaction:
        return self._build(
            sender, sender, "unPause", [string(token_identifier)], self._config.gas_limit_pausing
        )

    def create_transaction_for_freezing(
        self, *, sender: Address, user: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "freeze",
            [string(token_identifier), address(user)],
            self._config.gas_limit_freezing,
        )

    def create_transaction_for_unfreezing(
        self, *, sender: Address, user: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "UnFreeze",
            [string(token_identifier), address(user)],
            self._config.gas_limit_freezing,
        )

    def create_transaction_for_wiping(
        self, *, sender: Address, user: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "wipe",
            [string(token_identifier), address(user)],
            self._config.gas_limit_wiping,
        )

    def create_transaction_for_local_minting(
        self, *, sender: Address, token_identifier: str, supply_to_mint: int
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTLocalMint",
            [string(token_identifier), big_uint(supply_to_mint)],
            self._config.gas_limit_esdt_local_mint,
        )

    def create_transaction_for_local_burning(
        self, *, sender: Address, token_identifier: str, supply_to_burn: int
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTLocalBurn",
            [string(token_identifier), big_uint(supply_to_burn)],
            self._config.gas_limit_esdt_local_burn,
        )

    def create_transaction_for_updating_attributes(
        self, *, sender: Address, token_identifier: str, token_nonce: int, attributes: bytes
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTNFTUpdateAttributes",
            [string(token_identifier), big_uint(token_nonce), bytes_value(attributes)],
            self._config.gas_limit_esdt_nft_update_attributes,
        )

    def create_transaction_for_adding_quantity(
        self, *, sender: Address, token_identifier: str, token_nonce: int, quantity_to_add: int
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTNFTAddQuantity",
            [string(token_identifier), big_uint(token_nonce), big_uint(quantity_to_add)],
            self._config.gas_limit_esdt_nft_add_quantity,
        )

    def create_transaction_for_burning_quantity(
        self, *, sender: Address, token_identifier: str, token_nonce: int, quantity_to_burn: int
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTNFTBurn",
            [string(token_identifier), big_uint(token_nonce), big_uint(quantity_to_burn)],
            self._config.gas_limit_esdt_nft_burn,
        )

    def create_transaction_for_modifying_royalties(
        self, *, sender: Address, token_identifier: str, token_nonce: int, new_royalties: int
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTModifyRoyalties",
            [string(token_identifier), big_uint(token_nonce), big_uint(new_royalties)],
            self._config.gas_limit_esdt_modify_royalties,
        )

    def create_transaction_for_setting_new_uris(
        self, *, sender: Address, token_identifier: str, token_nonce: int, new_uris: Sequence[str]
    ) -> Transaction:
        if not new_uris:
            raise BadUsageError("No URIs provided")

        values = [string(token_identifier), big_uint(token_nonce)] + [string(uri) for uri in new_uris]
        return self._build(
            sender, sender, "ESDTSetNewURIs", values, self._config.gas_limit_set_new_uris
        )

    def create_transaction_for_modifying_creator(
        self, *, sender: Address, token_identifier: str, token_nonce: int
    ) -> Transaction:
        return self._build(
            sender,
            sender,
            "ESDTModifyCreator",
            [string(token_identifier), big_uint(token_nonce)],
            self._config.gas_limit_esdt_modify_creator,
        )

    def create_transaction_for_updating_metadata(
        self,
        *,
        sender: Address,
        token_identifier: str,
        token_nonce: int,
        new_token_name: str | None = None,
        new_royalties: int | None = None,
        new_hash: str | None = None,
        new_attributes: bytes | None = None,
        new_uris: Sequence[str] | None = None,
    ) -> Transaction:
        values = self._metadata_values(
            token_identifier,
            token_nonce,
            new_token_name,
            new_royalties,
            new_hash,
            new_attributes,
            new_uris,
        )
        return self._build(
            sender, sender, "ESDTMetaDataUpdate", values, self._config.gas_limit_esdt_metadata_update
        )

    def create_transaction_for_recreating_metadata(
        self,
        *,
        sender: Address,
        token_identifier: str,
        token_nonce: int,
        new_token_name: str | None = None,
        new_royalties: int | None = None,
        new_hash: str | None = None,
        new_attributes: bytes | None = None,
        new_uris: Sequence[str] | None = None,
    ) -> Transaction:
        values = self._metadata_values(
            token_identifier,
            token_nonce,
            new_token_name,
            new_royalties,
            new_hash,
            new_attributes,
            new_uris,
        )
        return self._build(
            sender, sender, "ESDTMetaDataRecreate", values, self._config.gas_limit_nft_metadata_recreate
        )

    def create_transaction_for_changing_token_to_dynamic(
        self, *, sender: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            self._esdt_contract,
            "changeToDynamic",
            [string(token_identifier)],
            self._config.gas_limit_nft_change_to_dynamic,
        )

    def create_transaction_for_updating_token_id(
        self, *, sender: Address, token_identifier: str
    ) -> Transaction:
        return self._build(
            sender,
            self._esdt_contract,
            "updateTokenID",
            [string(token_identifier)],
            self._config.gas_limit_update_token_id,
        )

    @staticmethod
    def _non_fungible_properties(
        can_freeze: bool,
        can_wipe: bool,
        can_pause: bool,
        can_transfer_nft_create_role: bool,
        can_change_owner: bool,
        can_upgrade: bool,
        can_add_special_roles: bool,
    ) -> list[TypedValue]:
        return _properties(
            [
                ("canFreeze", can_freeze),
                ("canWipe", can_wipe),
                ("canPause", can_pause),
                ("canTransferNFTCreateRole", can_transfer_nft_create_role),
                ("canChangeOwner", can_change_owner),
                ("canUpgrade", can_upgrade),
                ("canAddSpecialRoles", can_add_special_roles),
            ]
        )

    @staticmethod
    def _metadata_values(
        token_identifier: str,
        token_nonce: int,
        new_token_name: str | None,
        new_royalties: int | None,
        new_hash: str | None,
        new_attributes: bytes | None,
        new_uris: Sequence[str] | None,
    ) -> list[TypedValue]:
        # Only the fields being changed are sent
        values = [string(token_identifier), big_uint(token_nonce)]
        if new_token_name:
            values.append(string(new_token_name))
        if new_royalties:
            values.append(big_uint(new_royalties))
        if new_hash:
            values.append(string(new_hash))
        if new_attributes:
            values.append(bytes_value(new_attributes))
        if new_uris:
            values += [string(uri) for uri in new_uris]
        return values

    def _notify_about_burn_role_globally(self) -> None:
        logger.info(
            'Issuing a new token sets the "ESDTRoleBurnForAll" role globally; '
            'unset it with "unsetBurnRoleGlobally" in a separate transaction'
        )

    def _issue(self, sender: Address, function: str, values: list[TypedValue]) -> Transaction:
        return self._build(
            sender,
            self._esdt_contract,
            function,
            values,
            self._config.gas_limit_issue,
            amount=self._config.issue_cost,
        )

    def _build(
        self,
        sender: Address,
        receiver: Address,
        function: str,
        values: list[TypedValue],
        gas_limit: int,
        amount: int = 0,
    ) -> Transaction:
        return TransactionBuilder(
            config=self._config,
            sender=sender,
            receiver=receiver,
            data_parts=[function] + self._serializer.values_to_strings(values),
            gas_limit=gas_limit,
            add_data_movement_gas=True,
            amount=amount,
        ).build()
