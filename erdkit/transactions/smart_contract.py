"""Factory for contract deploy, call and upgrade transactions."""

from collections.abc import Sequence
from typing import Any

from ..abi import AbiRegistry, EndpointDefinition
from ..address import Address
from ..codec.native import NativeSerializer
from ..codec.serializer import ArgSerializer
from ..codec.values import TypedValue
from ..constants import CONTRACT_DEPLOY_ADDRESS, UPGRADE_CONTRACT_FUNCTION_NAME, VM_TYPE_WASM_VM
from ..errors import BadUsageError
from .builder import TransactionBuilder
from .code_metadata import CodeMetadata
from .config import TransactionsFactoryConfig
from .tokens import TokenComputer, TokenTransfer, TokenTransfersDataBuilder
from .transaction import Transaction


class SmartContractTransactionsFactory:
    """Create transactions to deploy, call or upgrade a smart contract.

    With an ABI, arguments may be plain Python values; they are converted
    using the endpoint's declared types. Without one, every argument must
    already be a TypedValue.
    """

    def __init__(
        self,
        *,
        config: TransactionsFactoryConfig,
        abi: AbiRegistry | None = None,
        token_computer: TokenComputer | None = None,
    ) -> None:
        self._config = config
        self._abi = abi
        self._token_computer = token_computer or TokenComputer()
        self._serializer = ArgSerializer()
        self._native_serializer = NativeSerializer()
        self._data_args_builder = TokenTransfersDataBuilder(self._serializer)

    def create_transaction_for_deploy(
        self,
        *,
        sender: Address,
        bytecode: bytes,
        gas_limit: int,
        arguments: Sequence[Any] = (),
        native_transfer_amount: int = 0,
        is_upgradeable: bool = True,
        is_readable: bool = True,
        is_payable: bool = False,
        is_payable_by_contract: bool = True,
    ) -> Transaction:
        metadata = CodeMetadata(is_upgradeable, is_readable, is_payable, is_payable_by_contract)
        endpoint = self._abi.constructor_definition if self._abi else None

        parts = [bytecode.hex(), VM_TYPE_WASM_VM.hex(), metadata.to_hex()]
        parts += self._args_to_data_parts(arguments, endpoint)

        return TransactionBuilder(
            config=self._config,
            sender=sender,
            receiver=Address.from_bech32(CONTRACT_DEPLOY_ADDRESS),
            data_parts=parts,
            gas_limit=gas_limit,
            add_data_movement_gas=False,
            amount=native_transfer_amount,
        ).build()

    def create_transaction_for_execute(
        self,
        *,
        sender: Address,
        contract: Address,
        function: str,
        gas_limit: int,
        arguments: Sequence[Any] = (),
        native_transfer_amount: int = 0,
        token_transfers: Sequence[TokenTransfer] = (),
    ) -> Transaction:
        if native_transfer_amount and token_transfers:
            raise BadUsageError("Can't send both native tokens and custom tokens (ESDT/NFT)")

        receiver = contract
        parts: list[str] = []

        if len(token_transfers) == 1:
            transfer = token_transfers[0]
            if self._token_computer.is_fungible(transfer.token):
                parts = self._data_args_builder.build_args_for_esdt_transfer(transfer)
            else:
                parts = self._data_args_builder.build_args_for_single_esdt_nft_transfer(
                    transfer, receiver
                )
                receiver = sender
        elif len(token_transfers) > 1:
            parts = self._data_args_builder.build_args_for_multi_esdt_nft_transfer(
                receiver, token_transfers
            )
            receiver = sender

        # Behind a transfer function, the called function is itself an argument
        parts.append(function.encode("utf-8").hex() if parts else function)

        endpoint = self._abi.get_endpoint(function) if self._abi else None
        parts += self._args_to_data_parts(arguments, endpoint)

        return TransactionBuilder(
            config=self._config,
            sender=sender,
            receiver=receiver,
            data_parts=parts,
            gas_limit=gas_limit,
            add_data_movement_gas=False,
            amount=native_transfer_amount,
        ).build()

    def create_transaction_for_upgrade(
        self,
        *,
        sender: Address,
        contract: Address,
        bytecode: bytes,
        gas_limit: int,
        arguments: Sequence[Any] = (),
        native_transfer_amount: int = 0,
        is_upgradeable: bool = True,
        is_readable: bool = True,
        is_payable: bool = False,
        is_payable_by_contract: bool = True,
    ) -> Transaction:
        metadata = CodeMetadata(is_upgradeable, is_readable, is_payable, is_payable_by_contract)
        endpoint = self._abi.constructor_definition if self._abi else None

        parts = [UPGRADE_CONTRACT_FUNCTION_NAME, bytecode.hex(), metadata.to_hex()]
        parts += self._args_to_data_parts(arguments, endpoint)

        return TransactionBuilder(
            config=self._config,
            sender=sender,
            receiver=contract,
            data_parts=parts,
            gas_limit=gas_limit,
            add_data_movement_gas=False,
            amount=native_transfer_amount,
        ).build()

    def _args_to_data_parts(
        self, arguments: Sequence[Any], endpoint: EndpointDefinition | None
    ) -> list[str]:
        if endpoint is not None:
            typed = self._native_serializer.native_to_typed_values(arguments, endpoint)
            return self._serializer.values_to_strings(typed)

        if all(isinstance(arg, TypedValue) for arg in arguments):
            return self._serializer.values_to_strings(arguments)
        raise BadUsageError("Can't convert args to TypedValues")
