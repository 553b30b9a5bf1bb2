"""Wire-format and protocol constants."""

# Data parts of a transaction payload are joined with this separator.
# Hex encoding never produces it.
ARGUMENTS_SEPARATOR = "@"

# Width of the big-endian length / count header of nested variable-size values
LENGTH_HEADER_SIZE = 4

ADDRESS_LENGTH = 32
DEFAULT_ADDRESS_HRP = "erd"
CONTRACT_DEPLOY_ADDRESS = "erd1qqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqqq6gq4hu"

VM_TYPE_WASM_VM = bytes([0x05, 0x00])

TRANSACTION_MIN_GAS_PRICE = 1_000_000_000
TRANSACTION_VERSION_DEFAULT = 2
TRANSACTION_OPTIONS_DEFAULT = 0
TRANSACTION_OPTIONS_TX_HASH_SIGN = 0b0001
TRANSACTION_OPTIONS_TX_GUARDED = 0b0010
MIN_TRANSACTION_VERSION_THAT_SUPPORTS_OPTIONS = 2

DEFAULT_MIN_GAS_LIMIT = 50_000
DEFAULT_GAS_LIMIT_PER_BYTE = 1_500

ESDT_TRANSFER_FUNCTION_NAME = "ESDTTransfer"
ESDTNFT_TRANSFER_FUNCTION_NAME = "ESDTNFTTransfer"
MULTI_ESDTNFT_TRANSFER_FUNCTION_NAME = "MultiESDTNFTTransfer"
UPGRADE_CONTRACT_FUNCTION_NAME = "upgradeContract"

# System smart contracts
ESDT_CONTRACT_ADDRESS_HEX = "000000000000000000010000000000000000000000000000000000000002ffff"
DELEGATION_MANAGER_SC_ADDRESS_HEX = "000000000000000000010000000000000000000000000000000000000004ffff"
