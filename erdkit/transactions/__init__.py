"""Transaction model, builders, factories, queries and outcome parsing."""

from .code_metadata import CodeMetadata as CodeMetadata
from .computer import Signer as Signer
from .computer import TransactionComputer as TransactionComputer
from .config import NetworkConfig as NetworkConfig
from .config import TransactionsFactoryConfig as TransactionsFactoryConfig
from .delegation import DelegationTransactionsFactory as DelegationTransactionsFactory
from .outcome import ParsedSmartContractCallOutcome as ParsedSmartContractCallOutcome
from .outcome import SmartContractCallOutcome as SmartContractCallOutcome
from .outcome import SmartContractTransactionsOutcomeParser as SmartContractTransactionsOutcomeParser
from .query import SmartContractQuery as SmartContractQuery
from .query import SmartContractQueryBuilder as SmartContractQueryBuilder
from .query import SmartContractQueryResponse as SmartContractQueryResponse
from .smart_contract import SmartContractTransactionsFactory as SmartContractTransactionsFactory
from .token_management import TokenManagementTransactionsFactory as TokenManagementTransactionsFactory
from .token_management import TokenType as TokenType
from .tokens import Token as Token
from .tokens import TokenComputer as TokenComputer
from .tokens import TokenTransfer as TokenTransfer
from .transaction import Transaction as Transaction
