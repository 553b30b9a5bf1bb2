"""Exception hierarchy shared by every erdkit module."""


class ErdkitError(RuntimeError):
    """Base class for all erdkit errors."""


class TypeExpressionParseError(ErdkitError):
    """Raised when a type expression is syntactically malformed."""


class TypeMappingError(ErdkitError):
    """Raised when a parsed type expression cannot be resolved."""


class TypeNotFoundError(TypeMappingError):
    """Raised when a type name is not part of the type catalogue."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown type: {name}")
        self.name = name


class InvalidTypeExpressionError(TypeMappingError):
    """Raised when a type expression has the wrong number of parameters."""


class CodecError(ErdkitError):
    """Raised when binary encoding or decoding fails."""


class SerializerError(ErdkitError):
    """Raised when arguments cannot be (de)serialized to data parts."""


class InvalidArgumentError(ErdkitError):
    """Raised when a value is out of range for its declared type."""


class CannotInferTypeError(InvalidArgumentError):
    """Raised when a native value does not match the shape of its declared type."""


class ArgumentCountError(InvalidArgumentError):
    """Raised when the number of call arguments does not match the endpoint."""

    def __init__(self, endpoint: str, expected: str, actual: int) -> None:
        super().__init__(f"{endpoint} expects {expected} argument(s), got {actual}")
        self.endpoint = endpoint
        self.actual = actual


class AddressError(ErdkitError):
    """Raised when an address cannot be decoded."""


class AbiError(ErdkitError):
    """Raised when an ABI cannot be loaded or lacks an endpoint."""


class BadUsageError(ErdkitError):
    """Raised when a builder is called with conflicting options."""


class NotEnoughGasError(ErdkitError):
    """Raised when a gas limit does not cover data movement."""

    def __init__(self, gas_limit: int) -> None:
        super().__init__(f"Not enough gas provided: {gas_limit}")
        self.gas_limit = gas_limit


class SmartContractQueryError(ErdkitError):
    """Raised when a contract query returns an error code."""

    def __init__(self, return_code: str, message: str) -> None:
        super().__init__(f"Query failed with {return_code}: {message}")
        self.return_code = return_code
        self.message = message
