"""Error taxonomy shared by the RPC utility helpers.

Every failure raised by the key, script, and help helpers carries an
:class:`ErrorKind` plus the category a JSON-RPC server should report it under.
Client errors describe bad caller input; internal errors describe a corrupted
wallet or a command that declared its own argument schema incorrectly and must
never be presented as the caller's fault.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any


class RPCErrorCode(IntEnum):
    """JSON-RPC error codes used by DigiByte Core for these conditions."""

    INVALID_ADDRESS_OR_KEY = -5
    INVALID_PARAMETER = -8
    WALLET_NOT_FOUND = -18
    INTERNAL_ERROR = -32603


class ErrorCategory(str, Enum):
    CLIENT = "client"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    INVALID_KEY_ENCODING = "InvalidKeyEncoding"
    INVALID_KEY = "InvalidKey"
    INVALID_ADDRESS = "InvalidAddress"
    NO_KEY_FOR_DESTINATION = "NoKeyForDestination"
    NO_FULL_KEY_AVAILABLE = "NoFullKeyAvailable"
    WALLET_UNAVAILABLE = "WalletUnavailable"
    CORRUPTED_KEY_STORE = "CorruptedKeyStore"
    INVALID_THRESHOLD = "InvalidThreshold"
    INSUFFICIENT_KEYS = "InsufficientKeys"
    TOO_MANY_KEYS = "TooManyKeys"
    SCRIPT_TOO_LARGE = "ScriptTooLarge"
    SCHEMA_INVARIANT_VIOLATION = "SchemaInvariantViolation"
    UNSUPPORTED_SCHEMA_SHAPE = "UnsupportedSchemaShape"
    HASH_UNAVAILABLE = "HashUnavailable"


class RPCUtilError(RuntimeError):
    """Base class for errors raised by the RPC utility helpers."""

    kind: ErrorKind
    category: ErrorCategory
    code: RPCErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def is_client_error(self) -> bool:
        return self.category is ErrorCategory.CLIENT

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-RPC ``error`` object for this failure."""

        return {"code": int(self.code), "message": self.message}


class ClientInputError(RPCUtilError):
    """Raised when caller-supplied input cannot be used."""

    category = ErrorCategory.CLIENT
    code = RPCErrorCode.INVALID_ADDRESS_OR_KEY


class InternalError(RPCUtilError):
    """Raised for conditions the caller did not cause."""

    category = ErrorCategory.INTERNAL
    code = RPCErrorCode.INTERNAL_ERROR


class InvalidKeyEncoding(ClientInputError):
    kind = ErrorKind.INVALID_KEY_ENCODING


class InvalidKey(ClientInputError):
    kind = ErrorKind.INVALID_KEY


class InvalidAddress(ClientInputError):
    kind = ErrorKind.INVALID_ADDRESS


class NoKeyForDestination(ClientInputError):
    kind = ErrorKind.NO_KEY_FOR_DESTINATION


class NoFullKeyAvailable(ClientInputError):
    kind = ErrorKind.NO_FULL_KEY_AVAILABLE


class WalletUnavailable(ClientInputError):
    """Raised when a command needs a wallet but none is configured."""

    kind = ErrorKind.WALLET_UNAVAILABLE
    code = RPCErrorCode.WALLET_NOT_FOUND


class CorruptedKeyStore(InternalError):
    """Raised when the keystore hands back a key that fails validation."""

    kind = ErrorKind.CORRUPTED_KEY_STORE


class MultisigParameterError(ClientInputError):
    code = RPCErrorCode.INVALID_PARAMETER


class InvalidThreshold(MultisigParameterError):
    kind = ErrorKind.INVALID_THRESHOLD


class InsufficientKeys(MultisigParameterError):
    kind = ErrorKind.INSUFFICIENT_KEYS

    def __init__(self, key_count: int, required: int) -> None:
        super().__init__(
            f"not enough keys supplied (got {key_count} keys, "
            f"but need at least {required} to redeem)"
        )
        self.key_count = key_count
        self.required = required


class TooManyKeys(MultisigParameterError):
    kind = ErrorKind.TOO_MANY_KEYS

    def __init__(self, key_count: int, limit: int) -> None:
        super().__init__(
            f"Number of keys involved in the multisignature address creation > {limit}\n"
            "Reduce the number"
        )
        self.key_count = key_count
        self.limit = limit


class ScriptTooLarge(MultisigParameterError):
    kind = ErrorKind.SCRIPT_TOO_LARGE

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"redeemScript exceeds size limit: {size} > {limit}")
        self.size = size
        self.limit = limit


class SchemaInvariantViolation(InternalError):
    """Raised when a command declares an impossible argument schema."""

    kind = ErrorKind.SCHEMA_INVARIANT_VIOLATION


class UnsupportedSchemaShape(InternalError):
    """Raised for argument shapes the help renderer cannot express."""

    kind = ErrorKind.UNSUPPORTED_SCHEMA_SHAPE


class HashUnavailable(InternalError):
    """Raised when the interpreter's hashlib lacks an algorithm addresses need."""

    kind = ErrorKind.HASH_UNAVAILABLE
