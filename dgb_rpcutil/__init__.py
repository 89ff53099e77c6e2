"""DigiByte RPC utility helpers: key resolution, multisig scripts, and help text."""

from .argspec import ArgSpec, ArgType, CommandSpec
from .describe import describe
from .errors import (
    ClientInputError,
    CorruptedKeyStore,
    ErrorCategory,
    ErrorKind,
    HashUnavailable,
    InsufficientKeys,
    InternalError,
    InvalidAddress,
    InvalidKey,
    InvalidKeyEncoding,
    InvalidThreshold,
    NoFullKeyAvailable,
    NoKeyForDestination,
    RPCUtilError,
    SchemaInvariantViolation,
    ScriptTooLarge,
    TooManyKeys,
    UnsupportedSchemaShape,
)
from .help import render_arguments, render_help, render_signature, render_structure, render_token
from .key_resolver import key_from_address, key_from_hex
from .keys import (
    KeyHashDestination,
    KeyId,
    NoDestination,
    PublicKey,
    ScriptHashDestination,
    ScriptId,
)
from .script import MAX_SCRIPT_ELEMENT_SIZE, RedeemScript, build_multisig

__all__ = [
    "ArgSpec",
    "ArgType",
    "CommandSpec",
    "describe",
    "ClientInputError",
    "CorruptedKeyStore",
    "ErrorCategory",
    "ErrorKind",
    "HashUnavailable",
    "InsufficientKeys",
    "InternalError",
    "InvalidAddress",
    "InvalidKey",
    "InvalidKeyEncoding",
    "InvalidThreshold",
    "NoFullKeyAvailable",
    "NoKeyForDestination",
    "RPCUtilError",
    "SchemaInvariantViolation",
    "ScriptTooLarge",
    "TooManyKeys",
    "UnsupportedSchemaShape",
    "render_arguments",
    "render_help",
    "render_signature",
    "render_structure",
    "render_token",
    "key_from_address",
    "key_from_hex",
    "KeyHashDestination",
    "KeyId",
    "NoDestination",
    "PublicKey",
    "ScriptHashDestination",
    "ScriptId",
    "MAX_SCRIPT_ELEMENT_SIZE",
    "RedeemScript",
    "build_multisig",
]
