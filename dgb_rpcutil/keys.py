"""Key material and destination types.

``PublicKey`` instances only exist in a fully valid state: the bytes are a
compressed (33 byte) or uncompressed (65 byte) SEC1 encoding of a point on
secp256k1. Destinations form a closed union of three cases; consumers dispatch
on them with ``isinstance`` and treat anything else as a programming error.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives.asymmetric import ec

from .errors import HashUnavailable

COMPRESSED_PUBKEY_SIZE = 33
UNCOMPRESSED_PUBKEY_SIZE = 65
HASH160_SIZE = 20

_COMPRESSED_PREFIXES = (0x02, 0x03)
_UNCOMPRESSED_PREFIX = 0x04


def hash160(data: bytes) -> bytes:
    """Return RIPEMD160(SHA256(data))."""

    try:
        ripemd = hashlib.new("ripemd160")
    except ValueError as exc:
        raise HashUnavailable(
            "ripemd160 is not available in this Python build; enable the OpenSSL legacy provider"
        ) from exc
    ripemd.update(hashlib.sha256(data).digest())
    return ripemd.digest()


def is_fully_valid_pubkey(data: bytes) -> bool:
    """Return ``True`` when *data* encodes a point on secp256k1."""

    if len(data) == COMPRESSED_PUBKEY_SIZE:
        if data[0] not in _COMPRESSED_PREFIXES:
            return False
    elif len(data) == UNCOMPRESSED_PUBKEY_SIZE:
        if data[0] != _UNCOMPRESSED_PREFIX:
            return False
    else:
        return False
    try:
        ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), data)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class KeyId:
    """Hash160 of a serialized public key."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != HASH160_SIZE:
            raise ValueError("KeyId must be 20 bytes")

    def hex(self) -> str:
        return self.value.hex()


@dataclass(frozen=True)
class ScriptId:
    """Hash160 of a serialized script."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != HASH160_SIZE:
            raise ValueError("ScriptId must be 20 bytes")

    def hex(self) -> str:
        return self.value.hex()


@dataclass(frozen=True)
class PublicKey:
    """A validated secp256k1 public key."""

    data: bytes

    def __post_init__(self) -> None:
        if not is_fully_valid_pubkey(self.data):
            raise ValueError("bytes do not encode a valid secp256k1 public key")

    @property
    def is_compressed(self) -> bool:
        return len(self.data) == COMPRESSED_PUBKEY_SIZE

    def key_id(self) -> KeyId:
        return KeyId(hash160(self.data))

    def hex(self) -> str:
        return self.data.hex()


@dataclass(frozen=True)
class NoDestination:
    """No recognizable destination."""


@dataclass(frozen=True)
class KeyHashDestination:
    key_id: KeyId


@dataclass(frozen=True)
class ScriptHashDestination:
    script_id: ScriptId


Destination = Union[NoDestination, KeyHashDestination, ScriptHashDestination]


def is_valid_destination(destination: Destination) -> bool:
    return not isinstance(destination, NoDestination)
