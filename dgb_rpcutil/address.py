"""Base58Check address decoding for DigiByte networks.

Only the decode direction is needed to resolve addresses into destinations;
``encode_destination`` exists so that keystores backed by a node wallet can
hand a key id back to the node in address form.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from .errors import InvalidAddress
from .keys import (
    HASH160_SIZE,
    Destination,
    KeyHashDestination,
    KeyId,
    NoDestination,
    ScriptHashDestination,
    ScriptId,
)

logger = logging.getLogger(__name__)

b58_digits = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_CHECKSUM_SIZE = 4


@dataclass(frozen=True)
class NetworkParams:
    """Version bytes that distinguish address types on a network."""

    name: str
    pubkey_address_prefix: int
    script_address_prefixes: tuple[int, ...]

    @property
    def script_address_prefix(self) -> int:
        return self.script_address_prefixes[0]


MAINNET = NetworkParams("main", pubkey_address_prefix=30, script_address_prefixes=(63, 5))
TESTNET = NetworkParams("test", pubkey_address_prefix=126, script_address_prefixes=(140,))
REGTEST = NetworkParams("regtest", pubkey_address_prefix=126, script_address_prefixes=(140,))

NETWORKS = {params.name: params for params in (MAINNET, TESTNET, REGTEST)}


def get_network(name: str) -> NetworkParams:
    try:
        return NETWORKS[name]
    except KeyError as exc:
        raise ValueError(
            f"Unknown network {name!r}; expected one of {', '.join(sorted(NETWORKS))}"
        ) from exc


def _double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def base58_encode(data: bytes) -> str:
    value = int.from_bytes(data, "big")
    output: list[str] = []
    while value > 0:
        value, remainder = divmod(value, 58)
        output.append(b58_digits[remainder])
    leading_zero_count = len(data) - len(data.lstrip(b"\x00"))
    return b58_digits[0] * leading_zero_count + "".join(reversed(output))


def base58_decode(text: str) -> bytes:
    """Decode a Base58 string, keeping leading zero bytes."""

    number = 0
    for character in text:
        index = b58_digits.find(character)
        if index == -1:
            raise ValueError(f"Invalid Base58 character: {character}")
        number = number * 58 + index
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    padding = len(text) - len(text.lstrip(b58_digits[0]))
    return b"\x00" * padding + body


def base58_check_encode(payload: bytes, version: int) -> str:
    data = bytes([version]) + payload
    return base58_encode(data + _double_sha256(data)[:_CHECKSUM_SIZE])


def base58_check_decode(text: str) -> tuple[int, bytes]:
    """Return ``(version, payload)`` after verifying the checksum."""

    raw = base58_decode(text)
    if len(raw) < 1 + _CHECKSUM_SIZE:
        raise ValueError("Base58Check data too short")
    data, checksum = raw[:-_CHECKSUM_SIZE], raw[-_CHECKSUM_SIZE:]
    if _double_sha256(data)[:_CHECKSUM_SIZE] != checksum:
        raise ValueError("Base58Check checksum mismatch")
    return data[0], data[1:]


def encode_destination(destination: Destination, network: NetworkParams) -> str:
    if isinstance(destination, KeyHashDestination):
        return base58_check_encode(destination.key_id.value, network.pubkey_address_prefix)
    if isinstance(destination, ScriptHashDestination):
        return base58_check_encode(destination.script_id.value, network.script_address_prefix)
    if isinstance(destination, NoDestination):
        raise InvalidAddress("Cannot encode an empty destination")
    raise TypeError(f"Unknown destination type: {type(destination).__name__}")


class Base58AddressCodec:
    """Decode legacy Base58Check addresses into destinations."""

    def decode(self, text: str, network: NetworkParams) -> Destination:
        try:
            version, payload = base58_check_decode(text)
        except ValueError as exc:
            logger.debug("Address %r failed Base58Check decoding: %s", text, exc)
            return NoDestination()
        if len(payload) != HASH160_SIZE:
            return NoDestination()
        if version == network.pubkey_address_prefix:
            return KeyHashDestination(KeyId(payload))
        if version in network.script_address_prefixes:
            return ScriptHashDestination(ScriptId(payload))
        logger.debug("Address %r has version %d not used on %s", text, version, network.name)
        return NoDestination()
