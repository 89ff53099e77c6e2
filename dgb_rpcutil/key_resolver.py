"""Resolve user-supplied hex strings and addresses into public keys."""

from __future__ import annotations

import logging
import string
from typing import Protocol

from .address import Base58AddressCodec, NetworkParams
from .errors import (
    CorruptedKeyStore,
    InvalidAddress,
    InvalidKey,
    InvalidKeyEncoding,
    NoFullKeyAvailable,
    NoKeyForDestination,
)
from .keys import Destination, KeyId, PublicKey, is_fully_valid_pubkey, is_valid_destination

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)


class AddressCodec(Protocol):
    """Decodes address text into a destination for a given network."""

    def decode(self, text: str, network: NetworkParams) -> Destination:
        """Return the destination for *text*, or ``NoDestination()``."""


class KeyStore(Protocol):
    """Read-only view of the key material held by a wallet."""

    def lookup_key_id(self, destination: Destination) -> KeyId | None:
        """Return the key id *destination* refers to, if any."""

    def fetch_full_key(self, key_id: KeyId) -> bytes | None:
        """Return the serialized public key for *key_id*, if held."""


def is_hex(text: str) -> bool:
    """Return ``True`` for a non-empty, even-length string of hex digits."""

    return bool(text) and len(text) % 2 == 0 and all(ch in _HEX_DIGITS for ch in text)


def key_from_hex(text: str) -> PublicKey:
    """Convert a hex-encoded public key into a :class:`PublicKey`."""

    if not is_hex(text):
        raise InvalidKeyEncoding(f"Invalid public key: {text}")
    data = bytes.fromhex(text)
    if not is_fully_valid_pubkey(data):
        raise InvalidKey(f"Invalid public key: {text}")
    return PublicKey(data)


def key_from_address(
    address: str,
    network: NetworkParams,
    keystore: KeyStore,
    *,
    codec: AddressCodec | None = None,
) -> PublicKey:
    """Look up the full public key behind *address* in *keystore*."""

    codec = codec or Base58AddressCodec()
    destination = codec.decode(address, network)
    if not is_valid_destination(destination):
        raise InvalidAddress(f"Invalid address: {address}")

    key_id = keystore.lookup_key_id(destination)
    if key_id is None:
        raise NoKeyForDestination(f"{address} does not refer to a key")

    data = keystore.fetch_full_key(key_id)
    if data is None:
        raise NoFullKeyAvailable(f"no full public key for address {address}")

    if not is_fully_valid_pubkey(data):
        logger.error("Keystore returned an invalid public key for key id %s", key_id.hex())
        raise CorruptedKeyStore("Wallet contains an invalid public key")
    return PublicKey(data)
