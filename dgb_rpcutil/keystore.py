"""Keystore adapters consumed by :func:`key_from_address`."""

from __future__ import annotations

import logging

from .address import NetworkParams, encode_destination
from .errors import CorruptedKeyStore
from .keys import Destination, KeyHashDestination, KeyId, hash160
from .rpc_client import DigiByteRPCClient

logger = logging.getLogger(__name__)


def key_id_for_destination(destination: Destination) -> KeyId | None:
    """Return the key id a destination references, or ``None`` for non-key cases."""

    if isinstance(destination, KeyHashDestination):
        return destination.key_id
    return None


class InMemoryKeyStore:
    """Dictionary-backed keystore.

    Keys are stored exactly as given; the resolver performs validation when it
    reads them back. ``add_watch_only`` records a key id whose full public key
    is unknown.
    """

    def __init__(self) -> None:
        self._keys: dict[KeyId, bytes | None] = {}

    def add_key(self, data: bytes, key_id: KeyId | None = None) -> KeyId:
        if key_id is None:
            key_id = KeyId(hash160(data))
        self._keys[key_id] = bytes(data)
        return key_id

    def add_watch_only(self, key_id: KeyId) -> None:
        self._keys.setdefault(key_id, None)

    def lookup_key_id(self, destination: Destination) -> KeyId | None:
        return key_id_for_destination(destination)

    def fetch_full_key(self, key_id: KeyId) -> bytes | None:
        return self._keys.get(key_id)


class NodeWalletKeyStore:
    """Reads public keys from a DigiByte Core wallet via ``getaddressinfo``."""

    def __init__(self, rpc: DigiByteRPCClient, network: NetworkParams) -> None:
        self.rpc = rpc
        self.network = network

    def lookup_key_id(self, destination: Destination) -> KeyId | None:
        return key_id_for_destination(destination)

    def fetch_full_key(self, key_id: KeyId) -> bytes | None:
        address = encode_destination(KeyHashDestination(key_id), self.network)
        info = self.rpc.getaddressinfo(address)
        pubkey_hex = info.get("pubkey")
        if not pubkey_hex:
            logger.debug("Wallet holds no public key for %s", address)
            return None
        try:
            return bytes.fromhex(pubkey_hex)
        except ValueError as exc:
            raise CorruptedKeyStore("Wallet contains an invalid public key") from exc
