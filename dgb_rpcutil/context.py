"""Explicit handle on the collaborators RPC commands need."""

from __future__ import annotations

from dataclasses import dataclass, field

from .address import MAINNET, Base58AddressCodec, NetworkParams
from .config import NodeConfig
from .key_resolver import AddressCodec, KeyStore
from .keystore import NodeWalletKeyStore
from .rpc_client import DigiByteRPCClient


@dataclass
class NodeContext:
    """Network parameters, address codec, and wallet keystore for one caller.

    ``keystore`` is ``None`` when no wallet is available; commands that need
    one report that to the caller.
    """

    network: NetworkParams = MAINNET
    codec: AddressCodec = field(default_factory=Base58AddressCodec)
    keystore: KeyStore | None = None

    @classmethod
    def from_config(cls, config: NodeConfig) -> "NodeContext":
        keystore = None
        if config.rpc is not None:
            keystore = NodeWalletKeyStore(DigiByteRPCClient(config.rpc), config.network)
        return cls(network=config.network, keystore=keystore)
