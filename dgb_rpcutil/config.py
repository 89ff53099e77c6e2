"""Configuration loader for the RPC utility CLI.

Settings come from an optional YAML file (``~/.dgb-rpcutil.yaml``) with
``network`` and ``rpc`` sections, ``DGB_*`` environment variables, and explicit
overrides, in increasing order of precedence. The network may be written as
``network: test`` or as ``network: {name: test}``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence
from urllib.parse import urlparse

import yaml

from .address import NETWORKS, NetworkParams, get_network


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".dgb-rpcutil.yaml"
DEFAULT_NETWORK = "main"
DEFAULT_RPC_PORTS = {"main": 14022, "test": 14023, "regtest": 18443}

_ENV_KEYS = {
    "network": "DGB_NETWORK",
    "user": "DGB_RPC_USER",
    "password": "DGB_RPC_PASSWORD",
    "endpoint": "DGB_RPC_ENDPOINT",
    "host": "DGB_RPC_HOST",
    "port": "DGB_RPC_PORT",
    "use_https": "DGB_RPC_USE_HTTPS",
    "wallet": "DGB_RPC_WALLET",
}
_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "n", "off"})


@dataclass
class RPCConfig:
    """Connection details for a DigiByte Core wallet."""

    user: str
    password: str
    host: str = "127.0.0.1"
    port: int = 14022
    use_https: bool = False
    wallet: str | None = None

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_https else "http"
        return f"{scheme}://{self.host}:{self.port}"


@dataclass
class NodeConfig:
    """Resolved settings: the network plus an optional wallet connection."""

    network: NetworkParams
    rpc: RPCConfig | None = None


def _read_yaml(path: Path, *, required: bool) -> dict[str, Any]:
    try:
        text = path.read_text()
    except FileNotFoundError:
        if required:
            raise ConfigurationError(f"Config file not found: {path}") from None
        return {}

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"{path} is not valid YAML: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML mapping")
    return document


@dataclass(frozen=True)
class _Layer:
    """One settings source flattened to loader keys (``network``, ``user``, ``port``...)."""

    source: str
    values: Mapping[str, Any]

    def with_endpoint(self) -> "_Layer":
        """Split an ``endpoint`` URL into host, port and scheme within this layer."""

        raw = self.values.get("endpoint")
        if not raw:
            return self
        parsed = urlparse(str(raw))
        try:
            port = parsed.port
        except ValueError as exc:
            raise ConfigurationError(f"Invalid RPC endpoint URL in {self.source}: {raw}") from exc
        if not parsed.scheme and not parsed.hostname:
            raise ConfigurationError(f"Invalid RPC endpoint URL in {self.source}: {raw}")

        values = dict(self.values)
        if parsed.hostname:
            values["host"] = parsed.hostname
        if port is not None:
            values["port"] = port
        if parsed.scheme:
            values["use_https"] = parsed.scheme.lower() == "https"
        return _Layer(self.source, values)


def _file_layer(document: Mapping[str, Any], path: Path) -> _Layer:
    network = document.get("network")
    if isinstance(network, dict):
        network = network.get("name")
    elif network is not None and not isinstance(network, str):
        raise ConfigurationError(
            f"Expected 'network' in {path} to be a network name or a mapping with 'name'"
        )

    rpc = document.get("rpc") or {}
    if not isinstance(rpc, dict):
        raise ConfigurationError(f"Expected 'rpc' to be a mapping in {path}")
    return _Layer(str(path), {**rpc, "network": network})


def _env_layer(env_map: Mapping[str, str]) -> _Layer:
    # Exported-but-empty variables count as unset.
    return _Layer("environment", {key: env_map.get(name) or None for key, name in _ENV_KEYS.items()})


def _as_port(value: Any, where: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid port in {where}: {value!r}") from exc
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range in {where}: {port}")
    return port


def _as_bool(value: Any, where: str) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigurationError(f"Invalid boolean in {where}: {value!r}")


def _lookup(
    layers: Sequence[_Layer], key: str, convert: Callable[[Any, str], Any] | None = None
) -> Any:
    """Return *key* from the first layer that sets it, or ``None``."""

    for layer in layers:
        value = layer.values.get(key)
        if value is not None:
            return value if convert is None else convert(value, f"{layer.source} ({key})")
    return None


def _resolve_network(layers: Sequence[_Layer]) -> NetworkParams:
    name = _lookup(layers, "network") or DEFAULT_NETWORK
    try:
        return get_network(str(name))
    except ValueError as exc:
        raise ConfigurationError(
            f"Unknown network {name!r}; expected one of {', '.join(sorted(NETWORKS))}"
        ) from exc


def _resolve_rpc(layers: Sequence[_Layer], network: NetworkParams) -> RPCConfig | None:
    user = _lookup(layers, "user")
    password = _lookup(layers, "password")
    if user is None and password is None:
        return None
    if not user or not password:
        raise ConfigurationError(
            "RPC user and password must both be provided via DGB_RPC_* variables or the rpc section"
        )

    port = _lookup(layers, "port", _as_port)
    return RPCConfig(
        user=str(user),
        password=str(password),
        host=str(_lookup(layers, "host") or "127.0.0.1"),
        port=DEFAULT_RPC_PORTS[network.name] if port is None else port,
        use_https=bool(_lookup(layers, "use_https", _as_bool)),
        wallet=_lookup(layers, "wallet"),
    )


def load_node_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> NodeConfig:
    """Load network and wallet settings from YAML, environment, and overrides.

    A missing default config file is not an error; a missing explicit
    ``config_path`` is. The wallet connection is ``None`` when no credentials
    are configured anywhere. Within one source an ``endpoint`` URL wins over
    that source's separate ``host``/``port``/``use_https`` settings.
    """

    env_map = os.environ if env is None else env
    path = Path(config_path).expanduser() if config_path is not None else DEFAULT_CONFIG_PATH
    document = _read_yaml(path, required=config_path is not None)

    layers = [
        _Layer("overrides", dict(overrides or {})).with_endpoint(),
        _env_layer(env_map).with_endpoint(),
        _file_layer(document, path).with_endpoint(),
    ]
    network = _resolve_network(layers)
    return NodeConfig(network=network, rpc=_resolve_rpc(layers, network))
