"""RPC commands built on the key, script, and help helpers.

Each command declares its argument schema next to its handler so that
``help <command>`` and the handler cannot drift apart.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from .address import encode_destination
from .argspec import ArgSpec, ArgType, CommandSpec
from .context import NodeContext
from .describe import describe
from .errors import WalletUnavailable
from .help import render_help
from .key_resolver import is_hex, key_from_address, key_from_hex
from .keys import PublicKey, ScriptHashDestination, is_valid_destination
from .script import RedeemScript, build_multisig

logger = logging.getLogger(__name__)

_HEX_PUBKEY_LENGTHS = (66, 130)

CREATEMULTISIG = CommandSpec(
    "createmultisig",
    [
        ArgSpec(
            "nrequired",
            ArgType.NUM,
            description="The number of required signatures out of the n keys.",
        ),
        ArgSpec(
            "keys",
            ArgType.ARR,
            children=[ArgSpec("key", ArgType.STR_HEX, description="The hex-encoded public key")],
            description="A json array of hex-encoded public keys.",
        ),
    ],
    description="Creates a multi-signature address with n signatures of m keys required.",
)

ADDMULTISIGADDRESS = CommandSpec(
    "addmultisigaddress",
    [
        ArgSpec(
            "nrequired",
            ArgType.NUM,
            description="The number of required signatures out of the n keys or addresses.",
        ),
        ArgSpec(
            "keys",
            ArgType.ARR,
            children=[
                ArgSpec("key", ArgType.STR, description="address or hex-encoded public key")
            ],
            description="A json array of addresses or hex-encoded public keys.",
        ),
        ArgSpec("label", ArgType.STR, optional=True, description="A label to assign the address to."),
    ],
    description="Builds a multi-signature address, resolving wallet addresses to their keys.",
)

DESCRIBEADDRESS = CommandSpec(
    "describeaddress",
    [ArgSpec("address", ArgType.STR, description="The address to describe.")],
    description="Return information about the given address.",
)

COMMANDS: dict[str, CommandSpec] = {
    spec.name: spec for spec in (CREATEMULTISIG, ADDMULTISIGADDRESS, DESCRIBEADDRESS)
}


def get_help(name: str) -> str:
    try:
        command = COMMANDS[name]
    except KeyError as exc:
        raise ValueError(f"help: unknown command: {name}") from exc
    return render_help(command)


def _multisig_result(context: NodeContext, script: RedeemScript) -> dict[str, Any]:
    address = encode_destination(ScriptHashDestination(script.script_id()), context.network)
    return {"address": address, "redeemScript": script.hex()}


def createmultisig(context: NodeContext, nrequired: int, keys: Sequence[str]) -> dict[str, Any]:
    """Build a P2SH multisig address from hex-encoded public keys."""

    pubkeys = [key_from_hex(key) for key in keys]
    return _multisig_result(context, build_multisig(nrequired, pubkeys))


def _resolve_key_or_address(context: NodeContext, value: str) -> PublicKey:
    if is_hex(value) and len(value) in _HEX_PUBKEY_LENGTHS:
        return key_from_hex(value)
    if context.keystore is None:
        raise WalletUnavailable(
            f"{value} is not a public key and no wallet is configured to resolve it"
        )
    return key_from_address(value, context.network, context.keystore, codec=context.codec)


def addmultisigaddress(
    context: NodeContext,
    nrequired: int,
    keys: Sequence[str],
    label: str | None = None,
) -> dict[str, Any]:
    """Build a P2SH multisig address from wallet addresses or hex public keys."""

    pubkeys = [_resolve_key_or_address(context, key) for key in keys]
    result = _multisig_result(context, build_multisig(nrequired, pubkeys))
    if label is not None:
        result["label"] = label
    logger.debug("Resolved %d keys for addmultisigaddress", len(pubkeys))
    return result


def describeaddress(context: NodeContext, address: str) -> dict[str, Any]:
    destination = context.codec.decode(address, context.network)
    if not is_valid_destination(destination):
        return {"isvalid": False}
    return {"isvalid": True, "address": address, **describe(destination)}
