"""Command line interface for the DigiByte RPC utilities.

The CLI runs the multisig and address commands locally, printing the same
JSON a node would return, and prints help text rendered from each command's
declared argument schema.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from . import commands
from .config import ConfigurationError, load_node_config
from .context import NodeContext
from .errors import RPCUtilError
from .rpc_client import RPCError, RPCTransportError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DigiByte RPC utility CLI")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--network", default=None, help="Network name (main, test, regtest); overrides config"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    help_parser = subparsers.add_parser("help", help="Print help text for an RPC command")
    help_parser.add_argument("name", nargs="?", default=None, help="Command name")

    create_parser = subparsers.add_parser(
        "createmultisig", help="Build a multisig address from hex public keys"
    )
    create_parser.add_argument("nrequired", type=int, help="Signatures required to redeem")
    create_parser.add_argument("keys", nargs="+", help="Hex-encoded public keys")

    add_parser = subparsers.add_parser(
        "addmultisigaddress",
        help="Build a multisig address from wallet addresses or hex public keys",
    )
    add_parser.add_argument("nrequired", type=int, help="Signatures required to redeem")
    add_parser.add_argument("keys", nargs="+", help="Addresses or hex-encoded public keys")
    add_parser.add_argument("--label", default=None, help="Label echoed in the result")

    describe_parser = subparsers.add_parser(
        "describeaddress", help="Report whether an address decodes and what it pays to"
    )
    describe_parser.add_argument("address", help="Address to describe")

    return parser


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def cmd_help(args: argparse.Namespace) -> None:
    if args.name is None:
        for spec in commands.COMMANDS.values():
            sys.stdout.write(spec.to_string())
        return
    try:
        sys.stdout.write(commands.get_help(args.name))
    except ValueError as exc:
        raise CLIError(str(exc)) from exc


def _context_from_args(args: argparse.Namespace) -> NodeContext:
    config = load_node_config(config_path=args.config, overrides={"network": args.network})
    logger.debug("Using network %s", config.network.name)
    return NodeContext.from_config(config)


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    try:
        if args.command == "help":
            cmd_help(args)
        elif args.command == "createmultisig":
            _print_json(commands.createmultisig(_context_from_args(args), args.nrequired, args.keys))
        elif args.command == "addmultisigaddress":
            _print_json(
                commands.addmultisigaddress(
                    _context_from_args(args), args.nrequired, args.keys, label=args.label
                )
            )
        elif args.command == "describeaddress":
            _print_json(commands.describeaddress(_context_from_args(args), args.address))
        else:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")
    except RPCUtilError as exc:
        if exc.is_client_error:
            parser.exit(1, f"error: {exc}\n")
        logger.error("Internal error (%s): %s", exc.kind.value, exc)
        parser.exit(1, f"internal error: {exc}\n")
    except (CLIError, ConfigurationError, RPCError, RPCTransportError) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
