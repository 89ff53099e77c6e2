"""Render RPC help text from declared argument schemas.

The output format is a compatibility contract with existing node help text::

    createmultisig nrequired ["key",...] ( "address_type" )

Optional arguments are grouped in ``( ... )``, arrays render as
``[<child>,...]`` and objects as ``{"field":type,...}``.
"""

from __future__ import annotations

from typing import Sequence

from .argspec import ArgSpec, ArgType, CommandSpec
from .errors import SchemaInvariantViolation, UnsupportedSchemaShape

_STRUCTURE_LABELS = {
    ArgType.STR: '"str"',
    ArgType.STR_HEX: '"hex"',
    ArgType.NUM: "n",
    ArgType.AMOUNT: "amount",
    ArgType.BOOL: "bool",
}

_TYPE_LABELS = {
    ArgType.STR: "string",
    ArgType.STR_HEX: "string",
    ArgType.NUM: "numeric",
    ArgType.AMOUNT: "numeric or string",
    ArgType.BOOL: "boolean",
    ArgType.ARR: "json array",
    ArgType.OBJ: "json object",
    ArgType.OBJ_USER_KEYS: "json object",
}


def render_token(arg: ArgSpec) -> str:
    """Return the call-signature token for *arg*."""

    if arg.type in (ArgType.STR, ArgType.STR_HEX):
        return f'"{arg.name}"'
    if arg.type in (ArgType.NUM, ArgType.AMOUNT, ArgType.BOOL):
        return arg.name
    if arg.type is ArgType.ARR:
        inner = "".join(render_token(child) + "," for child in arg.children)
        return f"[{inner}...]"
    if arg.type is ArgType.OBJ:
        return "{" + ",".join(render_structure(child) for child in arg.children) + "}"
    if arg.type is ArgType.OBJ_USER_KEYS:
        return "{" + ",".join(render_structure(child) for child in arg.children) + ",...}"
    raise UnsupportedSchemaShape(f"argument {arg.name!r} has unknown type {arg.type!r}")


def render_structure(arg: ArgSpec) -> str:
    """Return the ``"name":type`` form of *arg* used inside a composite parent."""

    prefix = f'"{arg.name}":'
    label = _STRUCTURE_LABELS.get(arg.type)
    if label is not None:
        return prefix + label
    if arg.type is ArgType.ARR:
        inner = "".join(render_token(child) + "," for child in arg.children)
        return f"{prefix}[{inner}...]"
    if arg.type.is_object:
        raise UnsupportedSchemaShape(
            f"object argument {arg.name!r} cannot be nested inside another object"
        )
    raise UnsupportedSchemaShape(f"argument {arg.name!r} has unknown type {arg.type!r}")


def render_signature(name: str, args: Sequence[ArgSpec]) -> str:
    """Return the one-line call signature for a command, ending in a newline."""

    parts = [name]
    is_optional = False
    for arg in args:
        parts.append(" ")
        if arg.optional:
            if not is_optional:
                parts.append("( ")
            is_optional = True
        elif is_optional:
            raise SchemaInvariantViolation(
                f"{name}: required argument {arg.name!r} follows an optional argument"
            )
        parts.append(render_token(arg))
    if is_optional:
        parts.append(" )")
    parts.append("\n")
    return "".join(parts)


def render_arguments(args: Sequence[ArgSpec]) -> str:
    """Return numbered description lines for each top-level argument."""

    lines = []
    for index, arg in enumerate(args, start=1):
        requirement = "optional" if arg.optional else "required"
        line = f"{index}. {render_token(arg)}  ({_TYPE_LABELS[arg.type]}, {requirement})"
        if arg.description:
            line += f" {arg.description}"
        lines.append(line)
    return "\n".join(lines)


def render_help(command: CommandSpec) -> str:
    """Return the full help text for *command*."""

    text = render_signature(command.name, command.args)
    if command.description:
        text += f"\n{command.description}\n"
    if command.args:
        text += "\nArguments:\n" + render_arguments(command.args) + "\n"
    return text
