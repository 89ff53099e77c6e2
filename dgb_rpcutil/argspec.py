"""Declarative argument schemas for RPC commands.

Schemas are built once when a command is registered and are read whenever help
text is rendered. Shape rules are checked at declaration time so that a bad
schema fails when the command module is imported, not when a user asks for
help.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .errors import SchemaInvariantViolation


class ArgType(str, Enum):
    STR = "string"
    STR_HEX = "hex-string"
    NUM = "number"
    AMOUNT = "amount"
    BOOL = "boolean"
    ARR = "array"
    OBJ = "object"
    OBJ_USER_KEYS = "object-with-free-form-keys"

    @property
    def is_composite(self) -> bool:
        return self in _COMPOSITE_TYPES

    @property
    def is_object(self) -> bool:
        return self in (ArgType.OBJ, ArgType.OBJ_USER_KEYS)


_COMPOSITE_TYPES = frozenset({ArgType.ARR, ArgType.OBJ, ArgType.OBJ_USER_KEYS})


@dataclass(frozen=True)
class ArgSpec:
    """Schema node describing one RPC parameter."""

    name: str
    type: ArgType
    optional: bool = False
    children: tuple["ArgSpec", ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence of children but store an immutable tuple.
        object.__setattr__(self, "children", tuple(self.children))
        if not self.type.is_composite and self.children:
            raise SchemaInvariantViolation(
                f"argument {self.name!r} of type {self.type.value} cannot have children"
            )
        if self.type is ArgType.ARR and len(self.children) != 1:
            raise SchemaInvariantViolation(
                f"array argument {self.name!r} needs exactly one child template, "
                f"got {len(self.children)}"
            )


@dataclass(frozen=True)
class CommandSpec:
    """A command name plus its ordered positional arguments."""

    name: str
    args: Sequence[ArgSpec] = field(default_factory=tuple)
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def to_string(self) -> str:
        from .help import render_signature

        return render_signature(self.name, self.args)
