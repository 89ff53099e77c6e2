"""Summaries of decoded destinations for ``validateaddress``-style output."""

from __future__ import annotations

from typing import Any

from .keys import Destination, KeyHashDestination, NoDestination, ScriptHashDestination


def describe(destination: Destination) -> dict[str, Any]:
    """Return the descriptive fields for *destination*."""

    if isinstance(destination, NoDestination):
        return {}
    if isinstance(destination, KeyHashDestination):
        return {"isscript": False}
    if isinstance(destination, ScriptHashDestination):
        return {"isscript": True}
    # A new destination case must get its own branch above.
    raise TypeError(f"Unhandled destination type: {type(destination).__name__}")
