"""Multisig redeem script construction.

Scripts follow the standard template::

    OP_<m> <pubkey_1> ... <pubkey_n> OP_<n> OP_CHECKMULTISIG

Keys are pushed in the order supplied; no sorting or deduplication happens
here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import InsufficientKeys, InvalidThreshold, ScriptTooLarge, TooManyKeys
from .keys import PublicKey, ScriptId, hash160

logger = logging.getLogger(__name__)

MAX_SCRIPT_ELEMENT_SIZE = 520
MAX_PUBKEYS_PER_MULTISIG = 16

OP_0 = 0x00
OP_PUSHDATA1 = 0x4C
OP_PUSHDATA2 = 0x4D
OP_1 = 0x51
OP_16 = 0x60
OP_CHECKMULTISIG = 0xAE


def encode_small_int(value: int) -> int:
    """Return the OP_0..OP_16 opcode for *value*."""

    if not 0 <= value <= 16:
        raise ValueError(f"small integer out of range: {value}")
    if value == 0:
        return OP_0
    return OP_1 + value - 1


def decode_small_int(opcode: int) -> int:
    if opcode == OP_0:
        return 0
    if not OP_1 <= opcode <= OP_16:
        raise ValueError(f"opcode {opcode:#04x} is not a small integer")
    return opcode - OP_1 + 1


def push_data(data: bytes) -> bytes:
    """Serialize *data* as a minimal script push."""

    length = len(data)
    if length > MAX_SCRIPT_ELEMENT_SIZE:
        raise ValueError(f"push of {length} bytes exceeds {MAX_SCRIPT_ELEMENT_SIZE}")
    if length < OP_PUSHDATA1:
        return bytes([length]) + data
    if length <= 0xFF:
        return bytes([OP_PUSHDATA1, length]) + data
    return bytes([OP_PUSHDATA2]) + length.to_bytes(2, "little") + data


def _read_push(raw: bytes, offset: int) -> tuple[bytes, int]:
    opcode = raw[offset]
    offset += 1
    if 0 < opcode < OP_PUSHDATA1:
        length = opcode
    elif opcode == OP_PUSHDATA1:
        length = raw[offset]
        offset += 1
    elif opcode == OP_PUSHDATA2:
        length = int.from_bytes(raw[offset : offset + 2], "little")
        offset += 2
    else:
        raise ValueError(f"expected a data push at offset {offset - 1}")
    end = offset + length
    if end > len(raw):
        raise ValueError("data push runs past the end of the script")
    return raw[offset:end], end


@dataclass(frozen=True)
class RedeemScript:
    """An M-of-N multisig redeem script."""

    raw: bytes
    required: int
    keys: tuple[PublicKey, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", tuple(self.keys))
        if not 1 <= self.required <= len(self.keys) <= MAX_PUBKEYS_PER_MULTISIG:
            raise ValueError(
                f"invalid multisig shape: {self.required}-of-{len(self.keys)} "
                f"(need 1 <= required <= keys <= {MAX_PUBKEYS_PER_MULTISIG})"
            )

    def __len__(self) -> int:
        return len(self.raw)

    def hex(self) -> str:
        return self.raw.hex()

    def script_id(self) -> ScriptId:
        return ScriptId(hash160(self.raw))

    @classmethod
    def parse(cls, raw: bytes) -> "RedeemScript":
        """Decode a standard multisig script back into its parts."""

        if len(raw) < 3 or raw[-1] != OP_CHECKMULTISIG:
            raise ValueError("script is not a bare multisig template")
        required = decode_small_int(raw[0])
        key_count = decode_small_int(raw[-2])
        keys: list[PublicKey] = []
        offset = 1
        while offset < len(raw) - 2:
            data, offset = _read_push(raw, offset)
            keys.append(PublicKey(data))
        if offset != len(raw) - 2:
            raise ValueError("trailing data after the public keys")
        if len(keys) != key_count:
            raise ValueError(f"script declares {key_count} keys but pushes {len(keys)}")
        return cls(raw=bytes(raw), required=required, keys=tuple(keys))


def build_multisig(required: int, keys: Sequence[PublicKey]) -> RedeemScript:
    """Build an M-of-N redeem script, validating the threshold and size."""

    if required < 1:
        raise InvalidThreshold("a multisignature address must require at least one key to redeem")
    if len(keys) < required:
        raise InsufficientKeys(len(keys), required)
    if len(keys) > MAX_PUBKEYS_PER_MULTISIG:
        raise TooManyKeys(len(keys), MAX_PUBKEYS_PER_MULTISIG)

    script = bytearray([encode_small_int(required)])
    for key in keys:
        script.extend(push_data(key.data))
    script.append(encode_small_int(len(keys)))
    script.append(OP_CHECKMULTISIG)

    if len(script) > MAX_SCRIPT_ELEMENT_SIZE:
        raise ScriptTooLarge(len(script), MAX_SCRIPT_ELEMENT_SIZE)

    logger.debug("Built %d-of-%d redeem script (%d bytes)", required, len(keys), len(script))
    return RedeemScript(raw=bytes(script), required=required, keys=tuple(keys))
