import hashlib
from typing import Callable

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from dgb_rpcutil.keys import PublicKey


@pytest.fixture
def key_hex() -> dict[str, str]:
    """Hex encodings of multiples of the secp256k1 generator."""

    return {
        "g": "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798",
        "g2": "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5",
        "g3": "02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9",
        "g_uncompressed": (
            "0479be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
            "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
        ),
    }


@pytest.fixture
def three_keys(key_hex: dict[str, str]) -> list[PublicKey]:
    return [PublicKey(bytes.fromhex(key_hex[name])) for name in ("g", "g2", "g3")]


@pytest.fixture
def make_pubkey() -> Callable[..., PublicKey]:
    def _make(compressed: bool = True) -> PublicKey:
        public = ec.generate_private_key(ec.SECP256K1()).public_key()
        fmt = PublicFormat.CompressedPoint if compressed else PublicFormat.UncompressedPoint
        return PublicKey(public.public_bytes(Encoding.X962, fmt))

    return _make


@pytest.fixture
def ripemd160() -> None:
    """Skip tests that hash160 data on interpreters built without RIPEMD-160."""

    try:
        hashlib.new("ripemd160")
    except ValueError:
        pytest.skip("hashlib has no ripemd160 support on this build")
