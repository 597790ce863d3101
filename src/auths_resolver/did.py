"""did:key codec: base58btc + Ed25519 multicodec, ref-safe DID names.

A ``did:key:z...`` identifier carries its public key inline. After the
``z`` multibase marker the remainder is base58btc; decoded, it is the
two-byte multicodec tag ``0xED 0x01`` (Ed25519 public key) followed by the
32 raw key bytes.
"""

from __future__ import annotations

import re

from auths_resolver.core.constants import DEVICE_PREFIX
from auths_resolver.core.errors import DidDecodeError, UnsupportedDidSchemeError

DID_KEY_PREFIX = "did:key:z"
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
ED25519_MULTICODEC = b"\xed\x01"
ED25519_KEY_LEN = 32

_BASE58_INDEX = {ch: i for i, ch in enumerate(BASE58_ALPHABET)}
_REF_UNSAFE = re.compile(r"[^A-Za-z0-9]")


def _base58_decode(encoded: str) -> bytes:
    """Decode base58btc. Accumulates little-endian, then reverses."""
    buf = bytearray([0])
    for ch in encoded:
        value = _BASE58_INDEX.get(ch)
        if value is None:
            raise DidDecodeError(f"Invalid base58 character: {ch}", code="invalid_base58")
        carry = value
        for j in range(len(buf)):
            carry += buf[j] * 58
            buf[j] = carry & 0xFF
            carry >>= 8
        while carry > 0:
            buf.append(carry & 0xFF)
            carry >>= 8
    # Each leading '1' is a leading zero byte
    for ch in encoded:
        if ch != "1":
            break
        buf.append(0)
    buf.reverse()
    return bytes(buf)


def _base58_encode(data: bytes) -> str:
    num = int.from_bytes(data, "big")
    out: list[str] = []
    while num > 0:
        num, rem = divmod(num, 58)
        out.append(BASE58_ALPHABET[rem])
    for byte in data:
        if byte != 0:
            break
        out.append("1")
    return "".join(reversed(out))


def did_key_to_public_key_hex(did: str) -> str:
    """Extract the Ed25519 public key from a did:key:z... identifier as 64 lowercase hex chars."""
    if not did.startswith(DID_KEY_PREFIX):
        raise UnsupportedDidSchemeError(
            f"Expected did:key:z... format, got: {did}",
            code="unsupported_did_scheme",
            details={"did": did},
        )

    decoded = _base58_decode(did[len(DID_KEY_PREFIX) :])
    if len(decoded) < 2 + ED25519_KEY_LEN or decoded[:2] != ED25519_MULTICODEC:
        raise DidDecodeError(
            f"Expected Ed25519 multicodec prefix (0xED 0x01), got: 0x{decoded[:2].hex()}",
            code="bad_multicodec_prefix",
            details={"prefix": decoded[:2].hex(), "length": len(decoded)},
        )
    return decoded[2 : 2 + ED25519_KEY_LEN].hex()


def public_key_hex_to_did_key(public_key_hex: str) -> str:
    """Encode a 32-byte Ed25519 public key (hex) as did:key:z..."""
    try:
        key = bytes.fromhex(public_key_hex)
    except ValueError as exc:
        raise DidDecodeError(
            f"Public key is not valid hex: {public_key_hex}", original_error=exc
        ) from exc
    if len(key) != ED25519_KEY_LEN:
        raise DidDecodeError(
            f"Expected {ED25519_KEY_LEN}-byte Ed25519 key, got {len(key)} bytes",
            details={"length": len(key)},
        )
    return DID_KEY_PREFIX + _base58_encode(ED25519_MULTICODEC + key)


def sanitize_did_for_ref(did: str) -> str:
    """Replace every non-alphanumeric character with '_' so the DID fits in a ref path."""
    return _REF_UNSAFE.sub("_", did)


def device_ref_for(did: str) -> str:
    """Device attestation ref path for a device DID."""
    return f"{DEVICE_PREFIX}/{sanitize_did_for_ref(did)}"


def truncate_did(did: str, max_len: int = 24) -> str:
    """Shorten a DID for display, keeping the ``did:method:`` prefix.

    >>> truncate_did("did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp")
    'did:key:z6MkiTBz…3mDooWp'
    """
    if len(did) <= max_len:
        return did
    prefix_end = did.find(":", did.find(":") + 1) + 1
    prefix = did[:prefix_end]
    remaining = max_len - len(prefix) - 1
    if remaining <= 0:
        return did[: max_len - 3] + "..."
    tail = remaining // 2
    head = remaining - tail
    ident = did[prefix_end:]
    return prefix + ident[:head] + "…" + ident[len(ident) - tail :]
