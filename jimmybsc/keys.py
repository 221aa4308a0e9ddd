"""Keccak hashing, EIP-55 addresses and secp256k1 key-to-address derivation."""

from __future__ import annotations

import re

from Crypto.Hash import keccak
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

_SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_ADDRESS_RE = re.compile(r"[0-9a-fA-F]{40}")
_KEY_RE = re.compile(r"[0-9a-fA-F]{64}")


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of ``data``."""
    digest = keccak.new(digest_bits=256)
    digest.update(bytes(data))
    return digest.digest()


def _strip_hex_prefix(text: str) -> str:
    text = text.strip()
    return text[2:] if text[:2] in ("0x", "0X") else text


def to_checksum_address(address: str | bytes) -> str:
    """Return the EIP-55 mixed-case form of a 20-byte address."""
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(address)}")
        lower = bytes(address).hex()
    else:
        body = _strip_hex_prefix(address)
        if not _ADDRESS_RE.fullmatch(body):
            raise ValueError(f"invalid address: {address!r}")
        lower = body.lower()
    digest_hex = keccak256(lower.encode("ascii")).hex()
    mixed = "".join(
        ch.upper() if int(nibble, 16) >= 8 else ch for ch, nibble in zip(lower, digest_hex)
    )
    return "0x" + mixed


def _private_key_scalar(private_key: str | bytes) -> int:
    if isinstance(private_key, (bytes, bytearray)):
        if len(private_key) != 32:
            raise ValueError("private key must be 32 bytes")
        scalar = int.from_bytes(private_key, "big")
    else:
        body = _strip_hex_prefix(private_key)
        if not _KEY_RE.fullmatch(body):
            raise ValueError("private key must be 32 hex-encoded bytes")
        scalar = int(body, 16)
    if not 0 < scalar < _SECP256K1_ORDER:
        raise ValueError("private key is out of range for secp256k1")
    return scalar


def address_from_private_key(private_key: str | bytes) -> str:
    """Derive the checksummed account address of a secp256k1 private key."""
    signing_key = ec.derive_private_key(_private_key_scalar(private_key), ec.SECP256K1())
    point = signing_key.public_key().public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)
    return to_checksum_address(keccak256(point[1:])[-20:])