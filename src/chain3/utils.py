from __future__ import annotations

import re

from eth_hash.auto import keccak

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def keccak256(data: bytes) -> bytes:
    # Keccak-256, not NIST SHA3-256. Never hashlib.sha3_256.
    return keccak(data)


def strip_0x(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def hex_to_bytes(value: str) -> bytes:
    digits = strip_0x(value)
    if not _HEX_RE.match(digits):
        raise ValueError(f"Invalid hex string: {value!r}")
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def bytes_to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def to_ascii(hex_string: str) -> str:
    return hex_to_bytes(hex_string).strip(b"\x00").decode("latin-1")


def from_ascii(text: str, padding: int = 0) -> str:
    digits = "".join(f"{ord(char):02x}" for char in text)
    return "0x" + digits.ljust(padding * 2, "0")
