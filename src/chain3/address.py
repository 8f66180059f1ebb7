"""
Address validation with the EIP-55 mixed-case checksum.

An address is 40 hex digits with an optional "0x" prefix. All-lowercase
and all-uppercase spellings carry no checksum and are always accepted;
mixed case must match the Keccak-256 hash of the lowercased address.
"""

from __future__ import annotations

import re

from .utils import keccak256, strip_0x

_LOWER_RE = re.compile(r"^(0x)?[0-9a-f]{40}$")
_UPPER_RE = re.compile(r"^(0x)?[0-9A-F]{40}$")
_ANY_CASE_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


def is_address(address: str) -> bool:
    if _LOWER_RE.match(address) or _UPPER_RE.match(address):
        return True
    return is_checksum_address(address)


def is_checksum_address(address: str) -> bool:
    """
    Check an address against its EIP-55 checksum.

    Each letter must be uppercase when the matching nibble of
    keccak256(lowercase address) is greater than 7, lowercase otherwise.
    """
    if not _ANY_CASE_RE.match(address):
        return False
    addr = address[2:] if address.startswith("0x") else address
    addr_hash = keccak256(addr.lower().encode("ascii")).hex()
    for char, nibble in zip(addr, addr_hash):
        if int(nibble, 16) > 7:
            if char.upper() != char:
                return False
        elif char.lower() != char:
            return False
    return True


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    addr = strip_0x(address).lower()
    if not _LOWER_RE.match(addr):
        raise ValueError(f"Invalid address: {address!r}")
    addr_hash = keccak256(addr.encode("ascii")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result
