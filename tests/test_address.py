"""Tests for chain3.address: format checks and the EIP-55 checksum."""

from __future__ import annotations

import pytest

from chain3.address import is_address, is_checksum_address, to_checksum_address

COINBASE = "0x407d73d8a49eeb85d32cf465507dd71d507100c1"

# EIP-55 reference vectors
CHECKSUMMED = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]


class TestIsAddress:
    """Tests for is_address."""

    def test_lowercase(self) -> None:
        assert is_address(COINBASE)

    def test_uppercase(self) -> None:
        assert is_address("0x" + COINBASE[2:].upper())

    def test_without_prefix(self) -> None:
        assert is_address(COINBASE[2:])

    def test_valid_checksum(self) -> None:
        for address in CHECKSUMMED:
            assert is_address(address)

    def test_bad_checksum(self) -> None:
        # last character case flipped
        assert not is_address("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAeD")

    def test_wrong_length(self) -> None:
        assert not is_address(COINBASE[:-1])
        assert not is_address(COINBASE + "0")

    def test_non_hex(self) -> None:
        assert not is_address("0x407d73d8a49eeb85d32cf465507dd71d507100cg")
        assert not is_address("")


class TestChecksum:
    """Tests for is_checksum_address / to_checksum_address."""

    def test_reference_vectors(self) -> None:
        for address in CHECKSUMMED:
            assert is_checksum_address(address)
            assert to_checksum_address(address.lower()) == address

    def test_any_single_case_flip_fails(self) -> None:
        address = CHECKSUMMED[0]
        for i, char in enumerate(address):
            if i < 2 or not char.isalpha():
                continue
            flipped = address[:i] + char.swapcase() + address[i + 1:]
            assert not is_checksum_address(flipped)

    def test_without_prefix(self) -> None:
        assert is_checksum_address(CHECKSUMMED[1][2:])

    def test_to_checksum_accepts_any_case(self) -> None:
        assert to_checksum_address(CHECKSUMMED[2].upper()) == CHECKSUMMED[2]

    def test_to_checksum_invalid(self) -> None:
        with pytest.raises(ValueError):
            to_checksum_address("0x1234")
