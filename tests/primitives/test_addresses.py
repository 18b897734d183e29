"""
Unit tests for platform and asset addresses.
"""

import pytest
from bech32 import bech32_encode

from codechain_client.primitives import (
    H160,
    H512,
    AssetAddress,
    PlatformAddress,
    P2PKH_BURN_LOCK_SCRIPT_HASH,
    P2PKH_LOCK_SCRIPT_HASH,
    blake160,
    bech32,
)
from codechain_client.runtime.errors import RangeError


def _tamper(address: str) -> str:
    """Replace the last character with a different bech32 character."""
    last = address[-1]
    replacement = "q" if last != "q" else "p"
    return address[:-1] + replacement


class TestBech32:
    """Tests for the separator-less bech32 variant."""

    def test_decode_recovers_words(self):
        """Test decode returns the prefix and data words."""
        words = bech32.to_words(b"\x01" + bytes(20))
        text = bech32.encode("tcc", words)
        prefix, decoded = bech32.decode(text)
        assert prefix == "tcc"
        assert decoded == words

    def test_checksum_detects_change(self):
        """Test a single changed character fails the checksum."""
        text = bech32.encode("tcc", bech32.to_words(b"\x01" + bytes(20)))
        with pytest.raises(ValueError):
            bech32.decode(_tamper(text))

    def test_invalid_character(self):
        """Test characters outside the charset are rejected."""
        with pytest.raises(ValueError):
            bech32.decode("tccbbbbbbbbbbbb")

    def test_matches_separated_bech32(self):
        """Test the checksum equals BIP-173 bech32 with the separator dropped."""
        words = bech32.to_words(b"\x01" + bytes(20))
        assert bech32.encode("tcc", words) == bech32_encode("tcc", words).replace("tcc1", "tcc", 1)

    def test_nonzero_padding_rejected(self):
        with pytest.raises(ValueError):
            bech32.from_words([31])


class TestPlatformAddress:
    """Tests for PlatformAddress."""

    def test_from_account_id(self):
        """Test the prefix and account id of a built address."""
        address = PlatformAddress.from_account_id("ab" * 20, "tc")
        assert address.value.startswith("tcc")
        assert address.network_id == "tc"
        assert address.account_id == H160("ab" * 20)

    def test_string_round_trip(self):
        """Test parsing the rendered string gives an equal address."""
        address = PlatformAddress.from_account_id("ab" * 20, "sc")
        parsed = PlatformAddress.from_string(address.value)
        assert parsed == address
        assert parsed.account_id == address.account_id
        assert PlatformAddress.ensure(address.value) == address

    def test_from_public(self):
        """Test the account id is blake160 of the public key."""
        public_key = "01" * 64
        address = PlatformAddress.from_public(public_key)
        assert address.account_id == H160(blake160(H512(public_key).to_bytes()))

    def test_invalid_network_id(self):
        """Test network ids must have two characters."""
        with pytest.raises(RangeError):
            PlatformAddress.from_account_id("ab" * 20, "t")

    def test_bad_checksum(self):
        """Test a tampered address is rejected."""
        address = PlatformAddress.from_account_id("ab" * 20).value
        assert not PlatformAddress.check(_tamper(address))

    def test_asset_address_is_not_platform_address(self):
        """Test the kind letter is enforced."""
        asset = AssetAddress.from_lock_script_hash("ab" * 20)
        with pytest.raises(RangeError):
            PlatformAddress.ensure(asset.value)

    def test_non_string(self):
        """Test non-string values are rejected."""
        with pytest.raises(RangeError):
            PlatformAddress.ensure(42)


class TestAssetAddress:
    """Tests for AssetAddress and its lock script mapping."""

    def test_prefix(self):
        """Test asset addresses use the 'a' kind letter."""
        assert AssetAddress.from_lock_script_hash("ab" * 20, "tc").value.startswith("tca")

    def test_lock_script_hash_address(self):
        """Test type 0 maps to its payload with no parameters."""
        address = AssetAddress.from_lock_script_hash("12" * 20)
        assert address.to_lock_script() == (H160("12" * 20), ())

    def test_p2pkh_address(self):
        """Test type 1 maps to the P2PKH script with the key hash parameter."""
        address = AssetAddress.from_type_and_payload(1, "cd" * 20)
        assert address.to_lock_script() == (P2PKH_LOCK_SCRIPT_HASH, (bytes.fromhex("cd" * 20),))

    def test_p2pkh_burn_address(self):
        """Test type 2 maps to the burn script."""
        address = AssetAddress.from_type_and_payload(2, "cd" * 20)
        assert address.to_lock_script() == (P2PKH_BURN_LOCK_SCRIPT_HASH, (bytes.fromhex("cd" * 20),))

    def test_mapping_is_idempotent(self):
        """Test re-parsing an address yields the same lock script pair."""
        address = AssetAddress.from_type_and_payload(1, "cd" * 20)
        reparsed = AssetAddress.from_string(address.value)
        assert reparsed == address
        assert reparsed.to_lock_script() == address.to_lock_script()

    def test_unknown_type(self):
        """Test unsupported address types are rejected."""
        with pytest.raises(RangeError):
            AssetAddress.from_type_and_payload(3, "cd" * 20)

    def test_platform_address_is_not_asset_address(self):
        """Test a platform address string is not an asset address."""
        platform = PlatformAddress.from_account_id("ab" * 20)
        assert not AssetAddress.check(platform.value)
