"""
Tests for out-points, transfer inputs and transfer outputs built by Core.
"""

import pytest

from codechain_client.core import AssetOutPoint, AssetTransferInput, Timelock, TimelockType
from codechain_client.primitives import H160, H256, U64, P2PKH_LOCK_SCRIPT_HASH
from codechain_client.runtime.errors import (
    MissingFieldError,
    RangeError,
    ShapeError,
    TypeMismatchError,
)

from conftest import ASSET_TYPE_A, PUBKEY_HASH, TX_ID_1


class TestAssetOutPoint:
    """Tests for create_asset_out_point."""

    def test_fields_are_parsed(self, core):
        out_point = core.create_asset_out_point(
            transaction_id=TX_ID_1, index=3, asset_type=ASSET_TYPE_A, amount="0x10",
        )
        assert out_point.transaction_id == H256(TX_ID_1)
        assert out_point.index == 3
        assert out_point.asset_type == H256(ASSET_TYPE_A)
        assert out_point.amount == U64(16)
        assert out_point.lock_script_hash is None
        assert out_point.parameters is None

    def test_bad_transaction_id(self, core):
        """Test the error names the parameter and value."""
        with pytest.raises(RangeError) as exc_info:
            core.create_asset_out_point(transaction_id="0x1234", index=0, asset_type=ASSET_TYPE_A, amount=1)
        assert exc_info.value.field == "transaction_id"
        assert exc_info.value.value == "0x1234"
        assert "transaction_id" in str(exc_info.value)

    def test_transaction_id_trailing_newline(self, core):
        with pytest.raises(RangeError) as exc_info:
            core.create_asset_out_point(
                transaction_id="a" * 63 + "\n", index=0, asset_type=ASSET_TYPE_A, amount=1,
            )
        assert exc_info.value.field == "transaction_id"

    @pytest.mark.parametrize("index", [-1, 1.5, "0", True])
    def test_bad_index(self, core, index):
        with pytest.raises(RangeError):
            core.create_asset_out_point(transaction_id=TX_ID_1, index=index, asset_type=ASSET_TYPE_A, amount=1)

    def test_amount_out_of_range(self, core):
        with pytest.raises(RangeError):
            core.create_asset_out_point(transaction_id=TX_ID_1, index=0, asset_type=ASSET_TYPE_A, amount=2 ** 64)

    def test_immutable(self, out_point_a):
        with pytest.raises(Exception):
            out_point_a.index = 5

    def test_to_json(self, out_point_a):
        """Test JSON uses camelCase keys and hex quantities."""
        data = out_point_a.to_json()
        assert data["transactionId"] == TX_ID_1
        assert data["assetType"] == ASSET_TYPE_A
        assert data["amount"] == "0x32"
        assert data["index"] == 0

    def test_encode_object(self, out_point_a):
        assert out_point_a.to_encode_object() == [bytes.fromhex("11" * 32), 0, bytes.fromhex("aa" * 32), 50]


class TestAssetTransferInput:
    """Tests for create_asset_transfer_input."""

    def test_from_out_point(self, core, out_point_a):
        """Test the constructed input carries the out-point unchanged."""
        item = core.create_asset_transfer_input(asset_out_point=out_point_a)
        assert item.prev_out == out_point_a
        assert item.timelock is None
        assert item.lock_script == b""
        assert item.unlock_script == b""

    def test_from_mapping(self, core, out_point_a):
        """Test a camelCase mapping builds an equal out-point."""
        item = core.create_asset_transfer_input(asset_out_point={
            "transactionId": TX_ID_1, "index": 0, "assetType": ASSET_TYPE_A, "amount": 50,
        })
        assert item.prev_out == out_point_a

    def test_mapping_with_lock_script(self, core):
        """Test wrapped-CCC out-points keep their lock script hash and parameters."""
        item = core.create_asset_transfer_input(asset_out_point={
            "transaction_id": TX_ID_1,
            "index": 0,
            "asset_type": ASSET_TYPE_A,
            "amount": 50,
            "lock_script_hash": P2PKH_LOCK_SCRIPT_HASH,
            "parameters": [bytes.fromhex(PUBKEY_HASH)],
        })
        assert item.prev_out.lock_script_hash == P2PKH_LOCK_SCRIPT_HASH
        assert item.prev_out.parameters == (bytes.fromhex(PUBKEY_HASH),)

    def test_mapping_missing_field(self, core):
        with pytest.raises(MissingFieldError) as exc_info:
            core.create_asset_transfer_input(asset_out_point={"transaction_id": TX_ID_1, "index": 0, "amount": 1})
        assert exc_info.value.field == "asset_out_point.asset_type"

    def test_not_an_out_point(self, core):
        with pytest.raises(TypeMismatchError):
            core.create_asset_transfer_input(asset_out_point="0x" + "11" * 32)

    def test_timelock_mapping(self, core, out_point_a):
        item = core.create_asset_transfer_input(
            asset_out_point=out_point_a, timelock={"type": "blockAge", "value": 10},
        )
        assert item.timelock == Timelock(type=TimelockType.BLOCK_AGE, value=10)

    def test_timelock_bad_type(self, core, out_point_a):
        with pytest.raises(RangeError) as exc_info:
            core.create_asset_transfer_input(asset_out_point=out_point_a, timelock={"type": "epoch", "value": 1})
        assert exc_info.value.field == "timelock.type"

    def test_timelock_bad_value(self, core, out_point_a):
        with pytest.raises(RangeError):
            core.create_asset_transfer_input(asset_out_point=out_point_a, timelock={"type": "time", "value": -5})

    def test_scripts_must_be_bytes(self, core, out_point_a):
        with pytest.raises(TypeMismatchError) as exc_info:
            core.create_asset_transfer_input(asset_out_point=out_point_a, lock_script="0x01")
        assert exc_info.value.field == "lock_script"

    def test_with_scripts_and_without_script(self, core, out_point_a):
        item = core.create_asset_transfer_input(asset_out_point=out_point_a)
        scripted = item.with_scripts(b"\x01", b"\x02")
        assert scripted.lock_script == b"\x01"
        assert scripted.unlock_script == b"\x02"
        assert scripted.without_script() == item


class TestAssetTransferOutput:
    """Tests for create_asset_transfer_output and its destination shapes."""

    def test_address_and_script_pair_are_equivalent(self, core, p2pkh_address):
        """Test an address destination normalizes to the explicit script pair."""
        by_address = core.create_asset_transfer_output(
            asset_type=ASSET_TYPE_A, amount=10, recipient=p2pkh_address,
        )
        by_script = core.create_asset_transfer_output(
            asset_type=ASSET_TYPE_A,
            amount=10,
            lock_script_hash=P2PKH_LOCK_SCRIPT_HASH,
            parameters=[bytes.fromhex(PUBKEY_HASH)],
        )
        assert by_address == by_script
        assert by_address.lock_script_hash == P2PKH_LOCK_SCRIPT_HASH
        assert by_address.parameters == (bytes.fromhex(PUBKEY_HASH),)

    def test_address_string(self, core, lock_script_hash_address):
        output = core.create_asset_transfer_output(
            asset_type=ASSET_TYPE_A, amount=10, recipient=lock_script_hash_address.value,
        )
        assert output.lock_script_hash == H160("12" * 20)
        assert output.parameters == ()

    def test_both_shapes_rejected(self, core, p2pkh_address):
        with pytest.raises(ShapeError):
            core.create_asset_transfer_output(
                asset_type=ASSET_TYPE_A,
                amount=10,
                recipient=p2pkh_address,
                lock_script_hash=P2PKH_LOCK_SCRIPT_HASH,
                parameters=[],
            )

    def test_neither_shape_rejected(self, core):
        with pytest.raises(ShapeError):
            core.create_asset_transfer_output(asset_type=ASSET_TYPE_A, amount=10)

    def test_half_script_pair(self, core):
        with pytest.raises(MissingFieldError) as exc_info:
            core.create_asset_transfer_output(
                asset_type=ASSET_TYPE_A, amount=10, lock_script_hash=P2PKH_LOCK_SCRIPT_HASH,
            )
        assert exc_info.value.field == "parameters"

    def test_parameters_must_be_bytes(self, core):
        with pytest.raises(TypeMismatchError) as exc_info:
            core.create_asset_transfer_output(
                asset_type=ASSET_TYPE_A, amount=10, lock_script_hash=P2PKH_LOCK_SCRIPT_HASH,
                parameters=[b"\x01", "02"],
            )
        assert exc_info.value.field == "parameters[1]"

    def test_invalid_recipient(self, core, platform_address):
        """Test a platform address is not an asset recipient."""
        with pytest.raises(RangeError):
            core.create_asset_transfer_output(asset_type=ASSET_TYPE_A, amount=10, recipient=platform_address)

    def test_end_to_end_output(self, core, p2pkh_address):
        """Test the (assetType, amount, address) scenario."""
        output = core.create_asset_transfer_output(
            asset_type=ASSET_TYPE_A, amount="1000", recipient=p2pkh_address,
        )
        assert output.asset_type == H256(ASSET_TYPE_A)
        assert output.amount == 1000
        assert (output.lock_script_hash, output.parameters) == p2pkh_address.to_lock_script()


def test_models_reexported():
    """Test the core package exposes the value types."""
    assert AssetOutPoint.__name__ == "AssetOutPoint"
    assert AssetTransferInput.__name__ == "AssetTransferInput"
