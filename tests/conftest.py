"""
Shared fixtures: a factory bound to the test network, sample addresses and
out-points built through the library itself.
"""

import pytest

from codechain_client.core import Core
from codechain_client.primitives import H160, H256, AssetAddress, PlatformAddress

NETWORK_ID = "tc"

ASSET_TYPE_A = "0x" + "aa" * 32
ASSET_TYPE_B = "0x" + "bb" * 32
ASSET_TYPE_FEE = "0x" + "cc" * 32
TX_ID_1 = "0x" + "11" * 32
TX_ID_2 = "0x" + "22" * 32
ACCOUNT_ID = "ab" * 20
PUBKEY_HASH = "cd" * 20
SIGNATURE = "0x" + "ef" * 65


@pytest.fixture
def network_id():
    return NETWORK_ID


@pytest.fixture
def core():
    """Transaction factory for the test network."""
    return Core(NETWORK_ID)


@pytest.fixture
def platform_address():
    return PlatformAddress.from_account_id(ACCOUNT_ID, NETWORK_ID)


@pytest.fixture
def p2pkh_address():
    """Asset address standing for the P2PKH script over PUBKEY_HASH."""
    return AssetAddress.from_type_and_payload(1, PUBKEY_HASH, NETWORK_ID)


@pytest.fixture
def lock_script_hash_address():
    return AssetAddress.from_lock_script_hash("12" * 20, NETWORK_ID)


@pytest.fixture
def signature():
    return SIGNATURE


@pytest.fixture
def out_point_a(core):
    """50 units of asset A at TX_ID_1:0."""
    return core.create_asset_out_point(
        transaction_id=TX_ID_1, index=0, asset_type=ASSET_TYPE_A, amount=50,
    )


@pytest.fixture
def out_point_b(core):
    """100 units of asset B at TX_ID_2:1."""
    return core.create_asset_out_point(
        transaction_id=TX_ID_2, index=1, asset_type=ASSET_TYPE_B, amount=100,
    )


@pytest.fixture
def order(core, out_point_a, p2pkh_address):
    """Sell up to 50 A for 100 B, no fee leg."""
    return core.create_order(
        asset_type_from=ASSET_TYPE_A,
        asset_type_to=ASSET_TYPE_B,
        asset_amount_from=50,
        asset_amount_to=100,
        origin_outputs=[out_point_a],
        expiration=1_000_000,
        recipient_from=p2pkh_address,
    )


@pytest.fixture
def zero_h160():
    return H160.zero()


@pytest.fixture
def zero_h256():
    return H256.zero()
