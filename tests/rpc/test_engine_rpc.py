"""
Tests for engine_* RPC methods.
"""

from unittest.mock import AsyncMock

import pytest

from codechain_client.primitives import U64, PlatformAddress
from codechain_client.rpc import EngineRpc, Rpc
from codechain_client.runtime.errors import EncodingError, RangeError, RpcResultError

from conftest import ACCOUNT_ID


@pytest.fixture
def rpc():
    """Rpc whose transport is replaced by an AsyncMock."""
    client = Rpc("http://localhost:8080", fallback_servers=["http://backup:8080"])
    client.send_rpc_request = AsyncMock()
    return client


@pytest.fixture
def engine(rpc):
    return EngineRpc(rpc)


class TestGetCoinbase:
    """Test engine_getCoinbase."""

    @pytest.mark.asyncio
    async def test_address(self, rpc, engine):
        address = PlatformAddress.from_account_id(ACCOUNT_ID, "tc")
        rpc.send_rpc_request.return_value = address.value

        assert await engine.get_coinbase() == address
        rpc.send_rpc_request.assert_awaited_once_with("engine_getCoinbase", [], fallback_servers=None)

    @pytest.mark.asyncio
    async def test_unset(self, rpc, engine):
        rpc.send_rpc_request.return_value = None
        assert await engine.get_coinbase() is None

    @pytest.mark.asyncio
    async def test_unexpected(self, rpc, engine):
        rpc.send_rpc_request.return_value = "not-an-address"
        with pytest.raises(RpcResultError) as exc_info:
            await engine.get_coinbase()
        assert exc_info.value.method == "engine_getCoinbase"


class TestGetBlockReward:
    """Test engine_getBlockReward."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", [1000, "0x3e8", "1000"])
    async def test_reward(self, rpc, engine, result):
        rpc.send_rpc_request.return_value = result
        assert await engine.get_block_reward() == U64(1000)

    @pytest.mark.asyncio
    async def test_unexpected(self, rpc, engine):
        rpc.send_rpc_request.return_value = -1
        with pytest.raises(RpcResultError):
            await engine.get_block_reward()


class TestGetRecommendedConfirmation:
    """Test engine_getRecommendedConfirmation."""

    @pytest.mark.asyncio
    async def test_number(self, rpc, engine):
        rpc.send_rpc_request.return_value = 5
        assert await engine.get_recommended_confirmation() == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", ["5", None, True])
    async def test_not_a_number(self, rpc, engine, result):
        rpc.send_rpc_request.return_value = result
        with pytest.raises(RpcResultError):
            await engine.get_recommended_confirmation()


class TestGetCustomActionData:
    """Test engine_getCustomActionData."""

    @pytest.mark.asyncio
    async def test_key_is_rlp_encoded(self, rpc, engine):
        """Test key fragments are sent as an RLP list in hex."""
        rpc.send_rpc_request.return_value = "c3"
        result = await engine.get_custom_action_data(2, ["dog"], 10)

        assert result == "c3"
        rpc.send_rpc_request.assert_awaited_once_with(
            "engine_getCustomActionData", [2, "0xc483646f67", 10], fallback_servers=None,
        )

    @pytest.mark.asyncio
    async def test_mixed_fragments(self, rpc, engine):
        """Test bytes, ints and nested lists are encoded with their own RLP kinds."""
        rpc.send_rpc_request.return_value = None
        await engine.get_custom_action_data(1, [b"\x01", 1024, ["x"]])
        rpc.send_rpc_request.assert_awaited_once_with(
            "engine_getCustomActionData", [1, "0xc601820400c178", None], fallback_servers=None,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fragment", [-1, 1.5, object()])
    async def test_unencodable_fragment(self, rpc, engine, fragment):
        with pytest.raises(EncodingError) as exc_info:
            await engine.get_custom_action_data(1, [fragment])
        assert exc_info.value.details["field"] == "key_fragments"
        rpc.send_rpc_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_latest_block(self, rpc, engine):
        rpc.send_rpc_request.return_value = None
        assert await engine.get_custom_action_data(1, []) is None
        rpc.send_rpc_request.assert_awaited_once_with(
            "engine_getCustomActionData", [1, "0xc0", None], fallback_servers=None,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("handler_id", [-1, "1", 1.0, True])
    async def test_bad_handler_id(self, rpc, engine, handler_id):
        with pytest.raises(RangeError) as exc_info:
            await engine.get_custom_action_data(handler_id, [])
        assert exc_info.value.field == "handler_id"
        rpc.send_rpc_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_block_number(self, rpc, engine):
        with pytest.raises(RangeError) as exc_info:
            await engine.get_custom_action_data(1, [], -3)
        assert exc_info.value.field == "block_number"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", ["0xzz", 12, {"data": "00"}])
    async def test_unexpected_result(self, rpc, engine, result):
        rpc.send_rpc_request.return_value = result
        with pytest.raises(RpcResultError):
            await engine.get_custom_action_data(1, [])


class TestEngineFallbacks:
    """Test the engine's own fallback servers."""

    @pytest.mark.asyncio
    async def test_engine_fallbacks_forwarded(self, rpc):
        engine = EngineRpc(rpc, fallback_servers=["http://engine-backup:8080"])
        rpc.send_rpc_request.return_value = 3
        await engine.get_recommended_confirmation()
        rpc.send_rpc_request.assert_awaited_once_with(
            "engine_getRecommendedConfirmation", [], fallback_servers=["http://engine-backup:8080"],
        )
