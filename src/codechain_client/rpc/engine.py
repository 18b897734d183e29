"""
``engine_*`` RPC methods.
"""

from __future__ import annotations
from typing import Any, List, Optional, Sequence
import re

import rlp
from rlp.exceptions import RLPException

from ..primitives import U64, PlatformAddress
from ..runtime.errors import EncodingError, RangeError, RpcResultError
from .client import Rpc

_HEX_RESULT_RE = re.compile(r"^([A-Fa-f0-9]|\s)*$")


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class EngineRpc:
    """Consensus engine queries decoded into primitive values."""

    def __init__(self, rpc: Rpc, fallback_servers: Optional[Sequence[str]] = None):
        self.rpc = rpc
        self.fallback_servers = None if fallback_servers is None else list(fallback_servers)

    async def _call(self, method: str, params: List[Any]) -> Any:
        return await self.rpc.send_rpc_request(method, params, fallback_servers=self.fallback_servers)

    async def get_coinbase(self) -> Optional[PlatformAddress]:
        """Address receiving block rewards, or None if unset."""
        result = await self._call("engine_getCoinbase", [])
        if result is None:
            return None
        try:
            return PlatformAddress.from_string(result)
        except RangeError as e:
            raise RpcResultError(
                f"Expected engine_getCoinbase to return a PlatformAddress string or None, "
                f"but an error occurred: {e}",
                method="engine_getCoinbase", cause=e,
            )

    async def get_block_reward(self) -> U64:
        result = await self._call("engine_getBlockReward", [])
        try:
            return U64.ensure(result)
        except RangeError as e:
            raise RpcResultError(
                f"Expected engine_getBlockReward to return a U64, but an error occurred: {e}",
                method="engine_getBlockReward", cause=e,
            )

    async def get_recommended_confirmation(self) -> int:
        result = await self._call("engine_getRecommendedConfirmation", [])
        if not isinstance(result, int) or isinstance(result, bool):
            raise RpcResultError(
                f"Expected engine_getRecommendedConfirmation to return a number but it returned {result!r}",
                method="engine_getRecommendedConfirmation",
            )
        return result

    async def get_custom_action_data(
        self,
        handler_id: int,
        key_fragments: Sequence[Any],
        block_number: Optional[int] = None,
    ) -> Optional[str]:
        """
        Data stored by a custom action handler.

        Args:
            handler_id: Id of the custom action handler
            key_fragments: Key parts, RLP-encoded as a list before sending
            block_number: Block to read at; latest when None

        Returns:
            Hex string, or None when nothing is stored under the key

        Raises:
            RangeError: handler_id or block_number is not a non-negative integer
            EncodingError: a key fragment has no RLP encoding
            RpcResultError: The node returned something other than hex or null
        """
        if not _is_non_negative_int(handler_id):
            raise RangeError(
                f"Expected handler_id to be a non-negative integer but found {handler_id!r}",
                field="handler_id", value=handler_id,
            )
        if block_number is not None and not _is_non_negative_int(block_number):
            raise RangeError(
                f"Expected block_number to be a non-negative integer but found {block_number!r}",
                field="block_number", value=block_number,
            )
        try:
            encoded_key = "0x" + rlp.encode(list(key_fragments)).hex()
        except (RLPException, TypeError) as e:
            raise EncodingError(
                f"Cannot RLP-encode key_fragments {key_fragments!r}: {e}",
                details={"field": "key_fragments"}, cause=e,
            )
        result = await self._call("engine_getCustomActionData", [handler_id, encoded_key, block_number])
        if result is None:
            return None
        if isinstance(result, str) and _HEX_RESULT_RE.match(result):
            return result
        raise RpcResultError(
            f"Expected engine_getCustomActionData to return a hex string or None but it returned {result!r}",
            method="engine_getCustomActionData",
        )
