"""
Type-level description of an asset.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple

from pydantic import Field

from ..primitives import H256, U64, PlatformAddress
from .base import CoreModel


class AssetPoolEntry(CoreModel):
    """Reserve of another asset type backing a composed asset."""

    asset_type: H256
    amount: U64


class AssetScheme(CoreModel):
    """
    Supply and authority rules shared by every unit of one asset type.

    Created by MintAsset/ComposeAsset and only ever replaced by a
    ChangeAssetScheme transaction. ``approver`` must sign every transfer of
    the asset; ``administrator`` may move it without satisfying its lock
    script.
    """

    network_id: str = Field(min_length=2, max_length=2)
    shard_id: int = Field(ge=0, le=0xFFFF)
    metadata: str
    amount: U64
    approver: Optional[PlatformAddress] = None
    administrator: Optional[PlatformAddress] = None
    pool: Tuple[AssetPoolEntry, ...] = ()

    @classmethod
    def from_json(cls, data: Dict[str, Any], network_id: Optional[str] = None,
                  shard_id: Optional[int] = None) -> AssetScheme:
        """
        Build a scheme from node JSON.

        The node omits the network and shard the scheme lives in; pass them
        when the payload does not carry them.
        """
        payload = dict(data)
        if network_id is not None:
            payload["networkId"] = network_id
        if shard_id is not None:
            payload["shardId"] = shard_id
        return cls.model_validate(payload)
