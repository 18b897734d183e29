"""
Outputs produced by transfer and mint transactions.

Both output kinds store their destination in canonical form: a lock script
hash plus the parameters passed to that script. Address destinations are
normalized before construction (see ``destination.py``).
"""

from __future__ import annotations
from typing import Optional, Tuple

from ..primitives import H160, H256, U64
from .base import CoreModel, HexBytes


class AssetTransferOutput(CoreModel):
    lock_script_hash: H160
    parameters: Tuple[HexBytes, ...] = ()
    asset_type: H256
    amount: U64


class AssetMintOutput(CoreModel):
    """``amount`` of None means unlimited supply, fixed later by the scheme."""

    lock_script_hash: H160
    parameters: Tuple[HexBytes, ...] = ()
    amount: Optional[U64] = None
