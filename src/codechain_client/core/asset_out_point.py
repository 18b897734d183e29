"""
Reference to an asset output created by an earlier transaction.
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple

from pydantic import Field

from ..primitives import H160, H256, U64
from .base import CoreModel, HexBytes


class AssetOutPoint(CoreModel):
    """
    Points at output ``index`` of transaction ``transaction_id``.

    ``lock_script_hash`` and ``parameters`` are only carried for outputs whose
    spender must rebuild the exact preimage (wrapped CCC outputs).
    """

    transaction_id: H256
    index: int = Field(ge=0)
    asset_type: H256
    amount: U64
    lock_script_hash: Optional[H160] = None
    parameters: Optional[Tuple[HexBytes, ...]] = None

    def to_encode_object(self) -> List[Any]:
        return [self.transaction_id.to_bytes(), self.index, self.asset_type.to_bytes(), self.amount.value]
