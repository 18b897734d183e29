"""
Asset instances: a quantity of one asset type sitting in one output.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from pydantic import Field

from ..primitives import H160, H256, U64
from .asset_out_point import AssetOutPoint
from .asset_outputs import AssetTransferOutput
from .asset_transfer_input import AssetTransferInput, Timelock
from .base import CoreModel, HexBytes
from .destination import resolve_destination
from .transactions import TransferAsset
from .validation import (
    validate_amount,
    validate_approvals,
    validate_network_id,
    validate_timelock,
)


class Asset(CoreModel):
    """
    ``amount`` of ``asset_type`` held by output ``index`` of
    ``transaction_id``, locked by ``lock_script_hash``/``parameters``.
    """

    asset_type: H256
    lock_script_hash: H160
    parameters: Tuple[HexBytes, ...] = ()
    amount: U64
    transaction_id: H256
    index: int = Field(ge=0)
    order_hash: Optional[H256] = None

    @property
    def out_point(self) -> AssetOutPoint:
        return AssetOutPoint(
            transaction_id=self.transaction_id,
            index=self.index,
            asset_type=self.asset_type,
            amount=self.amount,
            lock_script_hash=self.lock_script_hash,
            parameters=self.parameters,
        )

    def create_transfer_input(self, timelock: Optional[Any] = None) -> AssetTransferInput:
        """Input spending exactly this asset's output."""
        return AssetTransferInput(prev_out=self.out_point, timelock=validate_timelock(timelock))

    def create_transfer_transaction(
        self,
        *,
        network_id: str,
        recipients: Sequence[Mapping[str, Any]] = (),
        timelock: Optional[Timelock] = None,
        approvals: Optional[Sequence[str]] = None,
    ) -> TransferAsset:
        """
        Transfer spending this asset to ``recipients``.

        Each recipient is a mapping with ``address`` (an AssetAddress) and
        ``amount``; outputs keep this asset's type.
        """
        outputs = []
        for i, recipient in enumerate(recipients):
            destination = resolve_destination(
                recipient.get("address"), recipient_field=f"recipients[{i}].address"
            )
            lock_script_hash, parameters = destination.lock_script()
            outputs.append(AssetTransferOutput(
                lock_script_hash=lock_script_hash,
                parameters=parameters,
                asset_type=self.asset_type,
                amount=validate_amount(recipient.get("amount"), f"recipients[{i}].amount"),
            ))
        return TransferAsset(
            network_id=validate_network_id(network_id),
            inputs=(self.create_transfer_input(timelock),),
            outputs=tuple(outputs),
            approvals=validate_approvals(approvals),
        )

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> Asset:
        return cls.model_validate(data)
