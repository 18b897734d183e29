"""
Binding of an Order to the transfer that (partially) fills it.
"""

from __future__ import annotations
from typing import Sequence, Set, Tuple

from pydantic import Field

from ..primitives import H256, U64
from ..runtime.errors import OrderLinkError
from .asset_outputs import AssetTransferOutput
from .asset_transfer_input import AssetTransferInput
from .base import CoreModel
from .order import Order


class OrderOnTransfer(CoreModel):
    """
    ``spent_amount`` of ``order`` is filled by the enclosing transfer's
    inputs at ``input_indices`` and outputs at ``output_indices``.

    Built before the transfer exists, so index bounds are not checked here;
    ``verify_against`` runs when the transfer is assembled.
    """

    order: Order
    spent_amount: U64
    input_indices: Tuple[int, ...] = Field(default=())
    output_indices: Tuple[int, ...] = Field(default=())

    def verify_against(
        self,
        inputs: Sequence[AssetTransferInput],
        outputs: Sequence[AssetTransferOutput],
        field: str = "order",
    ) -> None:
        """
        Check this binding against a transfer's inputs and outputs.

        Raises:
            OrderLinkError: an index is out of bounds or repeated, the spent
                amount does not fit the order, or an input/output holds an asset
                type outside the order
        """
        order = self.order
        if self.spent_amount.is_zero():
            raise OrderLinkError(f"{field}.spent_amount must be larger than 0",
                                 field=f"{field}.spent_amount", value=self.spent_amount)
        if self.spent_amount > order.asset_amount_from:
            raise OrderLinkError(
                f"{field}.spent_amount {self.spent_amount} exceeds the order's "
                f"asset_amount_from {order.asset_amount_from}",
                field=f"{field}.spent_amount", value=self.spent_amount,
            )
        if not self.input_indices:
            raise OrderLinkError(f"{field}.input_indices must not be empty", field=f"{field}.input_indices")

        _check_indices(self.input_indices, len(inputs), f"{field}.input_indices", "inputs")
        _check_indices(self.output_indices, len(outputs), f"{field}.output_indices", "outputs")

        input_types: Set[H256] = {order.asset_type_from, order.asset_type_fee}
        output_types: Set[H256] = {order.asset_type_from, order.asset_type_to, order.asset_type_fee}

        for i in self.input_indices:
            prev_out = inputs[i].prev_out
            if prev_out.asset_type not in input_types:
                raise OrderLinkError(
                    f"inputs[{i}] holds asset type {prev_out.asset_type} which is not spent by {field}",
                    field=f"{field}.input_indices", value=i,
                )
        for i in self.output_indices:
            if outputs[i].asset_type not in output_types:
                raise OrderLinkError(
                    f"outputs[{i}] holds asset type {outputs[i].asset_type} which is not part of {field}",
                    field=f"{field}.output_indices", value=i,
                )


def _check_indices(indices: Tuple[int, ...], length: int, field: str, target: str) -> None:
    seen: Set[int] = set()
    for position, index in enumerate(indices):
        if index >= length:
            raise OrderLinkError(
                f"{field}[{position}] = {index} is out of bounds for {length} {target}",
                field=f"{field}[{position}]", value=index,
            )
        if index in seen:
            raise OrderLinkError(f"{field} repeats index {index}", field=f"{field}[{position}]", value=index)
        seen.add(index)
