"""
Exchange orders embedded in asset transfers.

An order says: "I give up to ``asset_amount_from`` of ``asset_type_from``,
sourced from ``origin_outputs``, for ``asset_amount_to`` of
``asset_type_to`` (plus ``asset_amount_fee`` of ``asset_type_fee``) at that
rate, until ``expiration``." The "to" asset is locked to
``lock_script_hash_from``/``parameters_from``; the fee goes to
``lock_script_hash_fee``/``parameters_fee``.
"""

from __future__ import annotations
from typing import Any, Dict, List, Tuple

import rlp

from ..primitives import H160, H256, U64, blake256
from ..runtime.errors import RangeError
from .asset_out_point import AssetOutPoint
from .base import CoreModel, HexBytes


class Order(CoreModel):
    asset_type_from: H256
    asset_type_to: H256
    asset_type_fee: H256 = H256.zero()
    asset_amount_from: U64
    asset_amount_to: U64
    asset_amount_fee: U64 = U64(0)
    origin_outputs: Tuple[AssetOutPoint, ...]
    expiration: U64
    lock_script_hash_from: H160
    parameters_from: Tuple[HexBytes, ...]
    lock_script_hash_fee: H160 = H160.zero()
    parameters_fee: Tuple[HexBytes, ...] = ()

    def has_fee(self) -> bool:
        return not self.asset_amount_fee.is_zero()

    def to_encode_object(self) -> List[Any]:
        """Hashes as raw bytes and quantities as ints, ready for ``rlp.encode``."""
        return [
            self.asset_type_from.to_bytes(),
            self.asset_type_to.to_bytes(),
            self.asset_type_fee.to_bytes(),
            self.asset_amount_from.value,
            self.asset_amount_to.value,
            self.asset_amount_fee.value,
            [out_point.to_encode_object() for out_point in self.origin_outputs],
            self.expiration.value,
            self.lock_script_hash_from.to_bytes(),
            list(self.parameters_from),
            self.lock_script_hash_fee.to_bytes(),
            list(self.parameters_fee),
        ]

    def rlp_bytes(self) -> bytes:
        return rlp.encode(self.to_encode_object())

    def hash(self) -> H256:
        return H256(blake256(self.rlp_bytes()))

    def consume(self, quantity: Any) -> Order:
        """
        The order left over after ``quantity`` of the from-asset is spent.

        The remaining to/fee amounts keep the original ratio, so the remainder
        must divide exactly.

        Raises:
            RangeError: quantity exceeds the order or breaks the ratio
        """
        spent = U64.ensure(quantity)
        amount_from = self.asset_amount_from.value
        if spent > self.asset_amount_from:
            raise RangeError(
                f"The given quantity is too big: {spent} > {self.asset_amount_from}",
                field="quantity", value=quantity,
            )
        if amount_from == 0:
            raise RangeError("Cannot consume an order with zero asset_amount_from", field="quantity", value=quantity)
        remain_from = amount_from - spent.value
        if (remain_from * self.asset_amount_to.value) % amount_from != 0:
            raise RangeError(
                f"The given quantity does not fit to the ratio: "
                f"{self.asset_amount_from} : {self.asset_amount_to}",
                field="quantity", value=quantity,
            )
        remain_to = remain_from * self.asset_amount_to.value // amount_from
        remain_fee = remain_from * self.asset_amount_fee.value // amount_from
        return self.model_copy(update={
            "asset_amount_from": U64(remain_from),
            "asset_amount_to": U64(remain_to),
            "asset_amount_fee": U64(remain_fee),
        })

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> Order:
        return cls.model_validate(data)
