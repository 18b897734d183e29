"""
Unsigned transaction variants.

Every variant is a frozen model tagged by ``type`` and stamped with the
network it is meant for. ``AnyTransaction`` is the discriminated union used
to parse node JSON back into the matching variant.
"""

from __future__ import annotations
from typing import Annotated, Any, Dict, Literal, Optional, Sequence, Tuple, Union
import logging

from pydantic import Field, TypeAdapter

from ..primitives import H160, H256, H512, U64, PlatformAddress
from .asset_outputs import AssetMintOutput, AssetTransferOutput
from .asset_scheme import AssetPoolEntry, AssetScheme
from .asset_transfer_input import AssetTransferInput
from .base import CoreModel, HexBytes, Signature
from .order_on_transfer import OrderOnTransfer

logger = logging.getLogger(__name__)

ShardId = Annotated[int, Field(ge=0, le=0xFFFF)]


class Transaction(CoreModel):
    """Fields shared by every variant."""

    type: str
    network_id: str = Field(min_length=2, max_length=2)


# Platform (account model) actions

class Pay(Transaction):
    type: Literal["pay"] = "pay"
    recipient: PlatformAddress
    amount: U64


class SetRegularKey(Transaction):
    type: Literal["setRegularKey"] = "setRegularKey"
    key: H512


class CreateShard(Transaction):
    type: Literal["createShard"] = "createShard"


class SetShardOwners(Transaction):
    type: Literal["setShardOwners"] = "setShardOwners"
    shard_id: ShardId
    owners: Tuple[PlatformAddress, ...]


class SetShardUsers(Transaction):
    type: Literal["setShardUsers"] = "setShardUsers"
    shard_id: ShardId
    users: Tuple[PlatformAddress, ...]


class WrapCCC(Transaction):
    """Moves ``amount`` CCC from the signer into a wrapped-CCC asset output."""

    type: Literal["wrapCCC"] = "wrapCCC"
    shard_id: ShardId
    lock_script_hash: H160
    parameters: Tuple[HexBytes, ...] = ()
    amount: U64


class SecretAuthorization(CoreModel):
    """Signed locally later with the key behind ``secret``."""

    kind: Literal["secret"] = "secret"
    secret: H256 = Field(repr=False)


class SignatureAuthorization(CoreModel):
    """Signature precomputed by ``certifier``."""

    kind: Literal["signature"] = "signature"
    signature: Signature
    certifier: Optional[PlatformAddress] = None


Authorization = Annotated[
    Union[SecretAuthorization, SignatureAuthorization],
    Field(discriminator="kind"),
]


class Store(Transaction):
    """Stores ``content`` on chain, certified by the authorization."""

    type: Literal["store"] = "store"
    content: str
    authorization: Authorization


class Remove(Transaction):
    """Removes text stored by the transaction ``hash``."""

    type: Literal["remove"] = "remove"
    hash: H256
    authorization: Authorization


class Custom(Transaction):
    """Opaque payload handled by the action handler ``handler_id``."""

    type: Literal["custom"] = "custom"
    handler_id: U64
    payload: HexBytes


# Asset (UTXO model) transactions

class MintAsset(Transaction):
    type: Literal["mintAsset"] = "mintAsset"
    shard_id: ShardId
    metadata: str
    approver: Optional[PlatformAddress] = None
    administrator: Optional[PlatformAddress] = None
    output: AssetMintOutput
    approvals: Tuple[Signature, ...] = ()

    def get_asset_scheme(self) -> AssetScheme:
        """Scheme created by this mint; unlimited supply becomes U64 max."""
        amount = self.output.amount
        return AssetScheme(
            network_id=self.network_id,
            shard_id=self.shard_id,
            metadata=self.metadata,
            amount=amount if amount is not None else U64(U64.max_value()),
            approver=self.approver,
            administrator=self.administrator,
        )


class TransferAsset(Transaction):
    """
    Spends ``inputs`` into ``outputs``, destroys ``burns`` and fills ``orders``.

    Orders are authored before the transfer exists; ``Core`` and the
    ``add_*`` helpers run ``verify_orders`` once the transfer is assembled.
    """

    type: Literal["transferAsset"] = "transferAsset"
    burns: Tuple[AssetTransferInput, ...] = ()
    inputs: Tuple[AssetTransferInput, ...] = ()
    outputs: Tuple[AssetTransferOutput, ...] = ()
    orders: Tuple[OrderOnTransfer, ...] = ()
    approvals: Tuple[Signature, ...] = ()

    def verify_orders(self) -> None:
        """
        Raises:
            OrderLinkError: an order does not fit ``inputs``/``outputs``
        """
        for i, order in enumerate(self.orders):
            order.verify_against(self.inputs, self.outputs, f"orders[{i}]")

    def _extend(self, **update: Sequence[Any]) -> TransferAsset:
        fields = {
            "network_id": self.network_id,
            "burns": self.burns,
            "inputs": self.inputs,
            "outputs": self.outputs,
            "orders": self.orders,
            "approvals": self.approvals,
        }
        for name, items in update.items():
            fields[name] = fields[name] + tuple(items)
        tx = TransferAsset(**fields)
        tx.verify_orders()
        return tx

    def add_burns(self, *burns: AssetTransferInput) -> TransferAsset:
        return self._extend(burns=burns)

    def add_inputs(self, *inputs: AssetTransferInput) -> TransferAsset:
        return self._extend(inputs=inputs)

    def add_outputs(self, *outputs: AssetTransferOutput) -> TransferAsset:
        return self._extend(outputs=outputs)

    def add_order(self, order: OrderOnTransfer) -> TransferAsset:
        return self._extend(orders=(order,))


class ChangeAssetScheme(Transaction):
    """Replaces the metadata and authorities of ``asset_type``."""

    type: Literal["changeAssetScheme"] = "changeAssetScheme"
    asset_type: H256
    metadata: str
    approver: Optional[PlatformAddress] = None
    administrator: Optional[PlatformAddress] = None
    approvals: Tuple[Signature, ...] = ()


class ComposeAsset(Transaction):
    type: Literal["composeAsset"] = "composeAsset"
    shard_id: ShardId
    metadata: str
    approver: Optional[PlatformAddress] = None
    administrator: Optional[PlatformAddress] = None
    inputs: Tuple[AssetTransferInput, ...]
    output: AssetMintOutput
    approvals: Tuple[Signature, ...] = ()

    def get_asset_scheme(self) -> AssetScheme:
        """
        Scheme of the composed asset.

        The pool lists each consumed asset type once, in order of first
        appearance among the inputs, with the summed amount.
        """
        totals: Dict[H256, U64] = {}
        for item in self.inputs:
            prev_out = item.prev_out
            current = totals.get(prev_out.asset_type, U64(0))
            totals[prev_out.asset_type] = current.plus(prev_out.amount)
        amount = self.output.amount
        return AssetScheme(
            network_id=self.network_id,
            shard_id=self.shard_id,
            metadata=self.metadata,
            amount=amount if amount is not None else U64(U64.max_value()),
            approver=self.approver,
            administrator=self.administrator,
            pool=tuple(AssetPoolEntry(asset_type=t, amount=a) for t, a in totals.items()),
        )


class DecomposeAsset(Transaction):
    type: Literal["decomposeAsset"] = "decomposeAsset"
    input: AssetTransferInput
    outputs: Tuple[AssetTransferOutput, ...] = ()
    approvals: Tuple[Signature, ...] = ()


class UnwrapCCC(Transaction):
    """Burns a wrapped-CCC asset and credits the CCC back to the signer."""

    type: Literal["unwrapCCC"] = "unwrapCCC"
    burn: AssetTransferInput
    approvals: Tuple[Signature, ...] = ()


AnyTransaction = Annotated[
    Union[
        Pay,
        SetRegularKey,
        CreateShard,
        SetShardOwners,
        SetShardUsers,
        WrapCCC,
        Store,
        Remove,
        Custom,
        MintAsset,
        TransferAsset,
        ChangeAssetScheme,
        ComposeAsset,
        DecomposeAsset,
        UnwrapCCC,
    ],
    Field(discriminator="type"),
]

_transaction_adapter: TypeAdapter = TypeAdapter(AnyTransaction)


def transaction_from_json(data: Dict[str, Any]) -> Transaction:
    """
    Parse a transaction dict produced by ``to_json``.

    Raises:
        pydantic.ValidationError: the payload does not describe a known variant
        OrderLinkError: a transfer's orders do not fit its inputs/outputs
    """
    tx = _transaction_adapter.validate_python(data)
    if isinstance(tx, TransferAsset):
        tx.verify_orders()
    logger.debug(f"Parsed {tx.type} transaction for network {tx.network_id}")
    return tx
