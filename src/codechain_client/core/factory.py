"""
Validated construction of transactions and the values they carry.

``Core`` is the single entry point for building transactions from loosely
typed parameters (hex strings, ints, address strings, already constructed
values). Every ``create_*`` method validates all of its parameters before
building anything and raises a ValidationError subclass naming the
offending parameter; nothing is ever partially constructed.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union
import logging

from ..primitives import H160, H256, H512, U64, AssetAddress, PlatformAddress
from ..runtime.errors import MissingFieldError, ShapeError
from .asset import Asset
from .asset_out_point import AssetOutPoint
from .asset_outputs import AssetMintOutput, AssetTransferOutput
from .asset_scheme import AssetScheme
from .asset_transfer_input import AssetTransferInput, Timelock
from .destination import resolve_destination
from .order import Order
from .order_on_transfer import OrderOnTransfer
from .signed_transaction import SignedTransaction
from .transactions import (
    ChangeAssetScheme,
    ComposeAsset,
    CreateShard,
    Custom,
    DecomposeAsset,
    MintAsset,
    Pay,
    Remove,
    SecretAuthorization,
    SetRegularKey,
    SetShardOwners,
    SetShardUsers,
    SignatureAuthorization,
    Store,
    Transaction,
    TransferAsset,
    UnwrapCCC,
    WrapCCC,
)
from .validation import (
    SchemeDescriptor,
    normalize_scheme,
    validate_amount,
    validate_approvals,
    validate_bytes,
    validate_handler_id,
    validate_hash,
    validate_index,
    validate_indices,
    validate_instance,
    validate_instances,
    validate_metadata,
    validate_network_id,
    validate_optional_platform_address,
    validate_out_point,
    validate_out_points,
    validate_parameters,
    validate_platform_address,
    validate_platform_addresses,
    validate_pool,
    validate_shard_id,
    validate_signature,
    validate_timelock,
)

logger = logging.getLogger(__name__)

Authorization = Union[SecretAuthorization, SignatureAuthorization]


class Core:
    """
    Transaction factory bound to one network.

    Args:
        network_id: Two-character network id stamped on every transaction
            unless a call overrides it. Most ``create_*`` methods take a
            ``network_id`` keyword; mint, compose and change-asset-scheme
            take it from the scheme's ``network_id`` instead, and that
            value also becomes the transaction's network id.
    """

    def __init__(self, network_id: str = "tc"):
        self.network_id = validate_network_id(network_id)

    def _network(self, network_id: Optional[str]) -> str:
        if network_id is None:
            return self.network_id
        return validate_network_id(network_id)

    def _created(self, tx: Transaction) -> Transaction:
        logger.debug(f"Created {tx.type} transaction for network {tx.network_id}")
        return tx

    # Platform transactions

    def create_pay_transaction(self, *, recipient: Union[PlatformAddress, str], amount: Any,
                               network_id: Optional[str] = None) -> Pay:
        """
        Pay ``amount`` CCC from the signer to ``recipient``.

        Raises:
            RangeError: recipient is not a PlatformAddress or amount is not a U64
        """
        return self._created(Pay(
            network_id=self._network(network_id),
            recipient=validate_platform_address(recipient, "recipient"),
            amount=validate_amount(amount, "amount"),
        ))

    def create_set_regular_key_transaction(self, *, key: Union[H512, str],
                                           network_id: Optional[str] = None) -> SetRegularKey:
        return self._created(SetRegularKey(
            network_id=self._network(network_id),
            key=validate_hash(H512, key, "key"),
        ))

    def create_create_shard_transaction(self, *, network_id: Optional[str] = None) -> CreateShard:
        return self._created(CreateShard(network_id=self._network(network_id)))

    def create_set_shard_owners_transaction(self, *, shard_id: int, owners: Sequence[Any],
                                            network_id: Optional[str] = None) -> SetShardOwners:
        return self._created(SetShardOwners(
            network_id=self._network(network_id),
            shard_id=validate_shard_id(shard_id, "shard_id"),
            owners=validate_platform_addresses(owners, "owners"),
        ))

    def create_set_shard_users_transaction(self, *, shard_id: int, users: Sequence[Any],
                                           network_id: Optional[str] = None) -> SetShardUsers:
        return self._created(SetShardUsers(
            network_id=self._network(network_id),
            shard_id=validate_shard_id(shard_id, "shard_id"),
            users=validate_platform_addresses(users, "users"),
        ))

    def create_wrap_ccc_transaction(
        self,
        *,
        shard_id: int,
        amount: Any,
        recipient: Optional[Union[AssetAddress, str]] = None,
        lock_script_hash: Optional[Union[H160, str]] = None,
        parameters: Optional[Sequence[bytes]] = None,
        network_id: Optional[str] = None,
    ) -> WrapCCC:
        """
        Wrap ``amount`` CCC into an asset output in shard ``shard_id``.

        The output goes either to ``recipient`` or to the explicit
        ``lock_script_hash``/``parameters`` pair, never both.

        Raises:
            ShapeError: both or neither destination shapes were given
            MissingFieldError: only half of the script pair was given
            RangeError: a field failed to parse
        """
        shard_id = validate_shard_id(shard_id, "shard_id")
        amount = validate_amount(amount, "amount")
        destination = resolve_destination(recipient, lock_script_hash, parameters)
        lock_script_hash, parameters = destination.lock_script()
        return self._created(WrapCCC(
            network_id=self._network(network_id),
            shard_id=shard_id,
            lock_script_hash=lock_script_hash,
            parameters=parameters,
            amount=amount,
        ))

    def _authorization(self, secret: Any, signature: Any, certifier: Any,
                       certifier_required: bool) -> Authorization:
        has_secret = secret is not None
        has_signature = signature is not None or certifier is not None
        if has_secret and has_signature:
            raise ShapeError(
                "Expected either secret or signature with certifier but found both",
                field="secret",
            )
        if has_secret:
            return SecretAuthorization(secret=validate_hash(H256, secret, "secret"))
        if not has_signature:
            raise ShapeError("Expected either secret or signature but found neither", field="secret")
        if signature is None:
            raise MissingFieldError("certifier was given without signature", field="signature")
        if certifier is None and certifier_required:
            raise MissingFieldError("signature was given without certifier", field="certifier")
        return SignatureAuthorization(
            signature=validate_signature(signature, "signature"),
            certifier=validate_optional_platform_address(certifier, "certifier"),
        )

    def create_store_transaction(
        self,
        *,
        content: str,
        secret: Optional[Union[H256, str]] = None,
        certifier: Optional[Union[PlatformAddress, str]] = None,
        signature: Optional[str] = None,
        network_id: Optional[str] = None,
    ) -> Store:
        """
        Store ``content`` on chain.

        Authorized either by ``secret`` (signed later by the caller) or by a
        ``signature`` precomputed by ``certifier``.
        """
        content = validate_metadata(content, "content")
        authorization = self._authorization(secret, signature, certifier, certifier_required=True)
        return self._created(Store(
            network_id=self._network(network_id),
            content=content,
            authorization=authorization,
        ))

    def create_remove_transaction(
        self,
        *,
        hash: Union[H256, str],
        secret: Optional[Union[H256, str]] = None,
        signature: Optional[str] = None,
        certifier: Optional[Union[PlatformAddress, str]] = None,
        network_id: Optional[str] = None,
    ) -> Remove:
        """
        Remove the text stored by the transaction ``hash``.

        Authorized either by ``secret`` or by ``signature``; the certifier is
        optional since the node already knows who stored the text.
        """
        tx_hash = validate_hash(H256, hash, "hash")
        authorization = self._authorization(secret, signature, certifier, certifier_required=False)
        return self._created(Remove(
            network_id=self._network(network_id),
            hash=tx_hash,
            authorization=authorization,
        ))

    def create_custom_transaction(self, *, handler_id: int, payload: bytes,
                                  network_id: Optional[str] = None) -> Custom:
        return self._created(Custom(
            network_id=self._network(network_id),
            handler_id=validate_handler_id(handler_id, "handler_id"),
            payload=validate_bytes(payload, "payload"),
        ))

    # Asset values

    def create_asset_scheme(
        self,
        *,
        shard_id: int,
        metadata: str,
        amount: Any,
        approver: Optional[Union[PlatformAddress, str]] = None,
        administrator: Optional[Union[PlatformAddress, str]] = None,
        pool: Optional[Sequence[Any]] = None,
        network_id: Optional[str] = None,
    ) -> AssetScheme:
        """
        Build an AssetScheme.

        ``pool`` entries are AssetPoolEntry values or mappings with
        ``asset_type`` and ``amount``.
        """
        return AssetScheme(
            network_id=self._network(network_id),
            shard_id=validate_shard_id(shard_id, "shard_id"),
            metadata=validate_metadata(metadata, "metadata"),
            amount=validate_amount(amount, "amount"),
            approver=validate_optional_platform_address(approver, "approver"),
            administrator=validate_optional_platform_address(administrator, "administrator"),
            pool=validate_pool(pool, "pool"),
        )

    def create_asset_out_point(
        self,
        *,
        transaction_id: Union[H256, str],
        index: int,
        asset_type: Union[H256, str],
        amount: Any,
        lock_script_hash: Optional[Union[H160, str]] = None,
        parameters: Optional[Sequence[bytes]] = None,
    ) -> AssetOutPoint:
        return AssetOutPoint(
            transaction_id=validate_hash(H256, transaction_id, "transaction_id"),
            index=validate_index(index, "index"),
            asset_type=validate_hash(H256, asset_type, "asset_type"),
            amount=validate_amount(amount, "amount"),
            lock_script_hash=(
                None if lock_script_hash is None
                else validate_hash(H160, lock_script_hash, "lock_script_hash")
            ),
            parameters=None if parameters is None else validate_parameters(parameters, "parameters"),
        )

    def create_asset_transfer_input(
        self,
        *,
        asset_out_point: Union[AssetOutPoint, Mapping],
        timelock: Optional[Union[Timelock, Mapping]] = None,
        lock_script: Optional[bytes] = None,
        unlock_script: Optional[bytes] = None,
    ) -> AssetTransferInput:
        """
        Input spending ``asset_out_point``.

        ``asset_out_point`` is an AssetOutPoint or a mapping describing one
        (snake_case or camelCase keys). Scripts default to empty.
        """
        return AssetTransferInput(
            prev_out=validate_out_point(asset_out_point, "asset_out_point"),
            timelock=validate_timelock(timelock, "timelock"),
            lock_script=b"" if lock_script is None else validate_bytes(lock_script, "lock_script"),
            unlock_script=b"" if unlock_script is None else validate_bytes(unlock_script, "unlock_script"),
        )

    def create_asset_transfer_output(
        self,
        *,
        asset_type: Union[H256, str],
        amount: Any,
        recipient: Optional[Union[AssetAddress, str]] = None,
        lock_script_hash: Optional[Union[H160, str]] = None,
        parameters: Optional[Sequence[bytes]] = None,
    ) -> AssetTransferOutput:
        """
        Output of ``amount`` of ``asset_type``.

        An address ``recipient`` is normalized to its lock script hash and
        parameters; otherwise both of those must be given explicitly.
        """
        asset_type = validate_hash(H256, asset_type, "asset_type")
        amount = validate_amount(amount, "amount")
        destination = resolve_destination(recipient, lock_script_hash, parameters)
        lock_script_hash, parameters = destination.lock_script()
        return AssetTransferOutput(
            lock_script_hash=lock_script_hash,
            parameters=parameters,
            asset_type=asset_type,
            amount=amount,
        )

    def _mint_output(self, amount: Any, recipient: Any, lock_script_hash: Any,
                     parameters: Any) -> AssetMintOutput:
        destination = resolve_destination(recipient, lock_script_hash, parameters)
        lock_script_hash, parameters = destination.lock_script()
        return AssetMintOutput(
            lock_script_hash=lock_script_hash,
            parameters=parameters,
            amount=None if amount is None else validate_amount(amount, "scheme.amount"),
        )

    # Orders

    def create_order(
        self,
        *,
        asset_type_from: Union[H256, str],
        asset_type_to: Union[H256, str],
        asset_amount_from: Any,
        asset_amount_to: Any,
        origin_outputs: Sequence[Union[AssetOutPoint, Mapping]],
        expiration: Any,
        asset_type_fee: Optional[Union[H256, str]] = None,
        asset_amount_fee: Any = None,
        recipient_from: Optional[Union[AssetAddress, str]] = None,
        lock_script_hash_from: Optional[Union[H160, str]] = None,
        parameters_from: Optional[Sequence[bytes]] = None,
        recipient_fee: Optional[Union[AssetAddress, str]] = None,
        lock_script_hash_fee: Optional[Union[H160, str]] = None,
        parameters_fee: Optional[Sequence[bytes]] = None,
    ) -> Order:
        """
        Build an exchange order.

        The from-leg destination is exactly one of ``recipient_from`` or
        ``lock_script_hash_from`` with ``parameters_from``. The fee leg takes
        at most one shape; without one the fee goes to the zero lock script
        hash with no parameters. The fee asset type and amount default to the
        zero hash and zero.

        Raises:
            ShapeError: a leg was given both shapes, or the from leg neither
            MissingFieldError: half of a script pair, or of an origin output
            RangeError: a field failed to parse
            TypeMismatchError: origin_outputs is not a list of out-points
        """
        asset_type_from = validate_hash(H256, asset_type_from, "asset_type_from")
        asset_type_to = validate_hash(H256, asset_type_to, "asset_type_to")
        asset_type_fee = H256.zero() if asset_type_fee is None else validate_hash(
            H256, asset_type_fee, "asset_type_fee")
        asset_amount_from = validate_amount(asset_amount_from, "asset_amount_from")
        asset_amount_to = validate_amount(asset_amount_to, "asset_amount_to")
        asset_amount_fee = U64(0) if asset_amount_fee is None else validate_amount(
            asset_amount_fee, "asset_amount_fee")
        expiration = validate_amount(expiration, "expiration")
        origin_outputs = validate_out_points(origin_outputs, "origin_outputs")

        destination_from = resolve_destination(
            recipient_from, lock_script_hash_from, parameters_from,
            recipient_field="recipient_from",
            lock_script_hash_field="lock_script_hash_from",
            parameters_field="parameters_from",
        )
        destination_fee = resolve_destination(
            recipient_fee, lock_script_hash_fee, parameters_fee,
            recipient_field="recipient_fee",
            lock_script_hash_field="lock_script_hash_fee",
            parameters_field="parameters_fee",
            required=False,
        )
        lock_script_hash_from, parameters_from = destination_from.lock_script()
        if destination_fee is None:
            lock_script_hash_fee, parameters_fee = H160.zero(), ()
        else:
            lock_script_hash_fee, parameters_fee = destination_fee.lock_script()

        order = Order(
            asset_type_from=asset_type_from,
            asset_type_to=asset_type_to,
            asset_type_fee=asset_type_fee,
            asset_amount_from=asset_amount_from,
            asset_amount_to=asset_amount_to,
            asset_amount_fee=asset_amount_fee,
            origin_outputs=origin_outputs,
            expiration=expiration,
            lock_script_hash_from=lock_script_hash_from,
            parameters_from=parameters_from,
            lock_script_hash_fee=lock_script_hash_fee,
            parameters_fee=parameters_fee,
        )
        logger.debug(f"Created order {order.hash()}")
        return order

    def create_order_on_transfer(
        self,
        *,
        order: Order,
        spent_amount: Any,
        input_indices: Sequence[int],
        output_indices: Sequence[int],
    ) -> OrderOnTransfer:
        """
        Bind ``order`` to a transfer that is yet to be assembled.

        Index bounds and the spent amount are checked against the transfer
        when it is built, not here.
        """
        return OrderOnTransfer(
            order=validate_instance(order, Order, "order"),
            spent_amount=validate_amount(spent_amount, "spent_amount"),
            input_indices=validate_indices(input_indices, "input_indices"),
            output_indices=validate_indices(output_indices, "output_indices"),
        )

    # Asset transactions

    def _scheme_fields(self, scheme: Any, require_shard: bool) -> SchemeDescriptor:
        descriptor = normalize_scheme(scheme, "scheme")
        if require_shard and descriptor.shard_id is None:
            raise MissingFieldError("scheme.shard_id is required", field="scheme.shard_id")
        network_id = self.network_id if descriptor.network_id is None else validate_network_id(
            descriptor.network_id, "scheme.network_id")
        return SchemeDescriptor(
            network_id=network_id,
            shard_id=(
                validate_shard_id(descriptor.shard_id, "scheme.shard_id") if require_shard else None
            ),
            metadata=validate_metadata(descriptor.metadata, "scheme.metadata"),
            amount=descriptor.amount,
            approver=validate_optional_platform_address(descriptor.approver, "scheme.approver"),
            administrator=validate_optional_platform_address(descriptor.administrator, "scheme.administrator"),
        )

    def create_mint_asset_transaction(
        self,
        *,
        scheme: Union[AssetScheme, Mapping],
        recipient: Optional[Union[AssetAddress, str]] = None,
        lock_script_hash: Optional[Union[H160, str]] = None,
        parameters: Optional[Sequence[bytes]] = None,
        approvals: Optional[Sequence[str]] = None,
    ) -> MintAsset:
        """
        Mint a new asset type described by ``scheme``.

        ``scheme`` is an AssetScheme or a mapping with ``shard_id``,
        ``metadata`` and optionally ``network_id``, ``amount`` (None for
        unlimited supply), ``approver`` and ``administrator``.

        Raises:
            MissingFieldError: the scheme has no shard id
            ShapeError: both or neither destination shapes were given
        """
        fields = self._scheme_fields(scheme, require_shard=True)
        output = self._mint_output(fields.amount, recipient, lock_script_hash, parameters)
        return self._created(MintAsset(
            network_id=fields.network_id,
            shard_id=fields.shard_id,
            metadata=fields.metadata,
            approver=fields.approver,
            administrator=fields.administrator,
            output=output,
            approvals=validate_approvals(approvals),
        ))

    def create_change_asset_scheme_transaction(
        self,
        *,
        asset_type: Union[H256, str],
        scheme: Union[AssetScheme, Mapping],
        approvals: Optional[Sequence[str]] = None,
    ) -> ChangeAssetScheme:
        """Replace metadata and authorities of ``asset_type``; supply and shard stay fixed."""
        asset_type = validate_hash(H256, asset_type, "asset_type")
        fields = self._scheme_fields(scheme, require_shard=False)
        return self._created(ChangeAssetScheme(
            network_id=fields.network_id,
            asset_type=asset_type,
            metadata=fields.metadata,
            approver=fields.approver,
            administrator=fields.administrator,
            approvals=validate_approvals(approvals),
        ))

    def create_transfer_asset_transaction(
        self,
        *,
        burns: Sequence[AssetTransferInput] = (),
        inputs: Sequence[AssetTransferInput] = (),
        outputs: Sequence[AssetTransferOutput] = (),
        orders: Sequence[OrderOnTransfer] = (),
        approvals: Optional[Sequence[str]] = None,
        network_id: Optional[str] = None,
    ) -> TransferAsset:
        """
        Assemble a transfer.

        Burns and inputs must be AssetTransferInput instances, outputs
        AssetTransferOutput instances and orders OrderOnTransfer instances.

        Raises:
            TypeMismatchError: an item is not of the expected type
            OrderLinkError: an order does not fit the inputs/outputs
        """
        burns = validate_instances(burns, AssetTransferInput, "burns")
        inputs = validate_instances(inputs, AssetTransferInput, "inputs")
        outputs = validate_instances(outputs, AssetTransferOutput, "outputs")
        orders = validate_instances(orders, OrderOnTransfer, "orders")
        tx = TransferAsset(
            network_id=self._network(network_id),
            burns=burns,
            inputs=inputs,
            outputs=outputs,
            orders=orders,
            approvals=validate_approvals(approvals),
        )
        tx.verify_orders()
        return self._created(tx)

    def create_compose_asset_transaction(
        self,
        *,
        scheme: Union[AssetScheme, Mapping],
        inputs: Sequence[AssetTransferInput],
        recipient: Optional[Union[AssetAddress, str]] = None,
        lock_script_hash: Optional[Union[H160, str]] = None,
        parameters: Optional[Sequence[bytes]] = None,
        approvals: Optional[Sequence[str]] = None,
    ) -> ComposeAsset:
        """Compose ``inputs`` into one new asset described by ``scheme``."""
        inputs = validate_instances(inputs, AssetTransferInput, "inputs")
        fields = self._scheme_fields(scheme, require_shard=True)
        output = self._mint_output(fields.amount, recipient, lock_script_hash, parameters)
        return self._created(ComposeAsset(
            network_id=fields.network_id,
            shard_id=fields.shard_id,
            metadata=fields.metadata,
            approver=fields.approver,
            administrator=fields.administrator,
            inputs=inputs,
            output=output,
            approvals=validate_approvals(approvals),
        ))

    def create_decompose_asset_transaction(
        self,
        *,
        input: AssetTransferInput,
        outputs: Sequence[AssetTransferOutput] = (),
        approvals: Optional[Sequence[str]] = None,
        network_id: Optional[str] = None,
    ) -> DecomposeAsset:
        return self._created(DecomposeAsset(
            network_id=self._network(network_id),
            input=validate_instance(input, AssetTransferInput, "input"),
            outputs=validate_instances(outputs, AssetTransferOutput, "outputs"),
            approvals=validate_approvals(approvals),
        ))

    def create_unwrap_ccc_transaction(
        self,
        *,
        burn: Union[AssetTransferInput, Asset],
        approvals: Optional[Sequence[str]] = None,
        network_id: Optional[str] = None,
    ) -> UnwrapCCC:
        """Unwrap a wrapped-CCC asset; an Asset is turned into its burn input."""
        if isinstance(burn, Asset):
            burn = burn.create_transfer_input()
        return self._created(UnwrapCCC(
            network_id=self._network(network_id),
            burn=validate_instance(burn, AssetTransferInput, "burn"),
            approvals=validate_approvals(approvals),
        ))

    def create_signed_transaction(self, tx: Transaction, *, signature: str, seq: int,
                                  fee: Any) -> SignedTransaction:
        """Attach a signature produced elsewhere to ``tx``."""
        return SignedTransaction(
            unsigned=validate_instance(tx, Transaction, "tx"),
            signature=validate_signature(signature, "signature"),
            seq=validate_index(seq, "seq"),
            fee=validate_amount(fee, "fee"),
        )
