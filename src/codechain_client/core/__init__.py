"""
Transaction data model and the validated factory that builds it.
"""

from .asset import Asset
from .asset_out_point import AssetOutPoint
from .asset_outputs import AssetMintOutput, AssetTransferOutput
from .asset_scheme import AssetPoolEntry, AssetScheme
from .asset_transfer_input import AssetTransferInput, Timelock, TimelockType
from .destination import AddressDestination, ScriptDestination, resolve_destination
from .factory import Core
from .order import Order
from .order_on_transfer import OrderOnTransfer
from .signed_transaction import Invoice, InvoiceError, SignedTransaction
from .transactions import (
    AnyTransaction,
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
    transaction_from_json,
)

__all__ = [
    "Core",
    "Asset",
    "AssetOutPoint",
    "AssetMintOutput",
    "AssetTransferOutput",
    "AssetPoolEntry",
    "AssetScheme",
    "AssetTransferInput",
    "Timelock",
    "TimelockType",
    "AddressDestination",
    "ScriptDestination",
    "resolve_destination",
    "Order",
    "OrderOnTransfer",
    "Invoice",
    "InvoiceError",
    "SignedTransaction",
    "AnyTransaction",
    "Transaction",
    "Pay",
    "SetRegularKey",
    "CreateShard",
    "SetShardOwners",
    "SetShardUsers",
    "WrapCCC",
    "Store",
    "Remove",
    "SecretAuthorization",
    "SignatureAuthorization",
    "Custom",
    "MintAsset",
    "TransferAsset",
    "ChangeAssetScheme",
    "ComposeAsset",
    "DecomposeAsset",
    "UnwrapCCC",
    "transaction_from_json",
]
