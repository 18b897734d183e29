"""
CodeChain Python client.

Validated construction of platform and asset transactions, exchange orders,
and async JSON-RPC access to CodeChain nodes.
"""

from .runtime.errors import *
from .config import ClientConfig
from .primitives import (
    H128,
    H160,
    H256,
    H512,
    U64,
    U256,
    PlatformAddress,
    AssetAddress,
)
from .core import *
from .rpc import Rpc, EngineRpc
from .sdk import SDK

__version__ = "0.1.0"
__all__ = [
    # Facade and configuration
    "SDK",
    "ClientConfig",

    # Transport
    "Rpc",
    "EngineRpc",

    # Primitive values
    "H128",
    "H160",
    "H256",
    "H512",
    "U64",
    "U256",
    "PlatformAddress",
    "AssetAddress",

    # Transaction factory and data model
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
    "Order",
    "OrderOnTransfer",
    "Invoice",
    "SignedTransaction",
    "Transaction",
    "Pay",
    "SetRegularKey",
    "CreateShard",
    "SetShardOwners",
    "SetShardUsers",
    "WrapCCC",
    "Store",
    "Remove",
    "Custom",
    "MintAsset",
    "TransferAsset",
    "ChangeAssetScheme",
    "ComposeAsset",
    "DecomposeAsset",
    "UnwrapCCC",
    "transaction_from_json",

    # Errors
    "ErrorCode",
    "CodeChainError",
    "ValidationError",
    "ShapeError",
    "RangeError",
    "TypeMismatchError",
    "MissingFieldError",
    "OrderLinkError",
    "EncodingError",
    "RpcError",
    "RpcTransportError",
    "RpcResponseError",
    "RpcResultError",
]
