"""
Primitive value types: fixed-width hashes, unsigned integers and addresses.
"""

from .hashes import FixedHash, H128, H160, H256, H512
from .numbers import UInt, U64, U256
from .address import (
    PlatformAddress,
    AssetAddress,
    is_network_id,
    P2PKH_LOCK_SCRIPT_HASH,
    P2PKH_BURN_LOCK_SCRIPT_HASH,
)
from .blake import blake128, blake160, blake256

__all__ = [
    "FixedHash",
    "H128",
    "H160",
    "H256",
    "H512",
    "UInt",
    "U64",
    "U256",
    "PlatformAddress",
    "AssetAddress",
    "is_network_id",
    "P2PKH_LOCK_SCRIPT_HASH",
    "P2PKH_BURN_LOCK_SCRIPT_HASH",
    "blake128",
    "blake160",
    "blake256",
]
