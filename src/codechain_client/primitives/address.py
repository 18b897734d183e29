"""
Human-readable CodeChain addresses.

PlatformAddress identifies an account on the platform (account model);
AssetAddress identifies the owner of an asset output (UTXO model) and decodes
to the lock script hash and parameters that guard the output.
"""

from __future__ import annotations
from typing import Any, Tuple, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.errors import RangeError
from . import bech32
from .blake import blake160
from .hashes import H160, H512

ADDRESS_VERSION = 1

# Lock script hashes of the standard scripts an AssetAddress may point at.
P2PKH_LOCK_SCRIPT_HASH = H160("5f5960a7bca6ceeeb0c97bc717562914e7a1de04")
P2PKH_BURN_LOCK_SCRIPT_HASH = H160("37572bdcc22d39a59c0d12d301f6271ba3fdd451")

ASSET_ADDRESS_LOCK_SCRIPT_HASH = 0x00
ASSET_ADDRESS_P2PKH = 0x01
ASSET_ADDRESS_P2PKH_BURN = 0x02


def is_network_id(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 2


class _Address:
    """Shared behaviour of the two address kinds."""

    KIND = ""

    __slots__ = ("_value", "_network_id")

    @property
    def value(self) -> str:
        return self._value

    @property
    def network_id(self) -> str:
        return self._network_id

    @classmethod
    def ensure(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        raise RangeError(f"Expected {cls.__name__} or a string but found {value!r}", value=value)

    @classmethod
    def check(cls, value: Any) -> bool:
        try:
            cls.ensure(value)
        except RangeError:
            return False
        return True

    @classmethod
    def _decode(cls, address: str) -> bytes:
        if not isinstance(address, str):
            raise RangeError(f"Expected {cls.__name__} string but found {address!r}", value=address)
        if len(address) < 3 or address[2] != cls.KIND:
            raise RangeError(
                f"Expected {cls.__name__} to start with a network id followed by '{cls.KIND}' "
                f"but found {address!r}",
                value=address,
            )
        try:
            _, words = bech32.decode(address)
            data = bech32.from_words(words)
        except ValueError as e:
            raise RangeError(f"Invalid {cls.__name__} {address!r}: {e}", value=address, cause=e)
        if not data or data[0] != ADDRESS_VERSION:
            raise RangeError(f"Unsupported {cls.__name__} version in {address!r}", value=address)
        return data[1:]

    def to_json(self) -> str:
        return self._value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self._value}')"

    def __eq__(self, other: Any) -> bool:
        if type(other) is type(self):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_before_validator_function(
            cls.ensure,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_json(), when_used="json"
            ),
        )


class PlatformAddress(_Address):
    """Bech32 account address, e.g. ``tccq...``."""

    KIND = "c"

    __slots__ = ("_account_id",)

    def __init__(self, account_id: H160, value: str):
        object.__setattr__(self, "_account_id", account_id)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_network_id", value[:2])

    def __reduce__(self):
        return (PlatformAddress, (self._account_id, self._value))

    @property
    def account_id(self) -> H160:
        return self._account_id

    @classmethod
    def from_account_id(cls, account_id: Union[H160, str, bytes], network_id: str = "tc") -> PlatformAddress:
        if not is_network_id(network_id):
            raise RangeError(f"Expected networkId to be a string of length 2 but found {network_id!r}",
                             field="network_id", value=network_id)
        account_id = H160.ensure(account_id)
        words = bech32.to_words(bytes([ADDRESS_VERSION]) + account_id.to_bytes())
        return cls(account_id, bech32.encode(f"{network_id}{cls.KIND}", words))

    @classmethod
    def from_public(cls, public_key: Union[H512, str, bytes], network_id: str = "tc") -> PlatformAddress:
        """Derive the address of the account owning an uncompressed public key."""
        public_key = H512.ensure(public_key)
        return cls.from_account_id(H160(blake160(public_key.to_bytes())), network_id)

    @classmethod
    def from_string(cls, address: str) -> PlatformAddress:
        payload = cls._decode(address)
        if len(payload) != H160.SIZE:
            raise RangeError(f"Invalid account id length in {address!r}", value=address)
        return cls(H160(payload), address.lower())


class AssetAddress(_Address):
    """Bech32 asset owner address, e.g. ``tcaq...``."""

    KIND = "a"

    __slots__ = ("_type", "_payload")

    def __init__(self, address_type: int, payload: H160, value: str):
        object.__setattr__(self, "_type", address_type)
        object.__setattr__(self, "_payload", payload)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_network_id", value[:2])

    def __reduce__(self):
        return (AssetAddress, (self._type, self._payload, self._value))

    @property
    def type(self) -> int:
        return self._type

    @property
    def payload(self) -> H160:
        return self._payload

    @classmethod
    def from_type_and_payload(
        cls,
        address_type: int,
        payload: Union[H160, str, bytes],
        network_id: str = "tc",
    ) -> AssetAddress:
        if address_type not in (ASSET_ADDRESS_LOCK_SCRIPT_HASH, ASSET_ADDRESS_P2PKH, ASSET_ADDRESS_P2PKH_BURN):
            raise RangeError(f"Unsupported asset address type {address_type!r}", value=address_type)
        if not is_network_id(network_id):
            raise RangeError(f"Expected networkId to be a string of length 2 but found {network_id!r}",
                             field="network_id", value=network_id)
        payload = H160.ensure(payload)
        words = bech32.to_words(bytes([ADDRESS_VERSION, address_type]) + payload.to_bytes())
        return cls(address_type, payload, bech32.encode(f"{network_id}{cls.KIND}", words))

    @classmethod
    def from_lock_script_hash(cls, lock_script_hash: Union[H160, str, bytes], network_id: str = "tc") -> AssetAddress:
        return cls.from_type_and_payload(ASSET_ADDRESS_LOCK_SCRIPT_HASH, lock_script_hash, network_id)

    @classmethod
    def from_string(cls, address: str) -> AssetAddress:
        data = cls._decode(address)
        if len(data) != 1 + H160.SIZE:
            raise RangeError(f"Invalid payload length in {address!r}", value=address)
        address_type = data[0]
        if address_type not in (ASSET_ADDRESS_LOCK_SCRIPT_HASH, ASSET_ADDRESS_P2PKH, ASSET_ADDRESS_P2PKH_BURN):
            raise RangeError(f"Unsupported asset address type {address_type} in {address!r}", value=address)
        return cls(address_type, H160(data[1:]), address.lower())

    def to_lock_script(self) -> Tuple[H160, Tuple[bytes, ...]]:
        """
        The (lock_script_hash, parameters) pair this address stands for.

        A plain lock-script-hash address carries no parameters; the standard
        P2PKH scripts take the public key hash as their single parameter.
        """
        if self._type == ASSET_ADDRESS_LOCK_SCRIPT_HASH:
            return self._payload, ()
        if self._type == ASSET_ADDRESS_P2PKH:
            return P2PKH_LOCK_SCRIPT_HASH, (self._payload.to_bytes(),)
        return P2PKH_BURN_LOCK_SCRIPT_HASH, (self._payload.to_bytes(),)


__all__ = [
    "PlatformAddress",
    "AssetAddress",
    "is_network_id",
    "P2PKH_LOCK_SCRIPT_HASH",
    "P2PKH_BURN_LOCK_SCRIPT_HASH",
    "ASSET_ADDRESS_LOCK_SCRIPT_HASH",
    "ASSET_ADDRESS_P2PKH",
    "ASSET_ADDRESS_P2PKH_BURN",
]
