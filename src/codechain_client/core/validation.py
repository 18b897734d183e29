"""
Parameter validators used by the transaction factory.

Each ``validate_*`` function checks one loosely typed parameter and returns
its normalized value, or raises a ValidationError subclass naming the
parameter and the rejected value. Array validators include the failing index
in the field name (``owners[2]``).
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type, TypeVar
import re

from ..primitives import (
    AssetAddress,
    FixedHash,
    H160,
    H256,
    PlatformAddress,
    U64,
    is_network_id,
)
from ..runtime.errors import (
    MissingFieldError,
    RangeError,
    TypeMismatchError,
)
from .asset_out_point import AssetOutPoint
from .asset_scheme import AssetPoolEntry, AssetScheme
from .asset_transfer_input import Timelock, TimelockType
from .base import SIGNATURE_REGEX

SIGNATURE_PATTERN = re.compile(SIGNATURE_REGEX)
MAX_SHARD_ID = 0xFFFF

H = TypeVar("H", bound=FixedHash)
T = TypeVar("T")

_MISSING = object()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _lookup(params: Mapping, name: str, default: Any = _MISSING) -> Any:
    """Read ``name`` from a mapping, accepting the snake_case or camelCase key."""
    if name in params:
        return params[name]
    head, *rest = name.split("_")
    camel = head + "".join(part.title() for part in rest)
    if camel in params:
        return params[camel]
    return default


def validate_network_id(network_id: Any, field: str = "network_id") -> str:
    if not is_network_id(network_id):
        raise RangeError(
            f"Expected {field} param to be a string of length 2 but found {network_id!r}",
            field=field, value=network_id,
        )
    return network_id


def validate_platform_address(address: Any, field: str = "recipient") -> PlatformAddress:
    try:
        return PlatformAddress.ensure(address)
    except RangeError as e:
        raise RangeError(
            f"Expected {field} param to be a PlatformAddress but found {address!r}",
            field=field, value=address, cause=e,
        )


def validate_optional_platform_address(address: Any, field: str) -> Optional[PlatformAddress]:
    if address is None:
        return None
    try:
        return PlatformAddress.ensure(address)
    except RangeError as e:
        raise RangeError(
            f"Expected {field} param to be either None or a PlatformAddress value but found {address!r}",
            field=field, value=address, cause=e,
        )


def validate_asset_address(address: Any, field: str = "recipient") -> AssetAddress:
    try:
        return AssetAddress.ensure(address)
    except RangeError as e:
        raise RangeError(
            f"Expected {field} param to be an AssetAddress but found {address!r}",
            field=field, value=address, cause=e,
        )


def validate_amount(amount: Any, field: str = "amount") -> U64:
    try:
        return U64.ensure(amount)
    except RangeError as e:
        raise RangeError(
            f"Expected {field} param to be a U64 value but found {amount!r}",
            field=field, value=amount, cause=e,
        )


def validate_hash(hash_type: Type[H], value: Any, field: str) -> H:
    try:
        return hash_type.ensure(value)
    except RangeError as e:
        raise RangeError(
            f"Expected {field} param to be an {hash_type.__name__} value but found {value!r}",
            field=field, value=value, cause=e,
        )


def validate_shard_id(shard_id: Any, field: str = "shard_id") -> int:
    if not _is_int(shard_id) or shard_id < 0 or shard_id > MAX_SHARD_ID:
        raise RangeError(
            f"Expected {field} param to be an integer between 0 and {MAX_SHARD_ID} but found {shard_id!r}",
            field=field, value=shard_id,
        )
    return shard_id


def validate_index(index: Any, field: str = "index") -> int:
    if not _is_int(index) or index < 0:
        raise RangeError(
            f"Expected {field} param to be a non-negative integer but found {index!r}",
            field=field, value=index,
        )
    return index


def validate_handler_id(handler_id: Any, field: str = "handler_id") -> U64:
    if not _is_int(handler_id) or handler_id < 0:
        raise RangeError(
            f"Expected {field} param to be a non-negative integer but found {handler_id!r}",
            field=field, value=handler_id,
        )
    return validate_amount(handler_id, field)


def validate_metadata(metadata: Any, field: str = "metadata") -> str:
    if not isinstance(metadata, str):
        raise TypeMismatchError(
            f"Expected {field} param to be a string but found {metadata!r}",
            field=field, value=metadata,
        )
    return metadata


def validate_bytes(value: Any, field: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeMismatchError(
            f"Expected {field} param to be bytes but found {value!r}",
            field=field, value=value,
        )
    return bytes(value)


def validate_signature(signature: Any, field: str = "signature") -> str:
    if not isinstance(signature, str) or not SIGNATURE_PATTERN.fullmatch(signature):
        raise RangeError(
            f"Expected {field} param to be a 65 byte hexstring but found {signature!r}",
            field=field, value=signature,
        )
    return signature


def _validate_sequence(values: Any, field: str) -> Tuple[Any, ...]:
    if not isinstance(values, (list, tuple)):
        raise TypeMismatchError(
            f"Expected {field} param to be a list but found {values!r}",
            field=field, value=values,
        )
    return tuple(values)


def validate_parameters(parameters: Any, field: str = "parameters") -> Tuple[bytes, ...]:
    items = _validate_sequence(parameters, field)
    for i, item in enumerate(items):
        validate_bytes(item, f"{field}[{i}]")
    return tuple(bytes(item) for item in items)


def validate_platform_addresses(addresses: Any, field: str) -> Tuple[PlatformAddress, ...]:
    items = _validate_sequence(addresses, field)
    return tuple(validate_platform_address(item, f"{field}[{i}]") for i, item in enumerate(items))


def validate_instances(values: Any, cls: Type[T], field: str) -> Tuple[T, ...]:
    """Every item must be an already constructed ``cls`` instance."""
    items = _validate_sequence(values, field)
    for i, item in enumerate(items):
        validate_instance(item, cls, f"{field}[{i}]")
    return items


def validate_instance(value: Any, cls: Type[T], field: str) -> T:
    if not isinstance(value, cls):
        raise TypeMismatchError(
            f"Expected {field} param to be an {cls.__name__} but found {value!r}",
            field=field, value=value,
        )
    return value


def validate_indices(indices: Any, field: str) -> Tuple[int, ...]:
    items = _validate_sequence(indices, field)
    return tuple(validate_index(item, f"{field}[{i}]") for i, item in enumerate(items))


def validate_approvals(approvals: Any, field: str = "approvals") -> Tuple[str, ...]:
    if approvals is None:
        return ()
    items = _validate_sequence(approvals, field)
    return tuple(validate_signature(item, f"{field}[{i}]") for i, item in enumerate(items))


def validate_timelock(timelock: Any, field: str = "timelock") -> Optional[Timelock]:
    """Accept None, a Timelock, or a mapping with ``type`` and ``value``."""
    if timelock is None or isinstance(timelock, Timelock):
        return timelock
    if not isinstance(timelock, Mapping):
        raise TypeMismatchError(
            f"Expected {field} param to be either None or a mapping containing both type and value "
            f"but found {timelock!r}",
            field=field, value=timelock,
        )
    lock_type = timelock.get("type")
    value = timelock.get("value")
    try:
        lock_type = TimelockType(lock_type)
    except ValueError:
        raise RangeError(
            f"Expected {field}.type to be one of {[t.value for t in TimelockType]} but found {lock_type!r}",
            field=f"{field}.type", value=lock_type,
        )
    validate_index(value, f"{field}.value")
    return Timelock(type=lock_type, value=value)


def validate_out_point(value: Any, field: str = "asset_out_point") -> AssetOutPoint:
    """
    Accept an AssetOutPoint or a mapping describing one.

    Mapping keys may be snake_case or camelCase; ``lock_script_hash`` and
    ``parameters`` are optional.
    """
    if isinstance(value, AssetOutPoint):
        return value
    if not isinstance(value, Mapping):
        raise TypeMismatchError(
            f"Expected {field} param to be either an AssetOutPoint or a mapping but found {value!r}",
            field=field, value=value,
        )

    def required(name: str) -> Any:
        item = _lookup(value, name)
        if item is _MISSING:
            raise MissingFieldError(f"{field}.{name} is required", field=f"{field}.{name}")
        return item

    transaction_id = validate_hash(H256, required("transaction_id"), f"{field}.transaction_id")
    index = validate_index(required("index"), f"{field}.index")
    asset_type = validate_hash(H256, required("asset_type"), f"{field}.asset_type")
    amount = validate_amount(required("amount"), f"{field}.amount")
    lock_script_hash = _lookup(value, "lock_script_hash", None)
    parameters = _lookup(value, "parameters", None)
    return AssetOutPoint(
        transaction_id=transaction_id,
        index=index,
        asset_type=asset_type,
        amount=amount,
        lock_script_hash=(
            None if lock_script_hash is None
            else validate_hash(H160, lock_script_hash, f"{field}.lock_script_hash")
        ),
        parameters=None if parameters is None else validate_parameters(parameters, f"{field}.parameters"),
    )


@dataclass(frozen=True)
class SchemeDescriptor:
    """
    Raw scheme fields read from either an AssetScheme or a mapping.

    Absent fields are None; validation happens after normalization so both
    input shapes go through the same checks.
    """

    network_id: Any = None
    shard_id: Any = None
    metadata: Any = None
    amount: Any = None
    approver: Any = None
    administrator: Any = None


def normalize_scheme(scheme: Any, field: str = "scheme") -> SchemeDescriptor:
    if isinstance(scheme, AssetScheme):
        return SchemeDescriptor(
            network_id=scheme.network_id,
            shard_id=scheme.shard_id,
            metadata=scheme.metadata,
            amount=scheme.amount,
            approver=scheme.approver,
            administrator=scheme.administrator,
        )
    if isinstance(scheme, Mapping):
        return SchemeDescriptor(**{
            name: _lookup(scheme, name, None)
            for name in ("network_id", "shard_id", "metadata", "amount", "approver", "administrator")
        })
    raise TypeMismatchError(
        f"Expected {field} param to be either an AssetScheme or a mapping but found {scheme!r}",
        field=field, value=scheme,
    )


def validate_out_points(values: Any, field: str) -> Tuple[AssetOutPoint, ...]:
    items = _validate_sequence(values, field)
    return tuple(validate_out_point(item, f"{field}[{i}]") for i, item in enumerate(items))


def validate_pool_entry(entry: Any, field: str) -> AssetPoolEntry:
    """Accept an AssetPoolEntry or a mapping with ``asset_type`` and ``amount``."""
    if isinstance(entry, AssetPoolEntry):
        return entry
    if not isinstance(entry, Mapping):
        raise TypeMismatchError(
            f"Expected {field} param to be either an AssetPoolEntry or a mapping but found {entry!r}",
            field=field, value=entry,
        )
    asset_type = _lookup(entry, "asset_type")
    amount = _lookup(entry, "amount")
    if asset_type is _MISSING:
        raise MissingFieldError(f"{field}.asset_type is required", field=f"{field}.asset_type")
    if amount is _MISSING:
        raise MissingFieldError(f"{field}.amount is required", field=f"{field}.amount")
    return AssetPoolEntry(
        asset_type=validate_hash(H256, asset_type, f"{field}.asset_type"),
        amount=validate_amount(amount, f"{field}.amount"),
    )


def validate_pool(pool: Any, field: str = "pool") -> Tuple[AssetPoolEntry, ...]:
    if pool is None:
        return ()
    items = _validate_sequence(pool, field)
    return tuple(validate_pool_entry(item, f"{field}[{i}]") for i, item in enumerate(items))
