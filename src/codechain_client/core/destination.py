"""
Destination shapes for asset outputs and order legs.

Callers name a destination either by asset address or by an explicit lock
script hash plus parameters. ``resolve_destination`` checks that exactly one
shape was supplied and returns it as a tagged value; ``lock_script`` turns
either shape into the canonical (lock_script_hash, parameters) pair.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from ..primitives import AssetAddress, H160
from ..runtime.errors import MissingFieldError, ShapeError
from .validation import validate_asset_address, validate_hash, validate_parameters


@dataclass(frozen=True)
class AddressDestination:
    recipient: AssetAddress

    def lock_script(self) -> Tuple[H160, Tuple[bytes, ...]]:
        return self.recipient.to_lock_script()


@dataclass(frozen=True)
class ScriptDestination:
    lock_script_hash: H160
    parameters: Tuple[bytes, ...]

    def lock_script(self) -> Tuple[H160, Tuple[bytes, ...]]:
        return self.lock_script_hash, self.parameters


Destination = Union[AddressDestination, ScriptDestination]


def resolve_destination(
    recipient: Any = None,
    lock_script_hash: Any = None,
    parameters: Any = None,
    *,
    recipient_field: str = "recipient",
    lock_script_hash_field: str = "lock_script_hash",
    parameters_field: str = "parameters",
    required: bool = True,
) -> Optional[Destination]:
    """
    Resolve the two mutually exclusive destination shapes.

    Returns None only when nothing was supplied and ``required`` is False.

    Raises:
        ShapeError: both shapes, or neither when required, were supplied
        MissingFieldError: half of the script shape was supplied
        RangeError: a field failed its parser
    """
    has_address = recipient is not None
    has_script = lock_script_hash is not None or parameters is not None
    if has_address and has_script:
        raise ShapeError(
            f"Expected either {recipient_field} or {lock_script_hash_field} with {parameters_field} "
            f"but found both: {recipient_field}={recipient!r}, {lock_script_hash_field}={lock_script_hash!r}",
            field=recipient_field,
            value=recipient,
        )
    if has_address:
        return AddressDestination(validate_asset_address(recipient, recipient_field))
    if has_script:
        if lock_script_hash is None:
            raise MissingFieldError(
                f"{parameters_field} was given without {lock_script_hash_field}", field=lock_script_hash_field
            )
        if parameters is None:
            raise MissingFieldError(
                f"{lock_script_hash_field} was given without {parameters_field}", field=parameters_field
            )
        return ScriptDestination(
            validate_hash(H160, lock_script_hash, lock_script_hash_field),
            validate_parameters(parameters, parameters_field),
        )
    if required:
        raise ShapeError(
            f"Expected either {recipient_field} or {lock_script_hash_field} with {parameters_field} "
            f"but found neither",
            field=recipient_field,
        )
    return None
