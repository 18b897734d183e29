"""
Base model for immutable core objects.
"""

from __future__ import annotations
from typing import Annotated, Any, Dict

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel


def _parse_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        text = value[2:] if value.startswith("0x") else value
        return bytes.fromhex(text)
    raise ValueError(f"Expected bytes or a hex string but found {value!r}")


# ECDSA signature: 65 bytes as hex
SIGNATURE_REGEX = r"^(0x)?[0-9a-fA-F]{130}$"

Signature = Annotated[str, StringConstraints(pattern=SIGNATURE_REGEX)]

# bytes in Python, hex string in JSON
HexBytes = Annotated[
    bytes,
    BeforeValidator(_parse_bytes),
    PlainSerializer(lambda b: b.hex(), return_type=str, when_used="json"),
]


class CoreModel(BaseModel):
    """Frozen model with camelCase JSON aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json(self) -> Dict[str, Any]:
        """JSON-compatible dict using the node's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
