"""
Fixed-width hash types (H128, H160, H256, H512).

Each type is a parse-or-reject value: ``ensure`` accepts an instance, a hex
string (optional ``0x`` prefix) or raw bytes of exactly the right width and
raises RangeError for anything else. The types double as Pydantic field
types so core models can declare them directly.
"""

from __future__ import annotations
from typing import Any, Union
import re

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.errors import RangeError

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]*$")

HashLike = Union["FixedHash", str, bytes]


class FixedHash:
    """Base class for fixed-width byte strings rendered as hex."""

    SIZE = 0

    __slots__ = ("_raw",)

    def __init__(self, value: Union[str, bytes, bytearray]):
        if isinstance(value, (bytes, bytearray)):
            raw = bytes(value)
        elif isinstance(value, str):
            if not _HEX_RE.fullmatch(value):
                raise RangeError(
                    f"Expected a hex string for {type(self).__name__} but found {value!r}",
                    value=value,
                )
            text = value[2:] if value.startswith("0x") else value
            if len(text) != self.SIZE * 2:
                raise RangeError(
                    f"Expected {self.SIZE * 2} hex characters for {type(self).__name__} "
                    f"but found {len(text)} in {value!r}",
                    value=value,
                )
            raw = bytes.fromhex(text)
        else:
            raise RangeError(
                f"Expected {type(self).__name__} to be a hex string or bytes but found {value!r}",
                value=value,
            )
        if len(raw) != self.SIZE:
            raise RangeError(
                f"Expected {self.SIZE} bytes for {type(self).__name__} but found {len(raw)}",
                value=value,
            )
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._raw,))

    @classmethod
    def ensure(cls, value: Any):
        if isinstance(value, cls):
            return value
        return cls(value)

    @classmethod
    def check(cls, value: Any) -> bool:
        try:
            cls.ensure(value)
        except RangeError:
            return False
        return True

    @classmethod
    def zero(cls):
        return cls(bytes(cls.SIZE))

    @property
    def value(self) -> str:
        """Lowercase hex without prefix."""
        return self._raw.hex()

    def to_bytes(self) -> bytes:
        return self._raw

    def to_json(self) -> str:
        return f"0x{self._raw.hex()}"

    def is_zero(self) -> bool:
        return not any(self._raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __str__(self) -> str:
        return self._raw.hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self._raw.hex()}')"

    def __eq__(self, other: Any) -> bool:
        if type(other) is type(self):
            return self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._raw))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Validate through ``ensure`` and serialize to 0x-prefixed hex in JSON mode."""
        return core_schema.no_info_before_validator_function(
            cls.ensure,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_json(), when_used="json"
            ),
        )


class H128(FixedHash):
    """16-byte hash."""
    SIZE = 16


class H160(FixedHash):
    """20-byte hash (account ids, lock script hashes)."""
    SIZE = 20


class H256(FixedHash):
    """32-byte hash (transaction ids, asset types, secrets)."""
    SIZE = 32


class H512(FixedHash):
    """64-byte value (uncompressed public keys)."""
    SIZE = 64


__all__ = ["FixedHash", "H128", "H160", "H256", "H512", "HashLike"]
