"""
Unsigned fixed-width integers (U64, U256).

Quantities are never floating point. ``ensure`` accepts an instance, a
non-negative Python int, a decimal string or a 0x-prefixed hex string; all
encodings of the same quantity produce equal values.
"""

from __future__ import annotations
from functools import total_ordering
from typing import Any, Union
import re

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.errors import RangeError

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")

IntLike = Union["UInt", int, str]


@total_ordering
class UInt:
    """Base class for bounded unsigned integers."""

    BITS = 0

    __slots__ = ("_value",)

    def __init__(self, value: Union[int, str]):
        if isinstance(value, bool):
            raise RangeError(f"Expected {type(self).__name__} to be an integer but found {value!r}", value=value)
        if isinstance(value, UInt):
            parsed = value._value
        elif isinstance(value, int):
            parsed = value
        elif isinstance(value, str):
            if _DECIMAL_RE.fullmatch(value):
                parsed = int(value, 10)
            elif _HEX_RE.fullmatch(value):
                parsed = int(value[2:], 16)
            else:
                raise RangeError(
                    f"Expected a decimal or 0x-prefixed hex string for {type(self).__name__} but found {value!r}",
                    value=value,
                )
        else:
            raise RangeError(
                f"Expected {type(self).__name__} to be an integer or a string but found {value!r}",
                value=value,
            )
        if parsed < 0 or parsed > self.max_value():
            raise RangeError(f"{type(self).__name__} out of range: {value!r}", value=value)
        object.__setattr__(self, "_value", parsed)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    @classmethod
    def max_value(cls) -> int:
        return (1 << cls.BITS) - 1

    @classmethod
    def ensure(cls, value: Any):
        if type(value) is cls:
            return value
        return cls(value)

    @classmethod
    def check(cls, value: Any) -> bool:
        try:
            cls.ensure(value)
        except RangeError:
            return False
        return True

    @property
    def value(self) -> int:
        return self._value

    def is_zero(self) -> bool:
        return self._value == 0

    # Checked arithmetic; results out of range raise RangeError.

    def plus(self, other: IntLike):
        return type(self)(self._value + type(self).ensure(other)._value)

    def minus(self, other: IntLike):
        return type(self)(self._value - type(self).ensure(other)._value)

    def times(self, other: IntLike):
        return type(self)(self._value * type(self).ensure(other)._value)

    def idiv(self, other: IntLike):
        divisor = type(self).ensure(other)._value
        if divisor == 0:
            raise RangeError(f"Division of {type(self).__name__} by zero", value=other)
        return type(self)(self._value // divisor)

    def mod(self, other: IntLike):
        divisor = type(self).ensure(other)._value
        if divisor == 0:
            raise RangeError(f"Modulo of {type(self).__name__} by zero", value=other)
        return type(self)(self._value % divisor)

    def to_json(self) -> str:
        return hex(self._value)

    def to_bytes(self) -> bytes:
        """Big-endian bytes without leading zeros (empty for zero)."""
        if self._value == 0:
            return b""
        return self._value.to_bytes((self._value.bit_length() + 7) // 8, "big")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def _other_value(self, other: Any):
        if isinstance(other, UInt):
            return other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return None

    def __eq__(self, other: Any) -> bool:
        other_value = self._other_value(other)
        if other_value is None:
            return NotImplemented
        return self._value == other_value

    def __lt__(self, other: Any) -> bool:
        other_value = self._other_value(other)
        if other_value is None:
            return NotImplemented
        return self._value < other_value

    def __hash__(self) -> int:
        return hash(self._value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Validate through ``ensure`` and serialize to 0x hex in JSON mode."""
        return core_schema.no_info_before_validator_function(
            cls.ensure,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_json(), when_used="json"
            ),
        )


class U64(UInt):
    """Unsigned 64-bit integer."""
    BITS = 64


class U256(UInt):
    """Unsigned 256-bit integer."""
    BITS = 256


__all__ = ["UInt", "U64", "U256", "IntLike"]
