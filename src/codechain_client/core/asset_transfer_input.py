"""
Asset transfer inputs and their timelocks.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import Field

from .asset_out_point import AssetOutPoint
from .base import CoreModel, HexBytes


class TimelockType(str, Enum):
    """What a timelock value is measured against."""
    BLOCK = "block"
    BLOCK_AGE = "blockAge"
    TIME = "time"
    TIME_AGE = "timeAge"


class Timelock(CoreModel):
    type: TimelockType
    value: int = Field(ge=0)


class AssetTransferInput(CoreModel):
    """
    Spends the output referenced by ``prev_out``.

    ``lock_script``/``unlock_script`` stay empty until the scripting layer
    fills them in with ``with_scripts``.
    """

    prev_out: AssetOutPoint
    timelock: Optional[Timelock] = None
    lock_script: HexBytes = b""
    unlock_script: HexBytes = b""

    def with_scripts(self, lock_script: bytes, unlock_script: bytes) -> AssetTransferInput:
        return AssetTransferInput(
            prev_out=self.prev_out,
            timelock=self.timelock,
            lock_script=lock_script,
            unlock_script=unlock_script,
        )

    def without_script(self) -> AssetTransferInput:
        return AssetTransferInput(prev_out=self.prev_out, timelock=self.timelock)
