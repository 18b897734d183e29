"""
Client configuration.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import os

from .core.validation import validate_network_id
from .runtime.errors import RangeError

DEFAULT_SERVER = "http://localhost:8080"


@dataclass
class ClientConfig:
    """Configuration for the CodeChain client."""

    server: str = DEFAULT_SERVER
    network_id: str = "tc"
    fallback_servers: List[str] = field(default_factory=list)
    timeout: float = 30.0
    user_agent: str = "codechain-client-python/0.1.0"

    def __post_init__(self) -> None:
        validate_network_id(self.network_id)
        if self.timeout <= 0:
            raise RangeError(f"Expected timeout to be positive but found {self.timeout!r}",
                             field="timeout", value=self.timeout)

    @classmethod
    def from_env(cls, server: Optional[str] = None) -> ClientConfig:
        """
        Build a config from ``CODECHAIN_*`` environment variables.

        ``CODECHAIN_FALLBACK_SERVERS`` is a comma-separated list. An explicit
        ``server`` argument wins over ``CODECHAIN_SERVER``.
        """
        fallback = os.environ.get("CODECHAIN_FALLBACK_SERVERS", "")
        timeout = os.environ.get("CODECHAIN_TIMEOUT", "30")
        try:
            timeout_value = float(timeout)
        except ValueError as e:
            raise RangeError(f"Expected CODECHAIN_TIMEOUT to be a number but found {timeout!r}",
                             field="timeout", value=timeout, cause=e)
        return cls(
            server=server or os.environ.get("CODECHAIN_SERVER", DEFAULT_SERVER),
            network_id=os.environ.get("CODECHAIN_NETWORK_ID", "tc"),
            fallback_servers=[s.strip() for s in fallback.split(",") if s.strip()],
            timeout=timeout_value,
        )
