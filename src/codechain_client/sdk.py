"""
CodeChain SDK facade.

Bundles the transaction factory and the RPC transport behind one object.

Example:
    ```python
    from codechain_client import SDK

    sdk = SDK("http://localhost:8080", network_id="tc")

    tx = sdk.core.create_pay_transaction(recipient="tccq...", amount=10)
    reward = await sdk.engine.get_block_reward()
    await sdk.close()
    ```
"""

from __future__ import annotations
from typing import Optional, Sequence
import logging

from .config import ClientConfig
from .core import Core
from .rpc import EngineRpc, Rpc

logger = logging.getLogger(__name__)


class SDK:
    """
    Entry point for building transactions and talking to a node.

    Attributes:
        core: Transaction factory bound to the configured network id
        rpc: JSON-RPC transport
        engine: ``engine_*`` methods sharing ``rpc``
    """

    def __init__(
        self,
        server: Optional[str] = None,
        *,
        network_id: Optional[str] = None,
        fallback_servers: Optional[Sequence[str]] = None,
        config: Optional[ClientConfig] = None,
    ):
        """
        Args:
            server: Node endpoint; overrides ``config.server``
            network_id: Network id; overrides ``config.network_id``
            fallback_servers: Overrides ``config.fallback_servers``
            config: Base configuration; defaults to ``ClientConfig()``
        """
        config = config or ClientConfig()
        self.config = ClientConfig(
            server=server or config.server,
            network_id=network_id or config.network_id,
            fallback_servers=list(config.fallback_servers if fallback_servers is None else fallback_servers),
            timeout=config.timeout,
            user_agent=config.user_agent,
        )
        self.core = Core(self.config.network_id)
        self.rpc = Rpc(
            self.config.server,
            fallback_servers=self.config.fallback_servers,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )
        self.engine = EngineRpc(self.rpc)
        logger.debug(f"SDK for network {self.config.network_id} at {self.config.server}")

    @classmethod
    def from_env(cls) -> SDK:
        """SDK configured from ``CODECHAIN_*`` environment variables."""
        return cls(config=ClientConfig.from_env())

    @property
    def network_id(self) -> str:
        return self.config.network_id

    async def close(self) -> None:
        await self.rpc.close()

    async def __aenter__(self) -> SDK:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
