"""
Async JSON-RPC transport for CodeChain nodes.

Requests go to the primary server first and then to each fallback server in
order when the transport fails. There is no retry or backoff beyond that.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
import asyncio
import logging
import random

import aiohttp

from ..runtime.errors import RpcResponseError, RpcTransportError

logger = logging.getLogger(__name__)


class Rpc:
    """
    JSON-RPC 2.0 client.

    Example:
        ```python
        async with Rpc("http://localhost:8080") as rpc:
            block_number = await rpc.send_rpc_request("chain_getBestBlockNumber", [])
        ```
    """

    def __init__(
        self,
        server: str,
        *,
        fallback_servers: Optional[Sequence[str]] = None,
        timeout: float = 30.0,
        user_agent: str = "codechain-client-python/0.1.0",
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Args:
            server: Primary node endpoint
            fallback_servers: Endpoints tried in order when the primary fails
            timeout: Total request timeout in seconds
            user_agent: User-Agent header sent with every request
            session: Optional aiohttp session; the client closes only sessions it created
        """
        self.server = server
        self.fallback_servers: List[str] = list(fallback_servers or [])
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Rpc:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
            )
            logger.debug(f"Created HTTP session for {self.server}")
        return self._session

    async def _post(self, server: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        session = self._get_session()
        response = await session.post(server, json=payload, headers={"Content-Type": "application/json"})
        try:
            response.raise_for_status()
            return await response.json(content_type=None)
        finally:
            response.release()

    async def send_rpc_request(
        self,
        method: str,
        params: List[Any],
        fallback_servers: Optional[Sequence[str]] = None,
    ) -> Any:
        """
        Call ``method`` with positional ``params``.

        Args:
            method: RPC method name
            params: Positional parameters
            fallback_servers: Overrides the client's fallback servers for this call

        Returns:
            The ``result`` member of the response

        Raises:
            RpcResponseError: The node answered with an error object
            RpcTransportError: No server could be reached
        """
        fallbacks = self.fallback_servers if fallback_servers is None else list(fallback_servers)
        servers = [self.server] + fallbacks
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": random.randint(1, 1_000_000),
        }

        last_error: Optional[Exception] = None
        body: Optional[Dict[str, Any]] = None
        for i, server in enumerate(servers):
            logger.debug(f"RPC {method} -> {server}")
            try:
                body = await self._post(server, payload)
                break
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                last_error = e
                if i + 1 < len(servers):
                    logger.warning(f"RPC {method} failed on {server}, trying {servers[i + 1]}: {e}")
        else:
            raise RpcTransportError(
                f"RPC {method} failed on all servers: {', '.join(servers)}",
                details={"method": method, "servers": servers},
                cause=last_error,
            )

        if not isinstance(body, dict):
            raise RpcTransportError(
                f"RPC {method} returned a non-object response: {body!r}",
                details={"method": method},
            )
        if body.get("error") is not None:
            error = body["error"]
            if not isinstance(error, dict):
                raise RpcResponseError(str(error))
            raise RpcResponseError(
                error.get("message", "Unknown error"),
                rpc_code=error.get("code"),
                data=error.get("data"),
            )
        return body.get("result")
