"""
JSON-RPC access to CodeChain nodes.
"""

from .client import Rpc
from .engine import EngineRpc

__all__ = ["Rpc", "EngineRpc"]
