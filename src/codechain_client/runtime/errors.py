"""
CodeChain client error model.

Every failure raised by the client derives from CodeChainError and carries a
code, an optional details mapping and the underlying cause. Construction-time
validation failures additionally name the offending field and its value.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100

    # RPC errors (200-299)
    RPC_ERROR = 200
    CONNECTION_FAILED = 201
    RPC_RESPONSE_ERROR = 202
    UNEXPECTED_RESULT = 203

    # Validation errors (500-599)
    INVALID_PARAMETER = 500
    INVALID_SHAPE = 501
    OUT_OF_RANGE = 502
    TYPE_MISMATCH = 503
    MISSING_FIELD = 504
    INVALID_ORDER_LINK = 505


class CodeChainError(Exception):
    """
    Base class for all client errors.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ValidationError(CodeChainError, ValueError):
    """
    A parameter failed construction-time validation.

    ``field`` is the parameter name as the caller spelled it (including an
    ``[index]`` suffix for array elements) and ``value`` the rejected value.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None,
                 code: ErrorCode = ErrorCode.INVALID_PARAMETER, cause: Optional[Exception] = None):
        details = {"field": field} if field is not None else None
        super().__init__(message, code, details, cause)
        self.field = field
        self.value = value


class ShapeError(ValidationError):
    """Parameters match neither, or both, members of a mutually exclusive union."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message, field, value, ErrorCode.INVALID_SHAPE)


class RangeError(ValidationError):
    """A value failed its primitive parser (length, range, pattern)."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, field, value, ErrorCode.OUT_OF_RANGE, cause)


class TypeMismatchError(ValidationError, TypeError):
    """A value is not an instance of the expected constructed type."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message, field, value, ErrorCode.TYPE_MISMATCH)


class MissingFieldError(ValidationError):
    """A required field is absent."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field, None, ErrorCode.MISSING_FIELD)


class OrderLinkError(ValidationError):
    """An order attached to a transfer does not fit the transfer's inputs/outputs."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message, field, value, ErrorCode.INVALID_ORDER_LINK)


class EncodingError(CodeChainError):
    """RLP encoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class RpcError(CodeChainError):
    """JSON-RPC gateway errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.RPC_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class RpcTransportError(RpcError):
    """No server could be reached."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CONNECTION_FAILED, details, cause)


class RpcResponseError(RpcError):
    """The node answered with a JSON-RPC error object."""

    def __init__(self, message: str, rpc_code: Optional[int] = None, data: Any = None):
        super().__init__(message, ErrorCode.RPC_RESPONSE_ERROR, {"rpcCode": rpc_code, "data": data})
        self.rpc_code = rpc_code
        self.data = data


class RpcResultError(RpcError):
    """The node answered with a result of an unexpected shape."""

    def __init__(self, message: str, method: str, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNEXPECTED_RESULT, {"method": method}, cause)
        self.method = method


__all__ = [
    "ErrorCode",
    "CodeChainError",
    "ValidationError",
    "ShapeError",
    "RangeError",
    "TypeMismatchError",
    "MissingFieldError",
    "OrderLinkError",
    "EncodingError",
    "RpcError",
    "RpcTransportError",
    "RpcResponseError",
    "RpcResultError",
]
