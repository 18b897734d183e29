"""
Signed transactions and the invoices the node reports for them.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from pydantic import Field

from ..primitives import U64
from .base import CoreModel, Signature
from .transactions import AnyTransaction


class InvoiceError(CoreModel):
    type: str
    content: Any = None


class Invoice(CoreModel):
    """Outcome of a transaction once the node has executed it."""

    success: bool
    error: Optional[InvoiceError] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> Invoice:
        return cls.model_validate(data)


class SignedTransaction(CoreModel):
    """
    An unsigned transaction together with the signer's ECDSA signature.

    Signing happens outside this package; the signature is only checked for
    shape. ``invoice`` is attached once the node has executed the
    transaction.
    """

    unsigned: AnyTransaction
    signature: Signature
    seq: int = Field(ge=0)
    fee: U64
    invoice: Optional[Invoice] = None

    def with_invoice(self, invoice: Invoice) -> SignedTransaction:
        return self.model_copy(update={"invoice": invoice})
