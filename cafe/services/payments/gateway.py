"""Payment gateway interface and the built-in stub gateway."""
import json
import secrets
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from cafe.core.enums import PaymentMethod, PaymentStatus


class AuthorizationResult(BaseModel):
    """Outcome of a gateway authorization."""

    status: PaymentStatus
    transaction_id: Optional[str] = None
    raw_response: Optional[str] = None


class PaymentGateway(ABC):
    """Abstract base class for payment gateways."""

    @abstractmethod
    async def authorize(
        self,
        payment_method: PaymentMethod,
        amount: Decimal,
        reference: str,
        transaction_id: Optional[str] = None,
    ) -> AuthorizationResult:
        """Authorize a payment for the given order reference."""
        pass


class StubPaymentGateway(PaymentGateway):
    """
    Deterministic stand-in for a real gateway.

    Cash and QR code payments are settled at the counter and complete
    immediately; card and wallet payments stay ``processing`` until a status
    update arrives.
    """

    INSTANT_METHODS = frozenset({PaymentMethod.CASH, PaymentMethod.QR_CODE})

    async def authorize(
        self,
        payment_method: PaymentMethod,
        amount: Decimal,
        reference: str,
        transaction_id: Optional[str] = None,
    ) -> AuthorizationResult:
        payment_method = PaymentMethod(payment_method)
        if payment_method in self.INSTANT_METHODS:
            status = PaymentStatus.COMPLETED
        else:
            status = PaymentStatus.PROCESSING

        if transaction_id is None:
            transaction_id = f"STUB-{secrets.token_hex(6).upper()}"

        raw_response = json.dumps(
            {
                "gateway": "stub",
                "reference": reference,
                "method": payment_method.value,
                "amount": str(amount),
                "status": status.value,
                "transaction_id": transaction_id,
            }
        )
        return AuthorizationResult(
            status=status,
            transaction_id=transaction_id,
            raw_response=raw_response,
        )
