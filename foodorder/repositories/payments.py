from decimal import Decimal
from typing import Optional
from uuid import uuid4
from sqlalchemy.orm import Session
from ..errors import NotFound
from ..models.payment import Payment, PaymentStatus


class PaymentRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(
        self,
        amount: Decimal,
        *,
        currency: str,
        gateway_reference: Optional[str] = None,
    ) -> Payment:
        payment = Payment(
            id=str(uuid4()),
            amount=amount,
            currency=currency,
            status=PaymentStatus.AUTHORIZED.value,
            gateway_reference=gateway_reference,
        )
        self._session.add(payment)
        self._session.flush()
        return payment

    def find_by_id(self, payment_id: str) -> Optional[Payment]:
        if not payment_id:
            return None
        return self._session.query(Payment).filter(Payment.id == payment_id).first()

    def link_to_order(self, payment_id: str, order_id: str) -> Payment:
        payment = self.find_by_id(payment_id)
        if payment is None:
            raise NotFound("payment", payment_id)
        payment.order_id = order_id
        self._session.flush()
        return payment
