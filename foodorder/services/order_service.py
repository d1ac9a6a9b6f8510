from datetime import datetime
from typing import Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from ..db.session import get_session
from ..errors import CartLocked, NotFound, OrderProcessingError
from ..models.order import Order
from ..pipeline.context import OrderContext, OrderRequest, OrderResponse
from ..pipeline.runner import build_order_pipeline
from ..pipeline.stages import CartLockCheck
from ..repositories import OrderRepository, Repositories
from ..utils.dto import to_order_dto, to_status_dto
from .cart_locks import CartLockRegistry
from .logging import log_event
from .payment_gateway import SimulatedPaymentGateway


class OrderService:
    """Order placement and lifecycle backed by DB."""

    def __init__(
        self,
        session_factory=get_session,
        *,
        gateway=None,
        locks: Optional[CartLockRegistry] = None,
        currency: str = "USD",
        clock=datetime.now,
        pipeline_builder=build_order_pipeline,
    ):
        self._session_factory = session_factory
        self._gateway = gateway or SimulatedPaymentGateway()
        self._locks = locks or CartLockRegistry()
        self._currency = currency
        self._clock = clock
        self._pipeline_builder = pipeline_builder

    def place_order(self, request: OrderRequest) -> OrderResponse:
        """Run the placement pipeline for ``request`` inside one transaction.

        The cart stays reserved for this call from before the transaction
        opens until after it commits or rolls back. Domain failures are
        re-raised as-is, tagged with the failing stage; storage failures are
        wrapped in :class:`OrderProcessingError`.
        """
        try:
            self._locks.acquire(request.cart_id)
        except CartLocked as exc:
            exc.stage = CartLockCheck.name
            log_event("warning", "order.stage.failed", stage=exc.stage, code=exc.code, cart_id=request.cart_id)
            raise
        try:
            with self._session_factory() as session:
                pipeline = self._pipeline_builder(
                    Repositories.bind(session),
                    self._gateway,
                    currency=self._currency,
                    clock=self._clock,
                )
                ctx = pipeline.run(OrderContext.start(request))
        except SQLAlchemyError as exc:
            log_event("error", "order.failed", cart_id=request.cart_id, error=type(exc).__name__)
            raise OrderProcessingError(f"order for cart {request.cart_id} could not be placed") from exc
        finally:
            self._locks.release(request.cart_id)

        resp = ctx.response
        log_event(
            "info",
            "order.placed",
            order_id=resp.order_id,
            payment_id=resp.payment_id,
            total_price=resp.total_price,
            stages=ctx.completed,
        )
        return resp

    def _find(self, session, order_id: str) -> Order:
        order = OrderRepository(session).find_by_id(order_id)
        if order is None:
            raise NotFound("order", order_id)
        return order

    def get_order(self, order_id: str) -> Dict:
        with self._session_factory() as session:
            return to_order_dto(self._find(session, order_id))

    def get_status(self, order_id: str) -> Dict:
        with self._session_factory() as session:
            return to_status_dto(self._find(session, order_id))

    def update_status(self, order_id: str) -> Dict:
        """Advance the order one step along its delivery ladder."""
        with self._session_factory() as session:
            order = self._find(session, order_id)
            previous = order.order_status
            order.advance_status()
            session.flush()
            log_event("info", "order.status.updated", order_id=order_id, previous=previous, status=order.order_status)
            return to_status_dto(order)

    def cancel(self, order_id: str) -> Dict:
        with self._session_factory() as session:
            order = self._find(session, order_id)
            order.cancel()
            session.flush()
            log_event("info", "order.cancelled", order_id=order_id)
            return to_status_dto(order)
