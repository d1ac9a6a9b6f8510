from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class OrderItemRequest:
    menu_item_id: str
    quantity: int


@dataclass(frozen=True)
class OrderRequest:
    customer_id: Optional[str]
    restaurant_id: str
    cart_id: str
    delivery_id: Optional[str] = None
    items: Tuple[OrderItemRequest, ...] = ()
    delivery_address: Optional[str] = None


@dataclass
class OrderResponse:
    """Result accumulated while the order moves through the stages.

    The identifying fields are copied from the request up front. The payment
    stage owns ``total_price`` and ``payment_id``; the finalize stage owns
    ``order_id``, ``order_time`` and ``order_status``.
    """

    customer_id: Optional[str]
    restaurant_id: str
    delivery_id: Optional[str]
    items: List[OrderItemRequest]
    delivery_address: Optional[str]
    total_price: Optional[Decimal] = None
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    order_time: Optional[datetime] = None
    order_status: Optional[str] = None

    @classmethod
    def from_request(cls, request: OrderRequest) -> "OrderResponse":
        return cls(
            customer_id=request.customer_id,
            restaurant_id=request.restaurant_id,
            delivery_id=request.delivery_id,
            items=list(request.items),
            delivery_address=request.delivery_address,
        )


@dataclass
class OrderContext:
    request: OrderRequest
    response: OrderResponse
    # stage names in the order they completed
    completed: List[str] = field(default_factory=list)

    @classmethod
    def start(cls, request: OrderRequest) -> "OrderContext":
        return cls(request=request, response=OrderResponse.from_request(request))
