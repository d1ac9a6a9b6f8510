from .context import OrderContext, OrderItemRequest, OrderRequest, OrderResponse
from .runner import OrderPipeline, Stage, build_order_pipeline
from .stages import (
    CartLockCheck,
    FinalizeOrder,
    ItemsAvailabilityCheck,
    PaymentProcess,
    RestaurantHoursCheck,
)

__all__ = [
    "CartLockCheck",
    "FinalizeOrder",
    "ItemsAvailabilityCheck",
    "OrderContext",
    "OrderItemRequest",
    "OrderPipeline",
    "OrderRequest",
    "OrderResponse",
    "PaymentProcess",
    "RestaurantHoursCheck",
    "Stage",
    "build_order_pipeline",
]
