from datetime import datetime
from typing import Callable, List, Protocol, Sequence

from ..errors import OrderError
from ..repositories import Repositories
from ..services.logging import log_event
from .context import OrderContext
from .stages import (
    CartLockCheck,
    FinalizeOrder,
    ItemsAvailabilityCheck,
    PaymentProcess,
    RestaurantHoursCheck,
)


class Stage(Protocol):
    name: str

    def process(self, ctx: OrderContext) -> OrderContext:  # pragma: no cover - interface only
        ...


class OrderPipeline:
    """Runs stages in order; the first failure stops the run."""

    def __init__(self, stages: Sequence[Stage]) -> None:
        self.stages: List[Stage] = list(stages)

    @property
    def stage_names(self) -> List[str]:
        return [s.name for s in self.stages]

    def run(self, ctx: OrderContext) -> OrderContext:
        for stage in self.stages:
            try:
                ctx = stage.process(ctx)
            except OrderError as exc:
                if exc.stage is None:
                    exc.stage = stage.name
                log_event(
                    "warning",
                    "order.stage.failed",
                    stage=stage.name,
                    code=exc.code,
                    cart_id=ctx.request.cart_id,
                    message=exc.message,
                )
                raise
            ctx.completed.append(stage.name)
        return ctx


def build_order_pipeline(
    repos: Repositories,
    gateway,
    *,
    currency: str = "USD",
    clock: Callable[[], datetime] = datetime.now,
) -> OrderPipeline:
    """Assemble the standard five-stage order placement pipeline."""
    return OrderPipeline(
        [
            CartLockCheck(repos.carts),
            ItemsAvailabilityCheck(repos.carts, repos.menu_items),
            RestaurantHoursCheck(repos.restaurants, clock),
            PaymentProcess(repos.carts, repos.payments, gateway, currency),
            FinalizeOrder(repos.carts, repos.restaurants, repos.payments, repos.orders, clock),
        ]
    )
