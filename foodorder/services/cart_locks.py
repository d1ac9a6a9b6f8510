import threading
from typing import Set
from ..errors import CartLocked


class CartLockRegistry:
    """In-process guard allowing at most one in-flight order per cart.

    Acquisition never blocks: a second caller for the same cart gets
    :class:`CartLocked` straight away.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._held: Set[str] = set()

    def acquire(self, cart_id: str) -> None:
        with self._guard:
            if cart_id in self._held:
                raise CartLocked(cart_id)
            self._held.add(cart_id)

    def release(self, cart_id: str) -> None:
        with self._guard:
            self._held.discard(cart_id)

    def is_held(self, cart_id: str) -> bool:
        with self._guard:
            return cart_id in self._held
