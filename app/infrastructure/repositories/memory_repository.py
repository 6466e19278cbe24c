import logging
import threading
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional

from app.application.pagination import normalize_search, page_bounds
from app.core.errors import StorageCapacityError
from app.domain.models import Order, OrderStatus, utcnow
from app.domain.schemas import OrderCreate, OrderPage, OrderUpdate
from app.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


def matches(order: Order, term: str) -> bool:
    """Name and medicine are compared case-insensitively; phone is compared as stored."""
    needle = term.lower()
    return (
        needle in order.customer_name.lower()
        or needle in order.medicine.lower()
        or needle in order.phone
    )


class InMemoryOrderRepository(IOrderRepository):
    """
    Process-local order store.

    `capacity=None` keeps every order for the life of the process.
    A bounded store raises StorageCapacityError once full instead of evicting.
    Every operation holds one lock, so a listing never observes a half-applied write.
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be a positive integer or None")
        self.capacity = capacity
        self._clock = clock
        self._id_factory = id_factory
        self._orders: Dict[str, Order] = {}  # insertion order doubles as the tie-breaker
        self._lock = threading.Lock()

    def _sorted_matches(self, search: Optional[str]) -> List[Order]:
        term = normalize_search(search)
        orders = self._orders.values()
        if term is not None:
            orders = [o for o in orders if matches(o, term)]
        # sorted() is stable, and reverse=True keeps equal timestamps in insertion order
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def list_orders(self, search: Optional[str] = None, page: int = 1, limit: int = 10) -> OrderPage:
        start, end = page_bounds(page, limit)
        with self._lock:
            found = self._sorted_matches(search)
            return OrderPage(
                orders=[o.model_copy() for o in found[start:end]],
                total=len(found),
            )

    def search_orders(self, search: Optional[str] = None) -> List[Order]:
        with self._lock:
            return [o.model_copy() for o in self._sorted_matches(search)]

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return order.model_copy() if order else None

    def create_order(self, data: OrderCreate) -> Order:
        with self._lock:
            if self.capacity is not None and len(self._orders) >= self.capacity:
                raise StorageCapacityError(self.capacity)
            order = Order(
                id=self._id_factory(),
                customer_name=data.customer_name,
                phone=data.phone,
                medicine=data.medicine,
                status=OrderStatus.PENDING,
                created_at=self._clock(),
            )
            self._orders[order.id] = order
        logger.info(f"🆕 Order {order.id} created")
        return order.model_copy()

    def update_order(self, order_id: str, data: OrderUpdate) -> Optional[Order]:
        with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return None
            updated = current.model_copy(update=data.changes())
            self._orders[order_id] = updated
        logger.info(f"✏️ Order {order_id} updated: {sorted(data.changes())}")
        return updated.model_copy()

    def delete_order(self, order_id: str) -> bool:
        with self._lock:
            removed = self._orders.pop(order_id, None) is not None
        if removed:
            logger.info(f"🗑️ Order {order_id} deleted")
        return removed
