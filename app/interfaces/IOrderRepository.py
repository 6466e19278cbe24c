from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models import Order
from app.domain.schemas import OrderCreate, OrderPage, OrderUpdate

class IOrderRepository(ABC):
    """
    Storage contract for orders.
    Missing orders are reported through the return value (None / False), never raised.
    """

    @abstractmethod
    def list_orders(self, search: Optional[str] = None, page: int = 1, limit: int = 10) -> OrderPage:
        pass

    @abstractmethod
    def search_orders(self, search: Optional[str] = None) -> List[Order]:
        """Every matching order, newest first, without pagination."""

    @abstractmethod
    def get_order(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    def create_order(self, data: OrderCreate) -> Order:
        pass

    @abstractmethod
    def update_order(self, order_id: str, data: OrderUpdate) -> Optional[Order]:
        pass

    @abstractmethod
    def delete_order(self, order_id: str) -> bool:
        pass
