"""
Base Repository Interface - Abstract base classes
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple

from stockroom.models import (
    MovementType, Product, RequestStatus, StockInRecord, StockMovement, StockOutRequest, User
)


class UserRepositoryInterface(ABC):
    """Abstract base class for user repository"""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def get_all(self) -> List[User]:
        pass

    @abstractmethod
    def count_active(self) -> int:
        pass


class ProductRepositoryInterface(ABC):
    """Abstract base class for product repository"""

    @abstractmethod
    def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        pass

    @abstractmethod
    def get_for_update(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    def get_all(self, category: str = None, search: str = None) -> List[Product]:
        pass

    @abstractmethod
    def get_low_stock(self) -> List[Product]:
        pass

    @abstractmethod
    def count_total(self) -> int:
        pass

    @abstractmethod
    def count_low_stock(self) -> int:
        pass

    @abstractmethod
    def calculate_stock_value(self) -> Decimal:
        pass

    @abstractmethod
    def add(self, product: Product) -> Product:
        pass

    @abstractmethod
    def delete(self, product: Product) -> None:
        pass

    @abstractmethod
    def has_history(self, product_id: int) -> bool:
        pass

    @abstractmethod
    def increment_quantity(self, product_id: int, amount: int) -> bool:
        pass

    @abstractmethod
    def decrement_quantity(self, product_id: int, amount: int) -> bool:
        pass


class StockInRepositoryInterface(ABC):
    """Abstract base class for stock-in repository"""

    @abstractmethod
    def get_by_id(self, record_id: int) -> Optional[StockInRecord]:
        pass

    @abstractmethod
    def get_all(self, product_id: int = None) -> List[StockInRecord]:
        pass

    @abstractmethod
    def add(self, record: StockInRecord) -> StockInRecord:
        pass

    @abstractmethod
    def sum_by_category(self) -> List[Tuple[str, int]]:
        pass

    @abstractmethod
    def get_recent(self, limit: int = 10) -> List[StockInRecord]:
        pass


class StockOutRequestRepositoryInterface(ABC):
    """Abstract base class for stock-out request repository"""

    @abstractmethod
    def get_by_id(self, request_id: int) -> Optional[StockOutRequest]:
        pass

    @abstractmethod
    def get_for_update(self, request_id: int) -> Optional[StockOutRequest]:
        pass

    @abstractmethod
    def get_all(self, status: RequestStatus = None, requester_id: int = None) -> List[StockOutRequest]:
        pass

    @abstractmethod
    def add(self, request: StockOutRequest) -> StockOutRequest:
        pass

    @abstractmethod
    def transition(self, request_id: int, from_status: RequestStatus,
                   to_status: RequestStatus, **changes) -> bool:
        pass

    @abstractmethod
    def sum_fulfilled_by_category(self) -> List[Tuple[str, int]]:
        pass

    @abstractmethod
    def get_recent_reviewed(self, limit: int = 10) -> List[StockOutRequest]:
        pass


class StockMovementRepositoryInterface(ABC):
    """Abstract base class for stock movement repository"""

    @abstractmethod
    def search(self, product_id: int = None, movement_type: MovementType = None,
               page: int = 1, per_page: int = 20) -> Tuple[List[StockMovement], int]:
        pass

    @abstractmethod
    def get_by_product(self, product_id: int) -> List[StockMovement]:
        pass

    @abstractmethod
    def add(self, movement: StockMovement) -> StockMovement:
        pass
