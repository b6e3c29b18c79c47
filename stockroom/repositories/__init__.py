"""
Repositories package - Data access layer for the inventory ledger
"""

# Import interfaces
from .base import (
    ProductRepositoryInterface,
    StockInRepositoryInterface,
    StockMovementRepositoryInterface,
    StockOutRequestRepositoryInterface,
    UserRepositoryInterface
)

# Import concrete implementations
from .user_repository import UserRepository
from .product_repository import ProductRepository
from .stock_in_repository import StockInRepository
from .stock_out_request_repository import StockOutRequestRepository
from .stock_movement_repository import StockMovementRepository

# Export all interfaces and implementations
__all__ = [
    'UserRepositoryInterface',
    'ProductRepositoryInterface',
    'StockInRepositoryInterface',
    'StockOutRequestRepositoryInterface',
    'StockMovementRepositoryInterface',
    'UserRepository',
    'ProductRepository',
    'StockInRepository',
    'StockOutRequestRepository',
    'StockMovementRepository'
]
