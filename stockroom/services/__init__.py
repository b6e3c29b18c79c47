"""
Services package - Business logic for the inventory tracker
"""

from .user_service import UserService
from .product_service import ProductService
from .reconciliation_service import ReconciliationService
from .stock_out_service import StockOutService
from .analytics_service import AnalyticsService

__all__ = [
    'UserService',
    'ProductService',
    'ReconciliationService',
    'StockOutService',
    'AnalyticsService'
]
