"""
Models package - Database models for the inventory tracker
"""

# Import database instance
from stockroom.database import db

# Import enums first
from .enums import ALLOWED_TRANSITIONS, MovementType, RequestStatus, UserRole

# Import models
from .user import User
from .product import Product
from .stock_in import StockInRecord
from .stock_out_request import StockOutRequest
from .stock_movement import StockMovement

# Export all models and enums
__all__ = [
    'db',
    'ALLOWED_TRANSITIONS',
    'MovementType',
    'RequestStatus',
    'UserRole',
    'User',
    'Product',
    'StockInRecord',
    'StockOutRequest',
    'StockMovement'
]
