"""
Stock In Repository Implementation
"""

from typing import List, Optional, Tuple

from sqlalchemy import func

from stockroom.database import db
from stockroom.models import Product, StockInRecord
from .base import StockInRepositoryInterface


class StockInRepository(StockInRepositoryInterface):
    """Concrete implementation of stock-in repository"""

    def get_by_id(self, record_id: int) -> Optional[StockInRecord]:
        """Get stock-in record by ID"""
        return StockInRecord.query.filter_by(id=record_id).first()

    def get_all(self, product_id: int = None) -> List[StockInRecord]:
        """Get stock-in records, newest first"""
        query = StockInRecord.query
        if product_id is not None:
            query = query.filter_by(product_id=product_id)
        return query.order_by(StockInRecord.created_at.desc(), StockInRecord.id.desc()).all()

    def add(self, record: StockInRecord) -> StockInRecord:
        """Stage a new stock-in record in the current transaction"""
        db.session.add(record)
        db.session.flush()
        return record

    def sum_by_category(self) -> List[Tuple[str, int]]:
        """Total received units per product category"""
        return db.session.query(
            Product.category,
            func.sum(StockInRecord.quantity)
        ).join(
            Product, StockInRecord.product_id == Product.id
        ).group_by(Product.category).order_by(Product.category).all()

    def get_recent(self, limit: int = 10) -> List[StockInRecord]:
        """Get the most recent stock-in records"""
        return StockInRecord.query.order_by(
            StockInRecord.created_at.desc(), StockInRecord.id.desc()
        ).limit(limit).all()
