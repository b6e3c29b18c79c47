"""
Product Repository Implementation
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, or_

from stockroom.database import db, utcnow
from stockroom.models import Product, StockInRecord, StockMovement, StockOutRequest
from .base import ProductRepositoryInterface


class ProductRepository(ProductRepositoryInterface):
    """Concrete implementation of product repository"""

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return Product.query.filter_by(id=product_id).first()

    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Get product by SKU"""
        return Product.query.filter_by(sku=sku).first()

    def get_for_update(self, product_id: int) -> Optional[Product]:
        """Get product with a row lock, refreshing any copy already in the session"""
        return (
            Product.query.filter_by(id=product_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_all(self, category: str = None, search: str = None) -> List[Product]:
        """Get products ordered by name, optionally filtered"""
        query = Product.query

        if category:
            query = query.filter(Product.category == category)

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.name.ilike(search_term),
                    Product.sku.ilike(search_term)
                )
            )

        return query.order_by(Product.name).all()

    def get_low_stock(self) -> List[Product]:
        """Get products below their reorder threshold"""
        return Product.query.filter(
            Product.quantity < Product.reorder_threshold
        ).order_by(Product.name).all()

    def count_total(self) -> int:
        """Count catalogue products"""
        return Product.query.count()

    def count_low_stock(self) -> int:
        """Count products below their reorder threshold"""
        return Product.query.filter(
            Product.quantity < Product.reorder_threshold
        ).count()

    def calculate_stock_value(self) -> Decimal:
        """Calculate stock value at selling price (sum of quantity * selling_price)"""
        result = db.session.query(
            func.sum(Product.quantity * Product.selling_price)
        ).scalar()
        if result is None:
            return Decimal('0.00')
        return Decimal(str(result)).quantize(Decimal('0.01'))

    def add(self, product: Product) -> Product:
        """Stage a new product in the current transaction"""
        db.session.add(product)
        db.session.flush()
        return product

    def delete(self, product: Product) -> None:
        """Hard-delete a product"""
        db.session.delete(product)
        db.session.flush()

    def has_history(self, product_id: int) -> bool:
        """Check whether any ledger record references the product"""
        for model in (StockInRecord, StockOutRequest, StockMovement):
            referenced = db.session.query(
                model.query.filter_by(product_id=product_id).exists()
            ).scalar()
            if referenced:
                return True
        return False

    def increment_quantity(self, product_id: int, amount: int) -> bool:
        """Add received units to both available and lifetime quantity"""
        updated = Product.query.filter(Product.id == product_id).update(
            {
                Product.quantity: Product.quantity + amount,
                Product.total_quantity: Product.total_quantity + amount,
                Product.updated_at: utcnow()
            },
            synchronize_session=False
        )
        return updated == 1

    def decrement_quantity(self, product_id: int, amount: int) -> bool:
        """
        Take units out of available quantity.

        The row only matches while enough stock is left, so a concurrent
        withdrawal that got there first makes this return False instead of
        driving quantity negative.
        """
        updated = Product.query.filter(
            Product.id == product_id,
            Product.quantity >= amount
        ).update(
            {
                Product.quantity: Product.quantity - amount,
                Product.updated_at: utcnow()
            },
            synchronize_session=False
        )
        return updated == 1
