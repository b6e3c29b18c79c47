"""
Product Model
"""

from sqlalchemy import DECIMAL

from stockroom.database import db, utcnow

# Below this share of the reorder threshold a product is critical
CRITICAL_STOCK_RATIO = 0.1


class Product(db.Model):
    """Catalogue product and its current stock levels"""
    __tablename__ = 'products'
    __table_args__ = (
        db.CheckConstraint('quantity >= 0', name='ck_products_quantity_non_negative'),
        db.CheckConstraint('total_quantity >= 0', name='ck_products_total_quantity_non_negative'),
        db.CheckConstraint('reorder_threshold >= 0', name='ck_products_reorder_threshold_non_negative'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    sku = db.Column(db.String(100), unique=True, nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    vendor = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, default=0, nullable=False)
    total_quantity = db.Column(db.Integer, default=0, nullable=False)
    reorder_threshold = db.Column(db.Integer, default=0, nullable=False)
    cost_price = db.Column(DECIMAL(10, 2), nullable=False)
    selling_price = db.Column(DECIMAL(10, 2), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f'<Product {self.sku}>'

    @property
    def is_low_stock(self):
        """Check if product is below its reorder threshold"""
        return self.quantity < self.reorder_threshold

    @property
    def stock_status(self):
        if self.quantity >= self.reorder_threshold:
            return 'in_stock'
        if self.quantity >= self.reorder_threshold * CRITICAL_STOCK_RATIO:
            return 'low_stock'
        return 'critical'
