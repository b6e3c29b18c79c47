"""
Stock In Record Model
"""

from stockroom.database import db, utcnow


class StockInRecord(db.Model):
    """Goods received from a supplier. Never updated after insert."""
    __tablename__ = 'stock_ins'
    __table_args__ = (
        db.CheckConstraint('quantity >= 1', name='ck_stock_ins_quantity_positive'),
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    supplier = db.Column(db.String(255), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    attachment_url = db.Column(db.String(500), nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f'<StockInRecord {self.id} product={self.product_id} qty={self.quantity}>'
