"""
Stock Movement Model
"""

from stockroom.database import db, utcnow
from .enums import MovementType, enum_values


class StockMovement(db.Model):
    """Append-only audit entry written for every quantity change"""
    __tablename__ = 'stock_movements'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False, index=True)
    movement_type = db.Column(
        db.Enum(MovementType, name='movement_type', values_callable=enum_values),
        nullable=False
    )
    quantity = db.Column(db.Integer, nullable=False)
    reference_id = db.Column(db.Integer, nullable=True)  # StockInRecord or StockOutRequest id
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f'<StockMovement {self.product_id} {self.movement_type.value} {self.quantity}>'
