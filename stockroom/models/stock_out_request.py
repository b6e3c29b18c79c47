"""
Stock Out Request Model
"""

from stockroom.database import db, utcnow
from .enums import RequestStatus, enum_values


class StockOutRequest(db.Model):
    """Request to take stock out, moving through the review lifecycle"""
    __tablename__ = 'stock_out_requests'
    __table_args__ = (
        db.CheckConstraint('quantity >= 1', name='ck_stock_out_requests_quantity_positive'),
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False, index=True)
    requester_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    purpose = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.Enum(RequestStatus, name='request_status', values_callable=enum_values),
        default=RequestStatus.PENDING,
        nullable=False,
        index=True
    )
    reviewed_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    reviewed_at = db.Column(db.DateTime, nullable=True)
    fulfilled_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    fulfilled_at = db.Column(db.DateTime, nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f'<StockOutRequest {self.id} {self.status.value}>'
