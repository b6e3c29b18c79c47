"""
Stock Out Request Repository Implementation
"""

from typing import List, Optional, Tuple

from sqlalchemy import func

from stockroom.database import db, utcnow
from stockroom.models import Product, RequestStatus, StockOutRequest
from .base import StockOutRequestRepositoryInterface

REVIEWED_STATUSES = (RequestStatus.APPROVED, RequestStatus.REJECTED, RequestStatus.FULFILLED)


class StockOutRequestRepository(StockOutRequestRepositoryInterface):
    """Concrete implementation of stock-out request repository"""

    def get_by_id(self, request_id: int) -> Optional[StockOutRequest]:
        """Get request by ID"""
        return StockOutRequest.query.filter_by(id=request_id).first()

    def get_for_update(self, request_id: int) -> Optional[StockOutRequest]:
        """Get request with a row lock, refreshing any copy already in the session"""
        return (
            StockOutRequest.query.filter_by(id=request_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_all(self, status: RequestStatus = None, requester_id: int = None) -> List[StockOutRequest]:
        """Get requests newest first, optionally filtered by status and requester"""
        query = StockOutRequest.query

        if status is not None:
            query = query.filter(StockOutRequest.status == status)

        if requester_id is not None:
            query = query.filter(StockOutRequest.requester_id == requester_id)

        return query.order_by(StockOutRequest.created_at.desc(), StockOutRequest.id.desc()).all()

    def add(self, request: StockOutRequest) -> StockOutRequest:
        """Stage a new request in the current transaction"""
        db.session.add(request)
        db.session.flush()
        return request

    def transition(self, request_id: int, from_status: RequestStatus,
                   to_status: RequestStatus, **changes) -> bool:
        """
        Move a request between statuses.

        Compare-and-set on the status column: returns False when the row is
        no longer in from_status, e.g. a concurrent reviewer already moved it.
        """
        values = dict(changes)
        values['status'] = to_status
        values['updated_at'] = utcnow()

        updated = StockOutRequest.query.filter(
            StockOutRequest.id == request_id,
            StockOutRequest.status == from_status
        ).update(values, synchronize_session=False)
        return updated == 1

    def sum_fulfilled_by_category(self) -> List[Tuple[str, int]]:
        """Total handed-out units per product category"""
        return db.session.query(
            Product.category,
            func.sum(StockOutRequest.quantity)
        ).join(
            Product, StockOutRequest.product_id == Product.id
        ).filter(
            StockOutRequest.status == RequestStatus.FULFILLED
        ).group_by(Product.category).order_by(Product.category).all()

    def get_recent_reviewed(self, limit: int = 10) -> List[StockOutRequest]:
        """Get the most recently updated requests that left pending"""
        return StockOutRequest.query.filter(
            StockOutRequest.status.in_(REVIEWED_STATUSES)
        ).order_by(
            StockOutRequest.updated_at.desc(), StockOutRequest.id.desc()
        ).limit(limit).all()
