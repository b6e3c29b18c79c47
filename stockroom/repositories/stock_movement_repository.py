"""
Stock Movement Repository Implementation
"""

from typing import List, Tuple

from stockroom.database import db
from stockroom.models import MovementType, StockMovement
from .base import StockMovementRepositoryInterface


class StockMovementRepository(StockMovementRepositoryInterface):
    """Append-only access to the movement audit trail"""

    def search(self, product_id: int = None, movement_type: MovementType = None,
               page: int = 1, per_page: int = 20) -> Tuple[List[StockMovement], int]:
        """Search movements newest first with pagination"""
        query = StockMovement.query

        if product_id is not None:
            query = query.filter(StockMovement.product_id == product_id)

        if movement_type is not None:
            query = query.filter(StockMovement.movement_type == movement_type)

        query = query.order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
        result = query.paginate(page=page, per_page=per_page, error_out=False)
        return result.items, result.total

    def get_by_product(self, product_id: int) -> List[StockMovement]:
        """Get movements for a product"""
        return StockMovement.query.filter_by(product_id=product_id).order_by(
            StockMovement.created_at.desc(), StockMovement.id.desc()
        ).all()

    def add(self, movement: StockMovement) -> StockMovement:
        """Stage a new movement in the current transaction"""
        db.session.add(movement)
        db.session.flush()
        return movement
