"""
Reconciliation Service - the only code path that changes product quantities

Every quantity change happens in a single transaction together with the
ledger record that caused it and the matching stock movement.
"""

from typing import List, Optional, Tuple
import logging

from stockroom.database import transaction, utcnow
from stockroom.exceptions import (
    ForbiddenError, InsufficientStockError, InvalidArgumentError, InvalidStateError, NotFoundError
)
from stockroom.models import (
    MovementType, Product, RequestStatus, StockInRecord, StockMovement, StockOutRequest, User
)
from stockroom.repositories import (
    ProductRepository, StockInRepository, StockMovementRepository,
    StockOutRequestRepository, UserRepository
)

logger = logging.getLogger(__name__)


def require_positive_quantity(quantity) -> int:
    """Reject anything that is not a whole number of at least one unit"""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidArgumentError("Quantity must be a whole number of at least 1")
    return quantity


def require_text(value, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{field_name} is required")
    return str(value).strip()


class ReconciliationService:
    """Applies stock-in and stock-out effects to products and writes the audit trail"""

    def __init__(self):
        self.product_repo = ProductRepository()
        self.stock_in_repo = StockInRepository()
        self.request_repo = StockOutRequestRepository()
        self.movement_repo = StockMovementRepository()
        self.user_repo = UserRepository()

    def record_stock_in(self, product_id: int, quantity: int, supplier: str, actor_id: int,
                        notes: Optional[str] = None,
                        attachment_url: Optional[str] = None) -> StockInRecord:
        """
        Record goods received for a product.

        Inserts the stock-in record, raises the product's available and
        lifetime quantity by the received amount and appends a stock_in
        movement, all in one transaction.

        Raises:
            InvalidArgumentError: quantity below 1 or missing supplier
            NotFoundError: unknown product or actor
        """
        quantity = require_positive_quantity(quantity)
        supplier = require_text(supplier, 'Supplier')

        try:
            with transaction():
                product = self._lock_product(product_id)
                self._require_user(actor_id)

                record = self.stock_in_repo.add(StockInRecord(
                    product_id=product.id,
                    quantity=quantity,
                    supplier=supplier,
                    notes=notes,
                    attachment_url=attachment_url,
                    created_by=actor_id
                ))

                if not self.product_repo.increment_quantity(product.id, quantity):
                    raise NotFoundError(f"Product {product_id} not found")

                self.movement_repo.add(StockMovement(
                    product_id=product.id,
                    movement_type=MovementType.STOCK_IN,
                    quantity=quantity,
                    reference_id=record.id,
                    user_id=actor_id,
                    notes=notes
                ))

            logger.info(
                f"Recorded stock-in {record.id}: +{quantity} of product {product_id} "
                f"from {supplier} by user {actor_id}"
            )
            return record

        except NotFoundError as e:
            logger.warning(f"Stock-in rejected: {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error recording stock-in for product {product_id}: {str(e)}")
            raise

    def fulfill_stock_out(self, request_id: int, actor_id: int) -> StockOutRequest:
        """
        Hand out the stock for an approved request.

        Sufficiency is checked here, at fulfilment time, because approval
        does not hold stock. Both writes are compare-and-set updates, so a
        concurrent fulfilment of the same request or the same product makes
        this one fail and roll back rather than double-decrement.

        Raises:
            NotFoundError: unknown request, actor or product
            InvalidStateError: request is not approved
            ForbiddenError: actor is the requester
            InsufficientStockError: product has fewer units than requested
        """
        try:
            with transaction():
                request = self.request_repo.get_for_update(request_id)
                if not request:
                    raise NotFoundError(f"Stock-out request {request_id} not found")

                self._require_user(actor_id)

                if not request.status.can_transition_to(RequestStatus.FULFILLED):
                    raise InvalidStateError("Only approved requests can be fulfilled")

                if request.requester_id == actor_id:
                    raise ForbiddenError("Cannot fulfill your own request")

                product = self._lock_product(request.product_id)
                if product.quantity < request.quantity:
                    raise InsufficientStockError(product.quantity, request.quantity)

                claimed = self.request_repo.transition(
                    request.id,
                    RequestStatus.APPROVED,
                    RequestStatus.FULFILLED,
                    fulfilled_by=actor_id,
                    fulfilled_at=utcnow()
                )
                if not claimed:
                    raise InvalidStateError("Only approved requests can be fulfilled")

                if not self.product_repo.decrement_quantity(product.id, request.quantity):
                    current = self.product_repo.get_for_update(product.id)
                    raise InsufficientStockError(
                        current.quantity if current else 0, request.quantity
                    )

                self.movement_repo.add(StockMovement(
                    product_id=product.id,
                    movement_type=MovementType.STOCK_OUT,
                    quantity=request.quantity,
                    reference_id=request.id,
                    user_id=actor_id
                ))

            fulfilled = self.request_repo.get_by_id(request_id)
            logger.info(
                f"Fulfilled stock-out request {request_id}: -{fulfilled.quantity} of "
                f"product {fulfilled.product_id} by user {actor_id}"
            )
            return fulfilled

        except (NotFoundError, InvalidStateError, ForbiddenError, InsufficientStockError) as e:
            logger.warning(f"Fulfilment of request {request_id} refused ({e.kind}): {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error fulfilling stock-out request {request_id}: {str(e)}")
            raise

    def list_stock_ins(self, product_id: int = None) -> List[StockInRecord]:
        """Get stock-in records, newest first"""
        return self.stock_in_repo.get_all(product_id=product_id)

    def get_stock_in(self, record_id: int) -> StockInRecord:
        record = self.stock_in_repo.get_by_id(record_id)
        if not record:
            raise NotFoundError(f"Stock-in record {record_id} not found")
        return record

    def list_movements(self, product_id: int = None, movement_type: MovementType = None,
                       page: int = 1, per_page: int = 20) -> Tuple[List[StockMovement], int]:
        """Page through the movement audit trail"""
        return self.movement_repo.search(
            product_id=product_id,
            movement_type=movement_type,
            page=page,
            per_page=per_page
        )

    def list_product_movements(self, product_id: int) -> List[StockMovement]:
        """Get the full movement history of one product, newest first"""
        if not self.product_repo.get_by_id(product_id):
            raise NotFoundError(f"Product {product_id} not found")
        return self.movement_repo.get_by_product(product_id)

    def _lock_product(self, product_id: int) -> Product:
        product = self.product_repo.get_for_update(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def _require_user(self, user_id: int) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user
