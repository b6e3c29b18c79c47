"""
Stock Out Service - Request lifecycle for taking stock out
"""

from typing import List
import logging

from stockroom.database import transaction, utcnow
from stockroom.exceptions import InventoryError, InvalidStateError, NotFoundError
from stockroom.models import RequestStatus, StockOutRequest
from stockroom.repositories import ProductRepository, StockOutRequestRepository, UserRepository
from .reconciliation_service import ReconciliationService, require_positive_quantity, require_text

logger = logging.getLogger(__name__)


class StockOutService:
    """Business logic for creating, reviewing and fulfilling stock-out requests"""

    def __init__(self):
        self.request_repo = StockOutRequestRepository()
        self.product_repo = ProductRepository()
        self.user_repo = UserRepository()
        self.reconciliation = ReconciliationService()

    def create_request(self, product_id: int, requester_id: int, quantity: int,
                       purpose: str) -> StockOutRequest:
        """
        Open a new request in pending status.

        Stock is not checked here; a request may ask for more than is
        currently on the shelf and is refused at fulfilment time instead.
        """
        quantity = require_positive_quantity(quantity)
        purpose = require_text(purpose, 'Purpose')

        try:
            with transaction():
                if not self.product_repo.get_by_id(product_id):
                    raise NotFoundError(f"Product {product_id} not found")
                if not self.user_repo.get_by_id(requester_id):
                    raise NotFoundError(f"User {requester_id} not found")

                request = self.request_repo.add(StockOutRequest(
                    product_id=product_id,
                    requester_id=requester_id,
                    quantity=quantity,
                    purpose=purpose,
                    status=RequestStatus.PENDING
                ))

            logger.info(
                f"Created stock-out request {request.id} for {quantity} of product "
                f"{product_id} by user {requester_id}"
            )
            return request

        except InventoryError as e:
            logger.warning(f"Stock-out request rejected: {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error creating stock-out request for product {product_id}: {str(e)}")
            raise

    def approve_request(self, request_id: int, reviewer_id: int) -> StockOutRequest:
        """Move a pending request to approved, recording the reviewer"""
        return self._review(request_id, reviewer_id, RequestStatus.APPROVED)

    def reject_request(self, request_id: int, reviewer_id: int, reason: str) -> StockOutRequest:
        """Move a pending request to rejected; a reason is mandatory"""
        reason = require_text(reason, 'Rejection reason')
        return self._review(request_id, reviewer_id, RequestStatus.REJECTED,
                            rejection_reason=reason)

    def fulfill_request(self, request_id: int, actor_id: int) -> StockOutRequest:
        """Hand out the stock for an approved request"""
        return self.reconciliation.fulfill_stock_out(request_id, actor_id)

    def get_request(self, request_id: int) -> StockOutRequest:
        request = self.request_repo.get_by_id(request_id)
        if not request:
            raise NotFoundError(f"Stock-out request {request_id} not found")
        return request

    def list_requests(self, status: RequestStatus = None, requester_id: int = None) -> List[StockOutRequest]:
        """Get requests newest first"""
        try:
            return self.request_repo.get_all(status=status, requester_id=requester_id)
        except Exception as e:
            logger.error(f"Error listing stock-out requests: {str(e)}")
            raise

    def _review(self, request_id: int, reviewer_id: int, target: RequestStatus,
                **changes) -> StockOutRequest:
        try:
            with transaction():
                request = self.request_repo.get_for_update(request_id)
                if not request:
                    raise NotFoundError(f"Stock-out request {request_id} not found")
                if not self.user_repo.get_by_id(reviewer_id):
                    raise NotFoundError(f"User {reviewer_id} not found")

                if not request.status.can_transition_to(target):
                    raise InvalidStateError(
                        f"Request {request_id} is {request.status.value}; only pending "
                        f"requests can be {target.value}"
                    )

                moved = self.request_repo.transition(
                    request.id,
                    RequestStatus.PENDING,
                    target,
                    reviewed_by=reviewer_id,
                    reviewed_at=utcnow(),
                    **changes
                )
                if not moved:
                    raise InvalidStateError(
                        f"Request {request_id} is no longer pending"
                    )

            reviewed = self.request_repo.get_by_id(request_id)
            logger.info(f"Stock-out request {request_id} {target.value} by user {reviewer_id}")
            return reviewed

        except InventoryError as e:
            logger.warning(f"Review of request {request_id} refused ({e.kind}): {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error reviewing stock-out request {request_id}: {str(e)}")
            raise
