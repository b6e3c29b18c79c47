"""
Analytics Service - Read-only dashboard metrics
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List
import logging

from stockroom.models import RequestStatus
from stockroom.repositories import (
    ProductRepository, StockInRepository, StockOutRequestRepository, UserRepository
)

logger = logging.getLogger(__name__)

ACTIVITY_TYPES = {
    RequestStatus.APPROVED: 'approval',
    RequestStatus.REJECTED: 'rejection',
    RequestStatus.FULFILLED: 'stock-out',
}


class AnalyticsService:
    """Aggregates recomputed from the ledger on every call"""

    def __init__(self):
        self.product_repo = ProductRepository()
        self.stock_in_repo = StockInRepository()
        self.request_repo = StockOutRequestRepository()
        self.user_repo = UserRepository()

    def dashboard_stats(self) -> Dict[str, Any]:
        """
        Get headline numbers for the dashboard

        Returns:
            Dict with:
            - total_products: catalogue size
            - low_stock_count: products below their reorder threshold
            - total_stock_value: sum of quantity * selling_price, rounded half-up
            - active_users: users flagged active
        """
        try:
            stock_value = self.product_repo.calculate_stock_value()
            stats = {
                'total_products': self.product_repo.count_total(),
                'low_stock_count': self.product_repo.count_low_stock(),
                'total_stock_value': int(stock_value.quantize(Decimal('1'), rounding=ROUND_HALF_UP)),
                'active_users': self.user_repo.count_active(),
            }
            logger.debug(f"Dashboard stats computed: {stats}")
            return stats

        except Exception as e:
            logger.error(f"Error computing dashboard stats: {str(e)}")
            raise

    def stock_in_by_category(self) -> List[Dict[str, Any]]:
        """Received units per category"""
        try:
            return [
                {'category': category, 'value': int(value or 0)}
                for category, value in self.stock_in_repo.sum_by_category()
            ]
        except Exception as e:
            logger.error(f"Error computing stock-in by category: {str(e)}")
            raise

    def stock_out_by_category(self) -> List[Dict[str, Any]]:
        """Handed-out units per category; only fulfilled requests count"""
        try:
            return [
                {'category': category, 'value': int(value or 0)}
                for category, value in self.request_repo.sum_fulfilled_by_category()
            ]
        except Exception as e:
            logger.error(f"Error computing stock-out by category: {str(e)}")
            raise

    def recent_activity(self, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Merge recent stock-ins and reviewed requests into one feed.

        A request's event time is its last update, so an approval that was
        later fulfilled shows up once, as a stock-out.
        """
        try:
            activity = [
                {
                    'id': record.id,
                    'type': 'stock-in',
                    'product_id': record.product_id,
                    'user_id': record.created_by,
                    'quantity': record.quantity,
                    'created_at': record.created_at,
                }
                for record in self.stock_in_repo.get_recent(limit)
            ]

            activity.extend(
                {
                    'id': request.id,
                    'type': ACTIVITY_TYPES[request.status],
                    'product_id': request.product_id,
                    'user_id': request.requester_id,
                    'quantity': request.quantity,
                    'created_at': request.updated_at,
                }
                for request in self.request_repo.get_recent_reviewed(limit)
            )

            activity.sort(key=lambda item: item['created_at'], reverse=True)
            return activity[:limit]

        except Exception as e:
            logger.error(f"Error building recent activity: {str(e)}")
            raise
