"""
Analytics Controller - Provides inventory statistics for dashboards
"""

from flask import current_app, request
from flask_restx import Namespace, Resource
from marshmallow import ValidationError
from stockroom.middlewares.auth import require_auth
from stockroom.services import AnalyticsService
from stockroom.utils.error_handlers import validation_error_response
from stockroom.utils.schemas import (
    ActivitySchema, ActivitySearchSchema, CategoryValueSchema, DashboardStatsSchema
)
import logging

logger = logging.getLogger(__name__)

analytics_ns = Namespace('analytics', description='Dashboard analytics')

dashboard_stats_schema = DashboardStatsSchema()
category_value_schema = CategoryValueSchema()
activity_schema = ActivitySchema()
activity_search_schema = ActivitySearchSchema()


@analytics_ns.route('/dashboard')
class DashboardStats(Resource):
    @analytics_ns.doc('dashboard_stats')
    @require_auth
    def get(self):
        """
        Get headline numbers for the dashboard

        Returns total_products, low_stock_count, total_stock_value and active_users
        """
        stats = AnalyticsService().dashboard_stats()
        logger.info(f"Stats retrieved: {stats}")
        return dashboard_stats_schema.dump(stats), 200


@analytics_ns.route('/stock-in-by-category')
class StockInByCategory(Resource):
    @analytics_ns.doc('stock_in_by_category')
    @require_auth
    def get(self):
        """Received units per category"""
        breakdown = AnalyticsService().stock_in_by_category()
        return category_value_schema.dump(breakdown, many=True), 200


@analytics_ns.route('/stock-out-by-category')
class StockOutByCategory(Resource):
    @analytics_ns.doc('stock_out_by_category')
    @require_auth
    def get(self):
        """Fulfilled stock-out units per category"""
        breakdown = AnalyticsService().stock_out_by_category()
        return category_value_schema.dump(breakdown, many=True), 200


@analytics_ns.route('/recent-activity')
class RecentActivity(Resource):
    @analytics_ns.doc('recent_activity', params={'limit': 'Number of items, default 10'})
    @require_auth
    def get(self):
        """Latest stock-ins, approvals, rejections and stock-outs"""
        try:
            params = activity_search_schema.load(request.args.to_dict())
        except ValidationError as e:
            return validation_error_response(e)

        limit = params.get('limit') or current_app.config['RECENT_ACTIVITY_LIMIT']
        activity = AnalyticsService().recent_activity(limit)
        return activity_schema.dump(activity, many=True), 200
