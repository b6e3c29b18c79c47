"""
Movements Controller - Paginated stock movement audit trail
"""

from flask import current_app, request
from flask_restx import Namespace, Resource
from marshmallow import ValidationError
from stockroom.middlewares.auth import require_auth
from stockroom.services import ReconciliationService
from stockroom.utils.error_handlers import validation_error_response
from stockroom.utils.schemas import MovementSearchSchema, StockMovementResponseSchema
import logging

logger = logging.getLogger(__name__)

movements_ns = Namespace('movements', description='Stock movement audit trail')

movement_search_schema = MovementSearchSchema()
movement_response_schema = StockMovementResponseSchema()


@movements_ns.route('')
class MovementList(Resource):
    @movements_ns.doc('list_movements', params={
        'product_id': 'Filter by product',
        'movement_type': 'stock_in or stock_out',
        'page': 'Page number, from 1',
        'per_page': 'Page size'
    })
    @require_auth
    def get(self):
        """Page through stock movements, newest first"""
        try:
            params = movement_search_schema.load(request.args.to_dict())
        except ValidationError as e:
            return validation_error_response(e)

        per_page = min(
            params.pop('per_page', None) or current_app.config['DEFAULT_PAGE_SIZE'],
            current_app.config['MAX_PAGE_SIZE']
        )

        movements, total = ReconciliationService().list_movements(per_page=per_page, **params)

        return {
            'items': movement_response_schema.dump(movements, many=True),
            'total': total,
            'page': params['page'],
            'per_page': per_page
        }, 200
