"""
Stock In Controller - Recording goods received from suppliers
"""

from flask import request
from flask_restx import Namespace, Resource, fields
from marshmallow import ValidationError
from stockroom.middlewares.auth import STOCK_HANDLER_ROLES, current_actor_id, require_auth, require_roles
from stockroom.services import ReconciliationService
from stockroom.utils.error_handlers import validation_error_response
from stockroom.utils.schemas import StockInRequestSchema, StockInResponseSchema, StockInSearchSchema
import logging

logger = logging.getLogger(__name__)

stock_in_ns = Namespace('stock-in', description='Stock-in operations')

stock_in_request_schema = StockInRequestSchema()
stock_in_response_schema = StockInResponseSchema()
stock_in_search_schema = StockInSearchSchema()

stock_in_model = stock_in_ns.model('StockIn', {
    'product_id': fields.Integer(required=True, description='Product ID'),
    'quantity': fields.Integer(required=True, description='Units received, at least 1'),
    'supplier': fields.String(required=True, description='Supplier name'),
    'notes': fields.String(description='Additional notes'),
    'attachment_url': fields.String(description='Link to delivery note or invoice')
})


@stock_in_ns.route('')
class StockInList(Resource):
    @stock_in_ns.doc('list_stock_ins', params={'product_id': 'Filter by product'})
    @require_auth
    def get(self):
        """List stock-in records, newest first"""
        try:
            params = stock_in_search_schema.load(request.args.to_dict())
        except ValidationError as e:
            return validation_error_response(e)

        records = ReconciliationService().list_stock_ins(**params)
        return stock_in_response_schema.dump(records, many=True), 200

    @stock_in_ns.doc('record_stock_in')
    @stock_in_ns.expect(stock_in_model)
    @require_roles(*STOCK_HANDLER_ROLES)
    def post(self):
        """Record received stock and raise the product quantity"""
        try:
            data = stock_in_request_schema.load(request.get_json(silent=True) or {})
        except ValidationError as e:
            return validation_error_response(e)

        record = ReconciliationService().record_stock_in(actor_id=current_actor_id(), **data)
        return stock_in_response_schema.dump(record), 201


@stock_in_ns.route('/<int:record_id>')
class StockInItem(Resource):
    @stock_in_ns.doc('get_stock_in')
    @require_auth
    def get(self, record_id):
        """Get a stock-in record by ID"""
        record = ReconciliationService().get_stock_in(record_id)
        return stock_in_response_schema.dump(record), 200
