"""
Stock Out Controller - Stock-out request lifecycle
"""

from flask import request
from flask_restx import Namespace, Resource, fields
from marshmallow import ValidationError
from stockroom.middlewares.auth import (
    REVIEWER_ROLES, STOCK_HANDLER_ROLES, current_actor_id, require_auth, require_roles
)
from stockroom.services import StockOutService
from stockroom.utils.error_handlers import validation_error_response
from stockroom.utils.schemas import (
    RejectRequestSchema, StockOutRequestSchema, StockOutResponseSchema, StockOutSearchSchema
)
import logging

logger = logging.getLogger(__name__)

stock_out_ns = Namespace('stock-out', description='Stock-out request operations')

stock_out_request_schema = StockOutRequestSchema()
stock_out_response_schema = StockOutResponseSchema()
stock_out_search_schema = StockOutSearchSchema()
reject_request_schema = RejectRequestSchema()

stock_out_model = stock_out_ns.model('StockOutRequest', {
    'product_id': fields.Integer(required=True, description='Product ID'),
    'quantity': fields.Integer(required=True, description='Units requested, at least 1'),
    'purpose': fields.String(required=True, description='Why the stock is needed')
})

reject_model = stock_out_ns.model('RejectStockOutRequest', {
    'reason': fields.String(required=True, description='Reason for rejection')
})


@stock_out_ns.route('')
class StockOutList(Resource):
    @stock_out_ns.doc('list_stock_out_requests', params={
        'status': 'pending, approved, rejected or fulfilled',
        'requester_id': 'Filter by requesting user'
    })
    @require_auth
    def get(self):
        """List stock-out requests, newest first"""
        try:
            params = stock_out_search_schema.load(request.args.to_dict())
        except ValidationError as e:
            return validation_error_response(e)

        requests = StockOutService().list_requests(**params)
        return stock_out_response_schema.dump(requests, many=True), 200

    @stock_out_ns.doc('create_stock_out_request')
    @stock_out_ns.expect(stock_out_model)
    @require_auth
    def post(self):
        """Open a stock-out request for the current user"""
        try:
            data = stock_out_request_schema.load(request.get_json(silent=True) or {})
        except ValidationError as e:
            return validation_error_response(e)

        stock_out = StockOutService().create_request(requester_id=current_actor_id(), **data)
        return stock_out_response_schema.dump(stock_out), 201


@stock_out_ns.route('/<int:request_id>')
class StockOutItem(Resource):
    @stock_out_ns.doc('get_stock_out_request')
    @require_auth
    def get(self, request_id):
        """Get a stock-out request by ID"""
        stock_out = StockOutService().get_request(request_id)
        return stock_out_response_schema.dump(stock_out), 200


@stock_out_ns.route('/<int:request_id>/approve')
class StockOutApproval(Resource):
    @stock_out_ns.doc('approve_stock_out_request')
    @require_roles(*REVIEWER_ROLES)
    def post(self, request_id):
        """Approve a pending request"""
        stock_out = StockOutService().approve_request(request_id, current_actor_id())
        return stock_out_response_schema.dump(stock_out), 200


@stock_out_ns.route('/<int:request_id>/reject')
class StockOutRejection(Resource):
    @stock_out_ns.doc('reject_stock_out_request')
    @stock_out_ns.expect(reject_model)
    @require_roles(*REVIEWER_ROLES)
    def post(self, request_id):
        """Reject a pending request with a reason"""
        try:
            data = reject_request_schema.load(request.get_json(silent=True) or {})
        except ValidationError as e:
            return validation_error_response(e)

        stock_out = StockOutService().reject_request(request_id, current_actor_id(), data['reason'])
        return stock_out_response_schema.dump(stock_out), 200


@stock_out_ns.route('/<int:request_id>/fulfill')
class StockOutFulfilment(Resource):
    @stock_out_ns.doc('fulfill_stock_out_request')
    @require_roles(*STOCK_HANDLER_ROLES)
    def post(self, request_id):
        """Hand out the stock for an approved request"""
        stock_out = StockOutService().fulfill_request(request_id, current_actor_id())
        return stock_out_response_schema.dump(stock_out), 200
