"""
Products Controller - Catalogue CRUD and per-product movement history
"""

from flask import request
from flask_restx import Namespace, Resource, fields
from marshmallow import ValidationError
from stockroom.middlewares.auth import REVIEWER_ROLES, STOCK_HANDLER_ROLES, require_auth, require_roles
from stockroom.services import ProductService, ReconciliationService
from stockroom.utils.error_handlers import validation_error_response
from stockroom.utils.schemas import (
    ProductRequestSchema, ProductUpdateSchema, ProductResponseSchema,
    ProductSearchSchema, StockMovementResponseSchema
)
import logging

logger = logging.getLogger(__name__)

products_ns = Namespace('products', description='Product catalogue operations')

# Initialize schemas
product_request_schema = ProductRequestSchema()
product_update_schema = ProductUpdateSchema()
product_response_schema = ProductResponseSchema()
product_search_schema = ProductSearchSchema()
movement_response_schema = StockMovementResponseSchema()

product_model = products_ns.model('Product', {
    'name': fields.String(required=True, description='Product name'),
    'sku': fields.String(required=True, description='Stock keeping unit, unique'),
    'category': fields.String(required=True, description='Product category'),
    'vendor': fields.String(required=True, description='Vendor name'),
    'quantity': fields.Integer(description='Opening available quantity'),
    'total_quantity': fields.Integer(description='Opening lifetime quantity'),
    'reorder_threshold': fields.Integer(description='Low stock threshold'),
    'cost_price': fields.String(required=True, description='Cost price, 2 decimal places'),
    'selling_price': fields.String(required=True, description='Selling price, 2 decimal places'),
    'description': fields.String(description='Free text description')
})


@products_ns.route('')
class ProductList(Resource):
    @products_ns.doc('list_products', params={'category': 'Filter by category', 'search': 'Match name or SKU'})
    @require_auth
    def get(self):
        """List products ordered by name"""
        try:
            params = product_search_schema.load(request.args.to_dict())
        except ValidationError as e:
            return validation_error_response(e)

        products = ProductService().list_products(**params)
        return product_response_schema.dump(products, many=True), 200

    @products_ns.doc('create_product')
    @products_ns.expect(product_model)
    @require_roles(*STOCK_HANDLER_ROLES)
    def post(self):
        """Create a product"""
        try:
            data = product_request_schema.load(request.get_json(silent=True) or {})
        except ValidationError as e:
            return validation_error_response(e)

        product = ProductService().create_product(**data)
        return product_response_schema.dump(product), 201


@products_ns.route('/low-stock')
class LowStockProducts(Resource):
    @products_ns.doc('list_low_stock_products')
    @require_auth
    def get(self):
        """List products below their reorder threshold"""
        products = ProductService().list_low_stock_products()
        return product_response_schema.dump(products, many=True), 200


@products_ns.route('/<int:product_id>')
class ProductItem(Resource):
    @products_ns.doc('get_product')
    @require_auth
    def get(self, product_id):
        """Get a product by ID"""
        product = ProductService().get_product(product_id)
        return product_response_schema.dump(product), 200

    @products_ns.doc('update_product')
    @products_ns.expect(product_model)
    @require_roles(*STOCK_HANDLER_ROLES)
    def put(self, product_id):
        """Update catalogue fields of a product"""
        try:
            data = product_update_schema.load(request.get_json(silent=True) or {})
        except ValidationError as e:
            return validation_error_response(e)

        product = ProductService().update_product(product_id, data)
        return product_response_schema.dump(product), 200

    @products_ns.doc('delete_product')
    @require_roles(*REVIEWER_ROLES)
    def delete(self, product_id):
        """Delete a product without stock history"""
        ProductService().delete_product(product_id)
        return {'message': 'Product deleted successfully'}, 200


@products_ns.route('/<int:product_id>/movements')
class ProductMovements(Resource):
    @products_ns.doc('list_product_movements')
    @require_auth
    def get(self, product_id):
        """Movement history of one product, newest first"""
        movements = ReconciliationService().list_product_movements(product_id)
        return movement_response_schema.dump(movements, many=True), 200
