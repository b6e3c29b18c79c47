"""
Controllers package initialization
"""

from flask import Blueprint
from flask_restx import Api

from stockroom.utils.error_handlers import register_api_error_handlers
from .products import products_ns
from .stock_in import stock_in_ns
from .stock_out import stock_out_ns
from .movements import movements_ns
from .analytics import analytics_ns
from .users import users_ns
from .health import health_bp

api_bp = Blueprint('api', __name__)
api = Api(api_bp, version='1.0', title='Stockroom API',
          description='Small-business inventory tracking endpoints', doc='/docs/')

api.add_namespace(products_ns, path='/products')
api.add_namespace(stock_in_ns, path='/stock-in')
api.add_namespace(stock_out_ns, path='/stock-out')
api.add_namespace(movements_ns, path='/movements')
api.add_namespace(analytics_ns, path='/analytics')
api.add_namespace(users_ns, path='/users')

register_api_error_handlers(api)

__all__ = ['api_bp', 'api', 'health_bp']
