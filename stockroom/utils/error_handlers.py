from flask import jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
import logging

from stockroom.exceptions import (
    ForbiddenError, InsufficientStockError, InvalidArgumentError, InvalidStateError,
    InventoryError, NotFoundError
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFoundError: (404, 'Not Found'),
    InvalidArgumentError: (400, 'Invalid Argument'),
    InvalidStateError: (400, 'Invalid State'),
    ForbiddenError: (403, 'Forbidden'),
    InsufficientStockError: (400, 'Insufficient Stock'),
}


def inventory_error_response(error):
    """Build the JSON body and status code for an inventory failure"""
    status_code, title = ERROR_STATUS.get(type(error), (400, 'Bad Request'))
    body = {
        'error': title,
        'kind': error.kind,
        'message': error.message,
        'status_code': status_code
    }
    if isinstance(error, InsufficientStockError):
        body['available'] = error.available
        body['requested'] = error.requested
    return body, status_code


def validation_error_response(error):
    return {
        'error': 'Validation Error',
        'kind': 'invalid_argument',
        'message': 'Request data validation failed',
        'details': error.messages,
        'status_code': 400
    }, 400


def register_api_error_handlers(api):
    """
    Register handlers on the flask-restx Api so resources can simply raise

    marshmallow ValidationError is not registered here: restx prefers an
    exception's ``data`` attribute over the handler result, so resources
    catch it around ``schema.load`` instead.
    """

    @api.errorhandler(InventoryError)
    def handle_inventory_error(error):
        return inventory_error_response(error)

    @api.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return {
                'error': error.name,
                'message': error.description,
                'status_code': error.code
            }, error.code

        logger.error(f"Unhandled API error: {error}", exc_info=True)
        return {
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }, 500


def register_error_handlers(app):
    """Register application error handlers"""

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': 'The requested resource was not found',
            'status_code': 404
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'Method Not Allowed',
            'message': 'The method is not allowed for the requested URL',
            'status_code': 405
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500

    @app.errorhandler(InventoryError)
    def inventory_error(error):
        body, status_code = inventory_error_response(error)
        return jsonify(body), status_code

    @app.errorhandler(ValidationError)
    def validation_error(error):
        body, status_code = validation_error_response(error)
        return jsonify(body), status_code

    @app.errorhandler(HTTPException)
    def http_exception(error):
        return jsonify({
            'error': error.name,
            'message': error.description,
            'status_code': error.code
        }), error.code
