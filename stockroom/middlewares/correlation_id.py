"""
Correlation ID middleware for Flask application
Tags every request, its log lines and its response with one identifier
"""
import uuid
import logging
from contextvars import ContextVar
from flask import Response, g, request, has_request_context

CORRELATION_HEADER = 'X-Correlation-ID'

# Context variable to store correlation ID for the current request
correlation_id_context: ContextVar[str] = ContextVar('correlation_id', default='')

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware:
    """
    Flask middleware for handling correlation IDs
    """

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize the middleware with Flask app"""
        app.before_request(self.before_request)
        app.after_request(self.after_request)

    def before_request(self):
        """Extract or generate correlation ID before request processing"""
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        g.correlation_id = correlation_id
        correlation_id_context.set(correlation_id)

        logger.info(f"{request.method} {request.path} - Processing request")

    def after_request(self, response: Response) -> Response:
        """Add correlation ID to response headers"""
        correlation_id = getattr(g, 'correlation_id', 'unknown')
        response.headers[CORRELATION_HEADER] = correlation_id

        logger.info(f"{request.method} {request.path} - Response: {response.status_code}")

        return response


def get_correlation_id() -> str:
    """Get current correlation ID from Flask g object or context"""
    if has_request_context() and hasattr(g, 'correlation_id'):
        return g.correlation_id

    return correlation_id_context.get() or 'unknown'


class CorrelationIdFormatter(logging.Formatter):
    """Formatter that includes the correlation ID in log messages"""

    def format(self, record):
        record.correlation_id = get_correlation_id()
        return super().format(record)


def init_correlation_id_logging(app):
    """
    Install the correlation ID formatter on the app and root log handlers
    """
    formatter = CorrelationIdFormatter(
        '%(asctime)s [%(correlation_id)s] %(levelname)s %(name)s: %(message)s'
    )

    for handler in app.logger.handlers + logging.getLogger().handlers:
        handler.setFormatter(formatter)
