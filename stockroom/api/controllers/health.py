"""
Health check endpoints for the inventory tracker
Used by monitoring systems and load balancers; no authentication
"""

from flask import Blueprint, jsonify
from sqlalchemy import text
import os
import logging

from stockroom import __version__
from stockroom.database import db, utcnow

logger = logging.getLogger(__name__)

# Create blueprint for health endpoints
health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """Main health check endpoint; reports whether the database answers"""
    database_status = 'healthy'
    try:
        db.session.execute(text('SELECT 1'))
    except Exception as e:
        db.session.rollback()
        logger.error(f"Database health check failed: {e}")
        database_status = 'unhealthy'

    status = 'healthy' if database_status == 'healthy' else 'degraded'

    return jsonify({
        'status': status,
        'service': os.environ.get('NAME', 'stockroom'),
        'timestamp': utcnow().isoformat() + 'Z',
        'version': __version__,
        'checks': {'database': database_status},
    }), 200 if status == 'healthy' else 503
