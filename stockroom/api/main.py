#!/usr/bin/env python3
"""
Stockroom API
Flask-based REST API for tracking small-business inventory.
"""

import os
import logging
from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def create_app(config_name='default'):
    """Application factory pattern for API"""
    # Load environment variables before the config classes are read
    load_dotenv()

    app = Flask(__name__)

    # Load configuration
    from config import config, get_database_uri
    app.config.from_object(config[config_name])
    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = get_database_uri()

    # Configure logging
    if not app.testing:
        logging.basicConfig(
            level=getattr(logging, app.config['LOG_LEVEL']),
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )

    # Initialize correlation ID middleware
    from stockroom.middlewares.correlation_id import CorrelationIdMiddleware, init_correlation_id_logging
    CorrelationIdMiddleware(app)
    init_correlation_id_logging(app)

    # Initialize database
    from stockroom.database import init_db
    init_db(app)

    # CORS setup
    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))

    # Register blueprints/controllers
    from stockroom.api.controllers import api_bp, health_bp
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(health_bp)

    # Register error handlers
    from stockroom.utils.error_handlers import register_error_handlers
    register_error_handlers(app)

    app.logger.info(f"Stockroom API created with '{config_name}' configuration")
    return app


def init_database(app):
    """Initialize database tables"""
    from stockroom.database import db
    with app.app_context():
        try:
            from sqlalchemy import text
            db.session.execute(text('SELECT 1'))
            db.create_all()
            app.logger.info("Database tables created successfully")
            return True
        except Exception as e:
            app.logger.error(f"Failed to create database tables: {e}")
            if app.config.get('ENV_NAME') == 'production':
                raise
            app.logger.warning("Continuing without database connection in development mode")
            return False


def main():
    """Main application entry point for API"""
    env = os.environ.get('FLASK_ENV', 'production')

    # Create Flask application
    app = create_app(env)

    # Initialize database
    init_database(app)

    # Get host and port from environment
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', 5000))
    debug = env == 'development'

    logger.info(f"Starting Stockroom API on {host}:{port} (env: {env})")

    # Run the application
    app.run(
        host=host,
        port=port,
        debug=debug,
        threaded=True
    )


if __name__ == '__main__':
    main()
