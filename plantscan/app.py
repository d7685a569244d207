# =============================================================================
# PlantScan Backend
# app.py - Application Factory & Entry Point
#
# Flask application factory with extension initialization, blueprint
# registration, error handlers, and analysis service startup.
# =============================================================================

import os
import logging
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from plantscan import __version__
from plantscan.config import config
from plantscan.extensions import db, migrate, jwt, bcrypt, cors, limiter


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name: Configuration environment ('development', 'testing', 'production')
                    Defaults to FLASK_ENV environment variable or 'development'

    Returns:
        Flask: Configured Flask application instance
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    setup_logging(app)
    init_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    setup_database_handlers(app)

    with app.app_context():
        init_analysis_service(app)

    app.logger.info(f"PlantScan API started in {config_name} mode")

    return app


def setup_logging(app):
    """
    Configure application logging.

    Sets up logging format and level based on environment.
    """
    log_level = logging.DEBUG if app.config['DEBUG'] else logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app.logger.setLevel(log_level)


def init_extensions(app):
    """
    Initialize Flask extensions with the application instance.
    """
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    cors.init_app(
        app,
        origins=app.config.get('CORS_ORIGINS', ['http://localhost:8081']),
        supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
        allow_headers=['Content-Type', 'Authorization'],
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
    )

    limiter.init_app(app)

    app.logger.info("Flask extensions initialized")


def register_blueprints(app):
    """
    Register all API route blueprints.

    All API routes are prefixed with '/api'.
    """
    from plantscan.routes.auth import auth_bp
    from plantscan.routes.scan import scan_bp
    from plantscan.routes.history import history_bp
    from plantscan.routes.knowledge import knowledge_bp
    from plantscan.routes.subscription import subscription_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(scan_bp, url_prefix='/api/scan')
    app.register_blueprint(history_bp, url_prefix='/api/history')
    app.register_blueprint(knowledge_bp, url_prefix='/api/knowledge')
    app.register_blueprint(subscription_bp, url_prefix='/api/subscription')

    @app.route('/health', methods=['GET'])
    def health_check():
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            JSON response with API status, database connectivity and the
            analysis service summary
        """
        db_healthy = False

        try:
            db.session.execute(db.text('SELECT 1'))
            db.session.commit()
            db_healthy = True
            db_message = 'connected'
        except SQLAlchemyError as e:
            app.logger.error(f"Database health check failed: {e}")
            db.session.rollback()
            db_message = 'error'

        service = app.config.get('ANALYSIS_SERVICE')

        return jsonify({
            'status': 'healthy' if db_healthy else 'degraded',
            'message': 'PlantScan API is running',
            'version': __version__,
            'database': db_message,
            'labels_loaded': service.is_loaded() if service is not None else False,
            'analysis': service.info() if service is not None else None
        }), 200 if db_healthy else 503

    @app.route('/', methods=['GET'])
    def index():
        """Root endpoint with API information."""
        return jsonify({
            'name': 'PlantScan API',
            'description': 'Plant health scanning with disease and pest reports',
            'version': __version__,
            'health': '/health'
        })

    app.logger.info("Blueprints registered")


# (status code, title, message) for errors raised outside the route helpers
HTTP_ERRORS = (
    (400, 'Bad Request', None),
    (401, 'Unauthorized', 'Sign in to continue'),
    (403, 'Forbidden', 'Your account cannot access this resource'),
    (404, 'Not Found', 'No such endpoint or record'),
    (405, 'Method Not Allowed', 'This endpoint does not accept that method'),
    (413, 'File Too Large', 'Scan image exceeds the upload size limit'),
    (422, 'Unprocessable Entity', 'The image could not be analyzed'),
    (429, 'Rate Limit Exceeded', 'Scan quota reached, retry later'),
)


def _error_body(title, message, status_code):
    return jsonify({'success': False, 'error': title, 'message': message}), status_code


def register_error_handlers(app):
    """
    Register JSON error handlers for HTTP and token errors.
    """

    def make_handler(status_code, title, message):
        def handler(error):
            detail = message or getattr(error, 'description', None) or 'Invalid request'
            return _error_body(title, detail, status_code)
        return handler

    for status_code, title, message in HTTP_ERRORS:
        app.register_error_handler(status_code, make_handler(status_code, title, message))

    @app.errorhandler(500)
    def internal_server_error(error):
        db.session.rollback()
        app.logger.error(f"Unhandled error while serving scan API: {error}")
        return _error_body('Internal Server Error', 'Something went wrong on our side', 500)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return _error_body('Token Expired', 'Access token expired, refresh or sign in again', 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return _error_body('Invalid Token', reason, 401)

    @jwt.unauthorized_loader
    def missing_token_callback(reason):
        return _error_body('Authorization Required', reason, 401)

    app.logger.info(f"Registered {len(HTTP_ERRORS) + 1} error handlers")


def setup_database_handlers(app):
    """
    Remove the database session at the end of each request context,
    rolling back when the request raised.
    """

    @app.teardown_appcontext
    def shutdown_session(exception=None):
        if exception:
            db.session.rollback()
        db.session.remove()


def init_analysis_service(app):
    """
    Initialize the analysis service at application startup.

    The service is stored in app config for access in routes.
    """
    from plantscan.services.analysis import AnalysisService

    service = AnalysisService.from_config(app.config)

    app.config['ANALYSIS_SERVICE'] = service

    app.logger.info(f"Analysis service initialized: {service.info()}")


# =============================================================================
# Application Entry Point
# =============================================================================

if __name__ == '__main__':
    app = create_app()

    port = int(os.getenv('PORT', 5000))

    app.run(
        host='0.0.0.0',
        port=port,
        debug=app.config['DEBUG']
    )
