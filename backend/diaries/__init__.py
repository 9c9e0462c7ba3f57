# Creates the Flask app (App Factory)
from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
import os
import logging
from .config import Config

# Extensions, bound to the app in create_app()
db = SQLAlchemy()
jwt = JWTManager()


def register_error_handlers(app):
    from .errors import ApiError

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            app.logger.error(f'{request.method} {request.path} failed: {error.message}')
        else:
            app.logger.debug(f'{request.method} {request.path} -> {error.status_code}: {error.message}')
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        app.logger.exception('Database operation failed')
        return jsonify({'success': False, 'message': 'Server error'}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api'):
            return error
        return jsonify({'success': False, 'message': error.description}), error.code


# Application Factory Function
def create_app(config_object=Config):
    # Disable Flask's default static handler so we can serve the frontend build under /
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_object)

    # Logging configuration (DEBUG level by default)
    if not app.logger.handlers:
        logging.basicConfig(level=app.config['LOG_LEVEL'],
                            format='%(asctime)s %(levelname)s %(name)s - %(message)s')
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Extensions
    db.init_app(app)
    jwt.init_app(app)
    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    # Registers the token loaders on jwt
    from . import auth
    from .routes import register_blueprints
    register_blueprints(app)
    register_error_handlers(app)

    with app.app_context():
        from . import models  # noqa: F401 - registers tables for create_all()
        db.create_all()
        auth.ensure_admin_account(app)
    app.logger.debug('Application created and configured')

    build_dir = app.config['FRONTEND_BUILD_DIR']

    @app.route('/')
    @app.route('/<path:path>')
    def serve_frontend(path: str = None):
        # If requesting API, do nothing here (handled by blueprints)
        if path and path.startswith('api/'):
            app.logger.debug('Bypassing frontend route for API path')
            return jsonify({'success': False, 'message': 'Not Found'}), 404

        if os.path.isdir(build_dir):
            # Serve static files if they exist
            if path and os.path.exists(os.path.join(build_dir, path)):
                app.logger.debug(f'Serving static asset: {path}')
                return send_from_directory(build_dir, path)
            index_path = os.path.join(build_dir, 'index.html')
            if os.path.exists(index_path):
                app.logger.debug('Serving frontend index.html')
                return send_from_directory(build_dir, 'index.html')

        app.logger.debug('Frontend build not found; returning backend info JSON')
        return jsonify({
            'message': 'Backend running',
            'api_base': '/api',
            'health': '/api/health',
        }), 200

    return app
