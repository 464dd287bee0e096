import os
import logging
from flask import Flask, jsonify
from config import ProductionConfig, DevelopmentConfig, TestingConfig

# Import extensions to avoid circular imports
from extensions import db, login_manager, csrf, migrate

# Import models here so every table is registered before create_all
from models import User


def create_app(config_class=None):
    """
    Factory function to create the Flask application.
    Automatically selects configuration based on environment.
    """
    if config_class is None:
        env = os.environ.get('FLASK_ENV', 'production').lower()
        if env == 'development':
            config_class = DevelopmentConfig
        elif env == 'testing':
            config_class = TestingConfig
        else:
            config_class = ProductionConfig  # Default to production for security

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO))

    # Initialize extensions with the app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    if app.config.get('AUTO_CREATE_TABLES'):
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and uri != 'sqlite:///:memory:':
            os.makedirs(os.path.dirname(uri[len('sqlite:///'):]), exist_ok=True)
        with app.app_context():
            db.create_all()
            app.logger.debug("Database tables created")

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    from error_handler import register_error_handlers
    register_error_handlers(app)

    # Import and register blueprints
    from authroutes import auth_blueprint
    from api_routes import api_blueprint

    app.register_blueprint(auth_blueprint, url_prefix='/auth')
    app.register_blueprint(api_blueprint, url_prefix='/api')

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    return app
