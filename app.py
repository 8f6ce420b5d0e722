import logging
import os
from flask import Flask, redirect
from config import ProductionConfig, DevelopmentConfig, TestingConfig

# Import extensions to avoid circular imports
from extensions import db, login_manager, csrf, migrate

# Import models here to avoid circular imports
from models import User


def configure_logging(app):
    """Send app.logger output to stderr at the configured LOG_LEVEL."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')), logging.INFO)
    logging.basicConfig(level=level,
                        format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    app.logger.setLevel(level)


def create_app(config_class=None):
    """
    Factory function to create the Flask application.
    Automatically selects configuration based on environment.
    """
    if config_class is None:
        # Auto-detect environment and select appropriate config
        env = os.environ.get('FLASK_ENV', 'production').lower()
        if env == 'development':
            config_class = DevelopmentConfig
        elif env == 'testing':
            config_class = TestingConfig
        else:
            config_class = ProductionConfig  # Default to production for security

    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Initialize extensions with the app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            app.logger.critical(f"FATAL DATABASE ERROR DURING INITIALIZATION: {e}")
            raise

    # User loader function for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Import and register blueprints
    from authroutes import auth_blueprint
    from lesson_routes import lesson_blueprint

    app.register_blueprint(auth_blueprint)
    app.register_blueprint(lesson_blueprint)

    from error_handler import register_error_handlers
    register_error_handlers(app)

    from commands import register_commands
    register_commands(app)

    @app.route('/')
    def home():
        return redirect(app.config['REDIRECTS']['classes'])

    return app
