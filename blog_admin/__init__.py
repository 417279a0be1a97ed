import os
import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
import pytz

import click
from flask import Flask, request, redirect, render_template
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect
from werkzeug.exceptions import HTTPException

from config import get_config

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()


def init_csrf(app: 'Flask') -> None:
    """Enable CSRF protection unless the configuration turns it off"""
    if not app.config.get('WTF_CSRF_ENABLED', True):
        return

    csrf.init_app(app)
    app.logger.info('CSRF protection enabled')


LOG_HANDLER_NAME = 'blog_admin'


def _install_log_handler(app: 'Flask', handler: logging.Handler) -> None:
    """Attach handler, replacing the one an earlier create_app() left on the shared logger"""
    for existing in list(app.logger.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            app.logger.removeHandler(existing)
            existing.close()
    handler.set_name(LOG_HANDLER_NAME)
    app.logger.addHandler(handler)


def configure_logging(app: 'Flask') -> None:
    """Configure application logging for the current environment"""
    if app.debug or app.testing:
        # Console output for development and tests
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        console_handler.setLevel(logging.DEBUG)
        _install_log_handler(app, console_handler)
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('Development logging configured')
    else:
        # Production logging - rotating file output
        log_file = app.config.get('LOG_FILE', 'logs/app.log')

        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            try:
                os.makedirs(log_dir, exist_ok=True)
            except OSError as e:
                app.logger.error(f"Failed to create log directory {log_dir}: {e}. Falling back to 'app.log'.")
                log_file = 'app.log'

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        _install_log_handler(app, file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Production logging configured')


def register_blueprints(app: 'Flask') -> None:
    """Register all application blueprints"""
    from blog_admin.routes.public import bp as public_bp
    app.register_blueprint(public_bp)

    from blog_admin.routes.admin import bp as admin_bp
    app.register_blueprint(admin_bp)

    app.logger.info('All blueprints registered successfully')


def setup_security_headers(app: 'Flask') -> None:
    """Configure security-related request hooks"""

    @app.before_request
    def before_request():
        """Enforce HTTPS before each request"""
        # Skipped in debug and testing so local HTTP keeps working
        if not app.debug and not app.testing and app.config.get('FORCE_HTTPS', True):
            if not request.is_secure and request.headers.get('X-Forwarded-Proto') != 'https':
                if request.method == 'GET':
                    return redirect(request.url.replace('http://', 'https://'), code=301)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to every response"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        if not app.debug and app.config.get('FORCE_HTTPS', True):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains; preload'

        csp_config = app.config.get('CSP')
        if csp_config:
            csp_parts = []
            for directive, values in csp_config.items():
                if values:
                    csp_parts.append(f"{directive} {' '.join(values)}")
                else:
                    csp_parts.append(directive)
            response.headers['Content-Security-Policy'] = '; '.join(csp_parts)

        return response


def register_error_handlers(app: 'Flask') -> None:
    """Register error handlers for the application"""

    @app.errorhandler(400)
    def bad_request_error(error):
        """Handle 400 Bad Request"""
        app.logger.warning(f"Bad request to {request.url}: {error.description}")
        return render_template('error/400.html', message=error.description), 400

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 Not Found"""
        app.logger.info(f"Page not found: {request.url}")
        return render_template('error/404.html'), 404

    @app.errorhandler(Exception)
    def unhandled_error(error):
        """Render any uncaught exception with its message"""
        if isinstance(error, HTTPException):
            return error

        db.session.rollback()
        app.logger.error(f"Server Error on {request.url}: {error}", exc_info=error)
        return render_template('error/500.html', message=str(error)), 500


def register_context_processors(app: 'Flask') -> None:
    """Register template context processors

    'csrf_enabled' tells templates whether to render the hidden csrf_token input.
    """

    @app.context_processor
    def inject_template_vars():
        """Inject common variables into template context"""
        tz = pytz.timezone(app.config.get('TIMEZONE', 'UTC'))
        return {
            'now': datetime.now(tz),
            'app_version': app.config.get('VERSION', '1.0.0'),
            'csrf_enabled': app.config.get('WTF_CSRF_ENABLED', True),
        }


def register_commands(app: 'Flask') -> None:
    """Register flask CLI commands"""

    @app.cli.command('init-db')
    @click.option('--seed/--no-seed', default=False, help='Insert sample posts.')
    def init_db_command(seed):
        """Create database tables, optionally seeding sample posts."""
        create_tables(app)
        if seed:
            from blog_admin.services.post_service import PostService
            created = PostService.seed_posts()
            click.echo(f'Seeded {created} post(s).')
        click.echo('Database initialized.')


def create_app(config_name: str = None, config_class = None) -> 'Flask':
    """
    Application factory function

    Args:
        config_name (str): Configuration environment name
        config_class: Configuration class (overrides config_name if provided)

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Load configuration
    if config_class is None:
        config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize configuration
    config_class.init_app(app)

    # Initialize core extensions
    db.init_app(app)
    migrate.init_app(app, db)
    init_csrf(app)

    # Configure application components
    configure_logging(app)
    register_blueprints(app)
    setup_security_headers(app)
    register_error_handlers(app)
    register_context_processors(app)
    register_commands(app)

    app.logger.info(f'Application created with {config_name or config_class.__name__} configuration')
    return app


def create_tables(app: 'Flask') -> None:
    """
    Create database tables

    Suitable for development or one-time initialization only. Use
    Flask-Migrate (flask db init/migrate/upgrade) for schema changes.

    Args:
        app: Flask application instance
    """
    with app.app_context():
        try:
            db.create_all()
            app.logger.info('Database tables created successfully')
        except Exception as e:
            app.logger.error(f'Error creating database tables: {e}')
            raise
