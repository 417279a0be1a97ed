import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Safely parse boolean-like environment variables."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {'1', 'true', 'yes', 'on'}

"""
Application Configuration Module

Configuration settings for the post admin application, with classes for
development, testing, and production environments.
"""

class Config:
    """
    Base Configuration Class

    Defines the settings shared by every environment. All environment-specific
    configuration classes inherit from this class.
    """
    # Basic Flask Configuration
    DEBUG = False
    TESTING = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Core Settings
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///posts.db')
    TIMEZONE = os.environ.get('TIMEZONE', 'UTC')
    LOG_FILE = os.environ.get('LOG_FILE', 'app.log')
    VERSION = os.environ.get('APP_VERSION', '1.0.0')

    # CSRF Configuration
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600

    # Session Configuration
    FORCE_HTTPS = env_bool('FORCE_HTTPS', False)
    SESSION_COOKIE_SECURE = env_bool('SESSION_COOKIE_SECURE', FORCE_HTTPS)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.environ.get('SESSION_COOKIE_SAMESITE', 'Lax')
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour

    # Security Configuration
    WTF_CSRF_SSL_STRICT = env_bool('WTF_CSRF_SSL_STRICT', FORCE_HTTPS)
    PREFERRED_URL_SCHEME = 'https' if FORCE_HTTPS or SESSION_COOKIE_SECURE else 'http'

    # Where every successful admin action lands
    POSTS_ADMIN_ENDPOINT = 'posts_admin.posts'

    # Basic Content Security Policy
    CSP = {
        'default-src': ["'self'"],
        'script-src': ["'self'"],
        'style-src': ["'self'"],
        'img-src': ["'self'", "data:"],
        'object-src': ["'none'"],
        'frame-ancestors': ["'none'"]
    }

    @classmethod
    def init_app(cls, app):
        """
        Initialize application configuration

        Called after the application is created and configured.
        Subclasses override this to run environment-specific setup.

        Args:
            app: Flask application instance
        """
        pass


class DevelopmentConfig(Config):
    """Development Environment Configuration"""

    DEBUG = True
    # Fixed key for development to keep sessions across restarts
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Development database lives in instance/ unless DATABASE_URL is set
    INSTANCE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'instance')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(INSTANCE_DIR, 'posts.db')

    # Relaxed session settings for development
    SESSION_COOKIE_SECURE = False
    FORCE_HTTPS = False

    # Development CSP - more permissive
    CSP = {
        'default-src': ["'self'"],
        'script-src': ["'self'", "'unsafe-inline'"],
        'style-src': ["'self'", "'unsafe-inline'"],
        'img-src': ["'self'", "data:", "https:", "blob:"],
        'object-src': ["'none'"],
        'font-src': ["'self'", "data:"]
    }

    @classmethod
    def init_app(cls, app):
        """Initialize development-specific settings"""
        super().init_app(app)

        # Create the instance directory on first use, not at import time
        if not os.environ.get('DATABASE_URL'):
            os.makedirs(cls.INSTANCE_DIR, exist_ok=True)

        # Enable detailed error pages in development
        app.config['PROPAGATE_EXCEPTIONS'] = True


class TestingConfig(Config):
    """Testing Configuration (in-memory database, no CSRF)"""

    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    FORCE_HTTPS = False
    SESSION_COOKIE_SECURE = False


class ProductionConfig(Config):
    """Production Environment Configuration"""

    DEBUG = False

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')

    HTTPS_ENABLED = env_bool('HTTPS_ENABLED', True)
    SESSION_COOKIE_SECURE = HTTPS_ENABLED
    FORCE_HTTPS = HTTPS_ENABLED
    WTF_CSRF_SSL_STRICT = HTTPS_ENABLED
    PREFERRED_URL_SCHEME = 'https' if HTTPS_ENABLED else 'http'

    @classmethod
    def _validate_production_config(cls):
        """Validate that all required production settings are present"""
        required_vars = ['SECRET_KEY', 'DATABASE_URL']
        missing_vars = [var for var in required_vars if not os.environ.get(var)]

        if missing_vars:
            raise ValueError(f"Missing required environment variables for production: {', '.join(missing_vars)}")

        # Validate DATABASE_URL format
        from urllib.parse import urlparse
        parsed = urlparse(os.environ.get('DATABASE_URL'))
        if not parsed.scheme or not parsed.path:
            raise ValueError("Invalid DATABASE_URL format")

    @classmethod
    def init_app(cls, app):
        """Initialize production-specific settings"""
        super().init_app(app)

        cls._validate_production_config()

        if not cls.HTTPS_ENABLED:
            app.logger.warning('HTTPS enforcement is disabled in production. Set HTTPS_ENABLED=true once TLS is configured.')
        else:
            app.logger.info('HTTPS enforcement enabled; secure cookies and redirects are active.')

        # Ensure log directory exists
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """
    Get configuration class based on environment

    Args:
        config_name (str): Configuration name ('development', 'testing', 'production')

    Returns:
        Config: Configuration class
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'default')

    config_class = config.get(config_name, config['default'])

    # Validate configuration class
    if not issubclass(config_class, Config):
        raise ValueError(f"Invalid configuration class: {config_class}")

    return config_class
