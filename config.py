import os

from dotenv import load_dotenv

load_dotenv()


def _database_url():
    url = os.environ.get('DATABASE_URL')
    if not url:
        return 'sqlite:///' + os.path.join(os.path.abspath(os.path.dirname(__file__)), 'instance', 'servants_prep.db')
    # Heroku/Render style URLs use the legacy scheme SQLAlchemy no longer accepts
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a-very-secret-key'

    # CSRF Protection
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600  # 1 hour
    WTF_CSRF_CHECK_DEFAULT = False

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Dashboard sizing
    AT_RISK_DISPLAY_LIMIT = int(os.environ.get('AT_RISK_DISPLAY_LIMIT', 10))
    WEAKEST_SECTIONS_LIMIT = int(os.environ.get('WEAKEST_SECTIONS_LIMIT', 3))

    # Create tables on startup when no migrations have been run
    AUTO_CREATE_TABLES = os.environ.get('AUTO_CREATE_TABLES', 'True').lower() in ('true', '1', 'yes', 'on')


class ProductionConfig(Config):
    """Production configuration with enhanced security."""
    DEBUG = False  # Always False in production
    TESTING = False

    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour session timeout


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = True
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'  # In-memory database for tests
    AUTO_CREATE_TABLES = True
