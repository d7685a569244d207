# =============================================================================
# PlantScan Backend
# config.py - Configuration Management
#
# Environment-based configuration for development, testing, and production.
# Uses python-dotenv to load environment variables from .env file.
# =============================================================================

import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name, default):
    return os.getenv(name, str(default)).lower() in ('1', 'true', 'yes')


class Config:
    """
    Base configuration class with default settings.
    All other configuration classes inherit from this.
    """

    # ==========================================================================
    # Flask Core Settings
    # ==========================================================================
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = False
    TESTING = False

    # ==========================================================================
    # Database Configuration
    # ==========================================================================
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///plantscan.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # ==========================================================================
    # JWT Authentication Configuration
    # ==========================================================================
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=30)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=60)
    JWT_TOKEN_LOCATION = ['headers']
    JWT_HEADER_NAME = 'Authorization'
    JWT_HEADER_TYPE = 'Bearer'

    # ==========================================================================
    # Rate Limiting Configuration
    # ==========================================================================
    RATELIMIT_ENABLED = _env_bool('RATELIMIT_ENABLED', True)
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_STRATEGY = os.getenv('RATELIMIT_STRATEGY', 'fixed-window')
    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '200 per hour')
    RATELIMIT_HEADERS_ENABLED = True

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:8081').split(',')
    CORS_SUPPORTS_CREDENTIALS = True

    # ==========================================================================
    # File Upload Configuration
    # ==========================================================================
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

    # ==========================================================================
    # Analysis Pipeline Configuration
    # ==========================================================================
    MODEL_PATH = os.getenv(
        'MODEL_PATH',
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'models')
    )
    CLASS_LABELS_FILE = os.getenv('CLASS_LABELS_FILE', 'class_labels.json')
    FEATURE_VECTOR_LENGTH = int(os.getenv('FEATURE_VECTOR_LENGTH', 10))
    # Mixes wall-clock time into class selection (repeat scans may differ)
    CLASSIFIER_TIME_SEEDED = _env_bool('CLASSIFIER_TIME_SEEDED', False)

    # ==========================================================================
    # Image Hosting (ImgBB)
    # ==========================================================================
    IMGBB_API_KEY = os.getenv('IMGBB_API_KEY', '')
    IMGBB_API_URL = os.getenv('IMGBB_API_URL', 'https://api.imgbb.com/1/upload')
    IMGBB_ALBUM_ID = os.getenv('IMGBB_ALBUM_ID', '')
    IMGBB_TIMEOUT = float(os.getenv('IMGBB_TIMEOUT', 30))

    # ==========================================================================
    # Subscription Configuration
    # ==========================================================================
    FREE_HISTORY_LIMIT = int(os.getenv('FREE_HISTORY_LIMIT', 10))
    PREMIUM_DURATION_DAYS = int(os.getenv('PREMIUM_DURATION_DAYS', 30))


class DevelopmentConfig(Config):
    """
    Development configuration with debug mode enabled.
    Uses SQLite database for easy local development.
    """
    DEBUG = True
    SQLALCHEMY_ECHO = True  # Log SQL queries for debugging

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///plantscan_dev.db')

    # Relaxed rate limiting for development
    RATELIMIT_DEFAULT = '1000 per hour'


class TestingConfig(Config):
    """
    Testing configuration for automated tests.
    Uses in-memory SQLite database for fast test execution.
    """
    TESTING = True
    DEBUG = True

    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ECHO = False

    JWT_SECRET_KEY = 'testing-jwt-secret-key-with-enough-length-for-hs256'

    # Disable rate limiting during tests
    RATELIMIT_ENABLED = False

    # Never call the real image host from tests
    IMGBB_API_KEY = ''

    CLASSIFIER_TIME_SEEDED = False
    FREE_HISTORY_LIMIT = 3

    # Labels come from the built-in defaults
    MODEL_PATH = None


class ProductionConfig(Config):
    """
    Production configuration with security hardening.
    Requires all secrets to be set via environment variables.
    """
    DEBUG = False
    TESTING = False

    # Production requires proper DATABASE_URL
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')

    # Connection pooling for production performance
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
        'max_overflow': 20,
        'pool_timeout': 30
    }

    # Use Redis for rate limiting in production
    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL', 'memory://')

    # Stricter rate limits for production
    RATELIMIT_DEFAULT = '100 per hour'


# =============================================================================
# Configuration Dictionary
# Maps environment names to configuration classes
# =============================================================================
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config():
    """
    Get the appropriate configuration based on FLASK_ENV environment variable.

    Returns:
        Config: Configuration class for the current environment
    """
    env = os.getenv('FLASK_ENV', 'development')
    return config.get(env, config['default'])
