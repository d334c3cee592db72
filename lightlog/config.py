"""
Configuration settings for the LightLog service.
"""
import os

from dotenv import load_dotenv

# Load .env file from the project root
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)


class Config:
    """Base configuration."""

    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(24).hex()

    # JWT
    JWT_SECRET = os.environ.get('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRATION_SECONDS = int(os.environ.get('JWT_EXPIRATION_SECONDS', 86400))

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///lightlog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # File Upload (25MB audio plus room for the multipart envelope)
    MAX_CONTENT_LENGTH = 26 * 1024 * 1024

    # Logging
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT', False)
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = '200 per day;50 per hour'

    # Chat generation (Gemini)
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-1.5-flash')
    AI_MAX_TOKENS = int(os.environ.get('AI_MAX_TOKENS', 500))
    AI_TEMPERATURE = float(os.environ.get('AI_TEMPERATURE', 0.7))
    AI_TIMEOUT_SECONDS = int(os.environ.get('AI_TIMEOUT_SECONDS', 30))

    # Moderation and speech-to-text (OpenAI)
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY')
    OPENAI_TIMEOUT_SECONDS = float(os.environ.get('OPENAI_TIMEOUT_SECONDS', 30))
    WHISPER_MODEL = os.environ.get('WHISPER_MODEL', 'whisper-1')
    WHISPER_LANGUAGE = os.environ.get('WHISPER_LANGUAGE', 'ko')
    WHISPER_RESPONSE_FORMAT = os.environ.get('WHISPER_RESPONSE_FORMAT', 'verbose_json')

    # Content Limits
    MAX_ENTRY_LENGTH = 10000
    MAX_TRANSCRIPT_LENGTH = 5000

    @staticmethod
    def init_app(app):
        pass


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False

    # Tokens must verify across restarts and across workers
    JWT_SECRET = os.environ.get('JWT_SECRET')

    @staticmethod
    def init_app(app):
        if not app.config.get('JWT_SECRET'):
            raise RuntimeError('JWT_SECRET must be set in production')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'testing-secret'
    JWT_SECRET = 'testing-jwt-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    GEMINI_API_KEY = None
    OPENAI_API_KEY = None


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
