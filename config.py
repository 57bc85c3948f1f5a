import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"

is_production = os.getenv("FLASK_ENV") == "production"


class Config:
    # Try SECRET_KEY first, fall back to FLASK_SECRET_KEY
    SECRET_KEY = os.getenv("SECRET_KEY") or os.getenv("FLASK_SECRET_KEY", DEFAULT_SECRET_KEY)

    DATABASE_URL = os.getenv("DATABASE_URL")

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "./data/uploads")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_MB", 16)) * 1024 * 1024

    # Server-side sessions are used only when REDIS_URL is set
    REDIS_URL = os.getenv("REDIS_URL")
    SESSION_KEY_PREFIX = "furima:session:"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    PERMANENT_SESSION_LIFETIME = 86400
    SESSION_COOKIE_SECURE = is_production
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_NAME = "furima_session"

    REMEMBER_COOKIE_DURATION = 86400
    REMEMBER_COOKIE_SECURE = is_production
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = "Lax"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    REDIS_URL = None
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
