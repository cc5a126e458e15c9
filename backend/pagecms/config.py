import os
from dotenv import load_dotenv

load_dotenv()


def _preview_base_url():
    # FRONTEND_URLS="http://cms.local,http://web.local" -> the public site is last
    urls = os.getenv("FRONTEND_URLS", "http://localhost:3001,http://localhost:3000")
    parts = [u.strip() for u in urls.split(",") if u.strip()]
    return os.getenv("PREVIEW_BASE_URL", parts[-1] if parts else "http://localhost:3000")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    PREVIEW_BASE_URL = _preview_base_url()
    PREVIEW_TTL_HOURS = int(os.getenv("PREVIEW_TTL_HOURS", "2"))

    SUPPORTED_LANGUAGES = ("en", "th")
    DEFAULT_PAGE_LIMIT = 10
    MAX_PAGE_LIMIT = 100


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///pagecms-dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "testing-secret-key-that-is-long-enough"
    PREVIEW_BASE_URL = "http://web.test"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
