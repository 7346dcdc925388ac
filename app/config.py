import os


def _flag(name, default="0"):
    return (os.getenv(name, default) or "").lower() in ("1", "true", "yes")


class BaseConfig:
    JSON_SORT_KEYS = False
    JSON_AS_ASCII = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "1")
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    BULK_UPLOAD_LIMIT = os.getenv("BULK_UPLOAD_LIMIT", "10 per hour")

    # Pricing / catalogue rules
    TAX_RATE = os.getenv("TAX_RATE", "0.10")
    NEW_PRODUCT_VISIBLE = _flag("NEW_PRODUCT_VISIBLE", "0")
    STOCK_PROPAGATES_BY_NAME_BRAND = _flag("STOCK_PROPAGATES_BY_NAME_BRAND", "0")
    UNKNOWN_SHOP_LABEL = os.getenv("UNKNOWN_SHOP_LABEL", "Unknown shop")

    # Scanner and change stream
    SCAN_START_DELAY_MS = int(os.getenv("SCAN_START_DELAY_MS", 300))
    CHANGE_STREAM_TIMEOUT = float(os.getenv("CHANGE_STREAM_TIMEOUT", 25))

    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "sokone-navi")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv(
        "OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces"
    )


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_ENABLED = False
    SCAN_START_DELAY_MS = 0
    CHANGE_STREAM_TIMEOUT = 0.1


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")

    @staticmethod
    def validate():
        missing = []
        if not os.getenv("SECRET_KEY"):
            missing.append("SECRET_KEY")
        if not os.getenv("DATABASE_URL"):
            missing.append("DATABASE_URL")
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )


def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
