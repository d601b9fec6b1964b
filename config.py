import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./admin_iam.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # No default: the app refuses to start without a signing key
    JWT_SECRET = data.get("JWT_SECRET")
    JWT_REFRESH_SECRET = data.get("JWT_REFRESH_SECRET")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 7))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 10))
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", False))

    SEED_ADMIN = bool(data.get("SEED_ADMIN", False))
    SEED_ADMIN_NAME = data.get("SEED_ADMIN_NAME")
    SEED_ADMIN_EMAIL = data.get("SEED_ADMIN_EMAIL")
    SEED_ADMIN_PHONE = data.get("SEED_ADMIN_PHONE")
    SEED_ADMIN_PASSWORD = data.get("SEED_ADMIN_PASSWORD")
