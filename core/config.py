# Файл конфігурації, завантажує змінні з .env
from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    model_config = ConfigDict(extra="ignore", env_file=".env")

    # 1. Firebase
    # Без ключа використовуються Application Default Credentials (або емулятор)
    FIREBASE_SERVICE_ACCOUNT_KEY_PATH: str | None = None
    FIREBASE_PROJECT_ID: str | None = None

    # 2. CORS (кома-сепарейтед список)
    FRONTEND_ORIGIN: str = "http://localhost:3000,https://spendx.vercel.app"

    # 3. Сесія
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "jwt"
    SESSION_MAX_AGE_SECONDS: int = 3 * 24 * 60 * 60
    SESSION_COOKIE_SECURE: bool = False
    SESSION_COOKIE_SAMESITE: str = "lax"

    MIN_PASSWORD_LENGTH: int = 6

    API_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"


settings = Settings()
