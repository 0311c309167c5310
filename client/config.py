# Налаштування клієнта; секрет сервера тут не потрібен
from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class ClientSettings(BaseSettings):
    model_config = ConfigDict(extra="ignore", env_file=".env")

    API_BASE_URL: str = "http://localhost:8000/api/v1/"
    SESSION_COOKIE_NAME: str = "jwt"


client_settings = ClientSettings()
