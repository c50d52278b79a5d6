import os
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    PROJECT_NAME: str = "Contact Book API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Database - individual vars (fallback)
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_USER: str = "contacts"
    POSTGRES_PASSWORD: str = "contacts_secret"
    POSTGRES_DB: str = "contacts"
    SQL_ECHO: bool = False

    @property
    def DATABASE_URL(self) -> str:
        # Hosting platforms usually hand out a plain postgres:// URL
        env_url = os.environ.get("DATABASE_URL")
        if env_url:
            if env_url.startswith("postgres://"):
                return env_url.replace("postgres://", "postgresql+asyncpg://", 1)
            elif env_url.startswith("postgresql://"):
                return env_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return env_url
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Birthdays
    BIRTHDAY_INPUT_FORMATS: List[str] = ["%m/%d/%Y", "%Y-%m-%d", "%B %d, %Y", "%b %d, %Y"]
    BIRTHDAY_FREE_TEXT: bool = True  # fall back to dateutil when no format matches
    BIRTHDAYS_WINDOW_DAYS: int = 30

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
