"""
Logistica Server - Configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

# Carrega .env com override para sobrescrever variáveis do sistema
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Logistica Server"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database (accepts DATABASE_URL or LOGISTICA_DATABASE_URL)
    DATABASE_URL: Optional[str] = None
    LOGISTICA_DATABASE_URL: str = "sqlite+aiosqlite:///./logistica.db"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True

    @property
    def db_url(self) -> str:
        """Returns DATABASE_URL if set, otherwise LOGISTICA_DATABASE_URL"""
        return self.DATABASE_URL or self.LOGISTICA_DATABASE_URL

    # Cache (Redis opcional; sem REDIS_URL usa cache em memória)
    REDIS_URL: Optional[str] = None
    CACHE_TTL_SECONDS: int = 60

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Paginação
    PAGE_DEFAULT_LIMIT: int = 50
    PAGE_MAX_LIMIT: int = 200

    # Tentativas ao colidir código gerado (FRT-2026-001 etc.)
    CODE_RETRY_ATTEMPTS: int = 3

    # CORS
    CORS_ORIGINS: list = ["*"]

    class Config:
        extra = "ignore"
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
