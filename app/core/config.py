from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Learnpath API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 2  # 2 days

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./learnpath.db"
    TEST_DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = False

    # Cache
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300
    REDIS_URL: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Admin list screens
    ADMIN_PAGE_SIZE: int = 20
    ADMIN_MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"

settings = Settings()
