from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./task_manager.db"
    ENV: str = "local"  # Environment setting
    HOST: str = "localhost"
    PORT: int = 5000

    # Uploaded project attachments
    UPLOAD_DIR: str = "uploads"

    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
