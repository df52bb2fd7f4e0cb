from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "SocialGraph API"
    VERSION: str = "0.1.0"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # bcrypt cost factor
    PASSWORD_HASH_ROUNDS: int = Field(default=10, ge=4, le=31)

    # Serve the interactive docs UI at /docs
    ENABLE_EXPLORER: bool = True

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings():
    return Settings()
