from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_NAME: str = "meshcoord"
    SERVICE_HOST: str = "127.0.0.1"
    SERVICE_PORT: int = 8080
    # Upper bound on a single request body, in bytes
    MAX_EVENT_SIZE: int = 65536
    LOG_JSON: bool = True
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
