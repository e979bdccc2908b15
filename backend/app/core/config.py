from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False)

    app_name: str = "Flight Scheduler API"
    api_version: str = "1.0.0"
    environment: str = "local"
    state_file: str = "data/state.json"
    storage_backend: str = Field("file", pattern="^(file|memory)$")
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    log_level: str = "INFO"
    enable_debug_routes: bool = False


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env")
    return Settings()


settings = get_settings()
