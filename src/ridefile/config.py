from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_title: str = "Ride File API"
    log_level: str = "INFO"
    max_upload_bytes: int = 20 * 1024 * 1024  # largest accepted GPX/TCX upload

    class Config:
        env_prefix = "RIDEFILE_"
        env_file = ".env"
        env_file_encoding = "utf-8"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
