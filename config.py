from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PKG_DIR = Path(__file__).resolve().parent
ENV_PATH = PKG_DIR / ".env"
DEFAULT_DB_URL = f"sqlite:///{PKG_DIR / 'events.db'}"


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # Database
    database_url: str = Field(
        DEFAULT_DB_URL, validation_alias="DATABASE_URL"
    )
    sql_echo: bool = Field(False, validation_alias="SQL_ECHO")

    # Search
    search_threshold: float = Field(
        70.0, validation_alias="SEARCH_THRESHOLD"
    )

    # Paging
    default_page_size: int = Field(
        10, validation_alias="DEFAULT_PAGE_SIZE"
    )
    max_page_size: int = Field(
        100, validation_alias="MAX_PAGE_SIZE"
    )

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
