# File: /dataview/core/config.py | Version: 1.3 | Title: Central Settings (Pydantic v2)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Database ---
    DATABASE_URL: str = "sqlite:///./dataview.db"

    # --- Paging / search ---
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 1000
    SEARCH_MIN_LENGTH: int = 2

    # --- Loading indicator (minimum display time, seconds) ---
    LOADING_MIN_SECONDS: float = 2.0  # first load
    PAGE_LOADING_MIN_SECONDS: float = 1.0  # page / limit / search / filter reloads

    # --- Navigation ---
    ACCOUNTS_ROUTE: str = "/accounts"

    # --- API behavior toggles ---
    ENABLE_STD_ERRORS: bool = (
        False  # set True in .env to enable standardized error responses
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
