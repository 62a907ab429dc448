from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- catalog ---
    LOCAL_DATA_PATH: str = "data"
    CACHE_DURATION: int = 3600     # seconds

    # --- http ---
    CORS_ORIGIN: str = "http://localhost:5173"
    APP_ENV: str = "development"
    PORT: int = 3002

    # --- logging ---
    LOG_DIR: str = "logs"

    # --- schedule ---
    MAX_CREDITS: float = 21

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()
