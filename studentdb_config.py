from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR = Path.home() / ".studentdb_manager"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Every field can be overridden with a STUDENTDB_-prefixed environment
    variable or a .env file in the working directory.
    """

    PROJECT_NAME: str = "StudentDB Manager"

    # SQLite file holding the students table
    DB_PATH: Path = APP_DIR / "students.db"

    # Simulated latency (milliseconds) before store calls, 0 disables
    ADD_DELAY_MS: int = 1000
    LOAD_DELAY_MS: int = 800

    LOG_LEVEL: str = "INFO"

    @field_validator("ADD_DELAY_MS", "LOAD_DELAY_MS")
    @classmethod
    def check_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError("delay must be zero or positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = SettingsConfigDict(
        env_prefix="STUDENTDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
