from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod
    LOG_LEVEL: str = Field(default="INFO")

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")
    CREATE_TABLES: bool = Field(default=True)

    # Imports
    IMPORT_ROW_DELAY_SECONDS: float = Field(default=0.0, ge=0.0)
    IMPORT_RESET_PROGRESS_ON_FAILURE: bool = Field(default=False)
    IMPORT_CSV_DELIMITER: str = Field(default=",", min_length=1, max_length=1)
    IMPORT_ENCODING: str = Field(default="utf-8-sig")


settings = Settings()
