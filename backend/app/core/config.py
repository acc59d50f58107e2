from pydantic_settings import BaseSettings
from typing import Union


class Settings(BaseSettings):
    # Backing CSV file - the whole persistent store lives in this one file
    # Created with its header row on startup if it doesn't exist yet
    CSV_FILE_PATH: str = "./users.csv"
    # Attachment name sent to clients by the download endpoint
    # Independent of CSV_FILE_PATH so the on-disk name can change freely
    DOWNLOAD_FILENAME: str = "users.csv"

    # Written in place of absent optional fields (department, year, last login)
    NOT_APPLICABLE: str = "N/A"

    # CORS origins - allows browser frontends to call the API
    # Can be string (comma-separated) or list for flexibility
    # Defaults to any origin; narrow this when the frontend URL is known
    CORS_ORIGINS: Union[str, list[str]] = "*"

    # Root log level - DEBUG, INFO, WARNING, ERROR
    LOG_LEVEL: str = "INFO"

    # Bind address used when running `python -m app.main`
    # Ignored when the app is served by an external uvicorn command
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS string into list"""
        # Handle both string and list formats for flexibility
        # If CORS_ORIGINS is a string, split by comma and strip whitespace
        if isinstance(self.CORS_ORIGINS, str):
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        # If already a list, return it; otherwise return empty list
        return self.CORS_ORIGINS if isinstance(self.CORS_ORIGINS, list) else []

    class Config:
        # Load settings from .env file if it exists
        # Environment variables override defaults
        env_file = ".env"
        case_sensitive = True  # Environment variable names are case-sensitive


settings = Settings()
