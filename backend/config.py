import os
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "Rapmania"
APP_AUTHOR = "RapmaniaDev"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR
    ENV: str = "prod"

    # Paths
    # DB_PATH from the environment wins over the platformdirs default
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: str | None = None

    # Network
    RAPMANIA_PORT: int = 8001
    FRONTEND_PORT: int = 5173

    # Text generation provider
    LLM_PROVIDER: str = "google"
    GEMINI_API_KEY: str | None = None
    LLM_MODEL: str = "gemini-1.5-pro"
    LLM_FALLBACK_MODEL: str = "gemini-pro"
    OLLAMA_HOST: str = "http://localhost:11434"
    LLM_TIMEOUT_SECONDS: float = 60.0

    # Sessions & Auth
    SESSION_SECRET: str = "rapmania-secret"
    SESSION_MAX_AGE: int = 60 * 60 * 24  # 1 day
    SESSION_HTTPS_ONLY: bool = False
    BCRYPT_ROUNDS: int = 10

    # Logging
    RAPMANIA_LOG_DIR: str | None = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "rapmania.duckdb")

        if not self.RAPMANIA_LOG_DIR:
            self.RAPMANIA_LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    def setup_environment(self):
        """Export paths that logging reads before the app is imported."""
        if self.RAPMANIA_LOG_DIR:
            os.environ["RAPMANIA_LOG_DIR"] = self.RAPMANIA_LOG_DIR

settings = Settings()
