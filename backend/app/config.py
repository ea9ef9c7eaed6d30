# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

# Folded unique keys can be longer than their source text ("ß" -> "ss")
KEY_MAX_LENGTH = 1024

def _csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = os.getenv("APP_NAME", "Inventory API")
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _csv(
        os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    )

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    err_log_path: str = os.getenv("ERR_LOG_PATH", "logs/errLog.log")  # Rate limiter audit sink

    # Login throttling: attempts allowed per window, per client address
    login_max_attempts: int = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
    login_window_sec: int = int(os.getenv("LOGIN_WINDOW_SEC", "60"))

    # Password hashing work factor (argon2 time cost)
    password_hash_rounds: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "3"))

    # Role given to every newly created user
    default_role: str = os.getenv("DEFAULT_ROLE", "Employee")

settings = Settings()  # Instantiate configuration
