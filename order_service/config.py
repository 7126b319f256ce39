import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./orders.db")
    stripe_secret_key: str | None = os.getenv("STRIPE_SECRET_KEY")
    jwt_secret: str | None = os.getenv("JWT_SECRET")
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    currency: str = os.getenv("PAYMENT_CURRENCY", "USD")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def get_settings() -> Settings:
    return settings
