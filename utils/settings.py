# File: utils/settings.py
import os
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote_plus


GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    database_url: str
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = GEMINI_OPENAI_BASE_URL
    gemini_timeout: float = 30.0
    ml_api_base_url: str = "http://localhost:8000"
    ml_api_key: str = ""
    ml_api_timeout: float = 30.0


def build_database_url() -> str:
    """
    Resolves the Postgres connection string.
    Supabase hands out a full URL, so DATABASE_URL wins over the split variables.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_user = os.getenv("POSTGRES_USER")
    db_pass = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST", "localhost")
    db_port = os.getenv("POSTGRES_PORT", "5432")
    db_name = os.getenv("POSTGRES_DB")
    if not all([db_user, db_pass, db_name]):
        raise ValueError("Database credentials must be provided via environment variables")

    return f"postgresql://{quote_plus(db_user)}:{quote_plus(db_pass)}@{db_host}:{db_port}/{quote_plus(db_name)}"


def resolve_allowed_origins(app_env: str) -> List[str]:
    if app_env == "local":
        return ["http://localhost:3000", "http://localhost:5173"]  # Common dev ports
    return _split_csv(os.getenv("ALLOWED_ORIGINS", ""))


def load_settings() -> Settings:
    return Settings(
        database_url=build_database_url(),
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        gemini_base_url=os.getenv("GEMINI_BASE_URL", GEMINI_OPENAI_BASE_URL),
        gemini_timeout=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30")),
        ml_api_base_url=os.getenv("ML_API_BASE_URL", "http://localhost:8000"),
        ml_api_key=os.getenv("ML_API_KEY", ""),
        ml_api_timeout=float(os.getenv("ML_API_TIMEOUT_SECONDS", "30")),
    )
