from dotenv import load_dotenv
import os


load_dotenv(dotenv_path="academy.env")


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./academy.db")

# Repository-level guards for course capacity and payment balance
ENFORCE_INVARIANTS = _as_bool(os.getenv("ENFORCE_INVARIANTS", "true"))

SEED_SAMPLE_DATA = _as_bool(os.getenv("SEED_SAMPLE_DATA", "true"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:3000").split(",")
    if origin.strip()
]
