import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SEED_DEMO_DATA = _get_bool(os.getenv("SEED_DEMO_DATA"), default=True)
SUBMISSION_DELAY_SECONDS = float(os.getenv("SUBMISSION_DELAY_SECONDS", "0"))

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), default=["http://localhost:4200"])

def validate_runtime_config() -> None:
    if SUBMISSION_DELAY_SECONDS < 0:
        raise RuntimeError("SUBMISSION_DELAY_SECONDS cannot be negative.")
    if APP_ENV.lower() == "production" and SEED_DEMO_DATA:
        raise RuntimeError("SEED_DEMO_DATA must be disabled in production.")
