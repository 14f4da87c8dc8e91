from os import getenv


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    STORAGE_KEY = getenv("KANBAN_STORAGE_KEY", "kanban_tasks")
    STORAGE_BACKEND = getenv("KANBAN_STORAGE", "memory")  # "memory" ou "sql"
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./kanban.db")  # utilisé si KANBAN_STORAGE=sql
    AUTO_SAVE = _flag(getenv("KANBAN_AUTO_SAVE", "1"))
    SEED_SAMPLE = _flag(getenv("KANBAN_SEED_SAMPLE", "0"))  # tâches de démo si tableau vide
    APP_VERSION = getenv("APP_VERSION", "0.0.1")
    APP_ENV = getenv("APP_ENV", "development")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
