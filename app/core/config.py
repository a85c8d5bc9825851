from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./blockdocs.db"
    sql_echo: bool = False

    # Ключ, под которым хранится весь набор документов
    storage_key: str = "powered_documents"

    # Задержка автосохранения после правки, в секундах
    autosave_delay: float = 1.0

    log_level: str = "INFO"
    seed_demo_documents: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
