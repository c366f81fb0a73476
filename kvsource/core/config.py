from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "kvsource"
    LOG_LEVEL: str = "INFO"

    RECORD_STORE_BACKEND: str = "memory"  # memory | sql
    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"

    @property
    def record_store_backend(self) -> str:
        return str(self.RECORD_STORE_BACKEND or "").strip().lower() or "memory"


settings = Settings()
