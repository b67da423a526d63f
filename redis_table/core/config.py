from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"
    USE_REDIS: bool = False  # Set to True to back tables with Redis instead of in-memory
    REDIS_SOCKET_TIMEOUT: float | None = None  # seconds; None leaves the client default

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


settings = Settings()
