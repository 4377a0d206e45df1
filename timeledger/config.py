from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/timeledger"

    # Hackatime heartbeat provider
    hackatime_base_url: str = "https://hackatime.hackclub.com/api/v1"
    provider_timeout_seconds: float = 30.0
    provider_concurrency: int = 8  # in-flight requests per computation

    # Logging session gate (strictly greater than → BLOCKED)
    logging_gate_hours: float = 4.0

    log_level: str = "INFO"

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        if not isinstance(value, str):
            return value

        normalized = value.strip().strip('"').strip("'")
        if normalized.startswith("postgres://"):
            normalized = "postgresql+asyncpg://" + normalized[len("postgres://") :]
        elif normalized.startswith("postgresql://") and not normalized.startswith("postgresql+asyncpg://"):
            normalized = "postgresql+asyncpg://" + normalized[len("postgresql://") :]
        elif normalized.startswith("sqlite:///"):
            normalized = "sqlite+aiosqlite:///" + normalized[len("sqlite:///") :]

        return normalized

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
