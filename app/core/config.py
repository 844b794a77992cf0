import json
from functools import lru_cache
from typing import Annotated, List, Sequence

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict  # type: ignore[import-not-found]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = Field(default="WorkHours", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    db_url: str = Field(default="sqlite:///./data/data.db", alias="DB_URL")
    timezone: str = Field(default="UTC", alias="TIMEZONE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # single account; PW_HASH is a bcrypt hash
    email: str = Field(default="", alias="EMAIL")
    pw_hash: str = Field(default="", alias="PW_HASH")
    token_key: str = Field(default="", alias="TOKEN_KEY")
    token_ttl_minutes: int = Field(default=10, alias="TOKEN_TTL_MINUTES")
    token_refresh_window_seconds: int = Field(
        default=30, alias="TOKEN_REFRESH_WINDOW_SECONDS"
    )
    token_refresh_grace_seconds: int = Field(
        default=300, alias="TOKEN_REFRESH_GRACE_SECONDS"
    )

    # comma separated or a JSON list
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"], alias="CORS_ORIGINS"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_str(cls, value: Sequence[str] | str | None) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str) and value.lstrip().startswith("["):
            value = json.loads(value)
        if isinstance(value, (list, tuple, set)):
            return [str(v).strip() for v in value if str(v).strip()]
        return [item.strip() for item in str(value).split(",") if item.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
