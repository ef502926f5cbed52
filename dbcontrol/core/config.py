from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbcontrol.core.json_config import load_and_query_json


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "dbcontrol"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: AnyUrl | None = None
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Logical name used when a request omits "database" or sends "".
    DEFAULT_DATABASE: str = "main"
    # name -> SQLite file path, e.g. DATABASES='{"main": "main.db", "logs": "/data/logs.db"}'
    DATABASES: dict[str, str] = Field(default_factory=dict)
    # Optional JSON file with a top-level "databases" object (same shape as DATABASES).
    DATABASES_CONFIG_FILE: str | None = None
    # Seconds a writer waits on a locked database before the engine reports an error.
    SQLITE_BUSY_TIMEOUT: float = 5.0

    @property
    def databases(self) -> dict[str, str]:
        """
        Resolved name -> path mapping: config file entries, then DATABASES (env wins).
        Falls back to a single DEFAULT_DATABASE file in the working directory.
        """
        merged: dict[str, str] = {}
        if self.DATABASES_CONFIG_FILE:
            for name, path in load_and_query_json(
                self.DATABASES_CONFIG_FILE, "databases"
            ).items():
                if not isinstance(path, str):
                    raise ValueError(
                        f"database path for {name!r} must be a string, got {type(path).__name__}"
                    )
                merged[name] = path
        merged.update(self.DATABASES)
        if not merged:
            merged[self.DEFAULT_DATABASE] = f"{self.DEFAULT_DATABASE}.db"
        return merged


settings = Settings()  # type: ignore

