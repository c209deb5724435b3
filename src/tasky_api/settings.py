from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PORT: listen port (default 3000)
    - HOST: listen address (default '0.0.0.0')
    - MONGO_URI: MongoDB connection string. Default 'mongodb://mongo:27017/tasky'
    - MONGO_DB_NAME: database holding the todos collection (default 'tasky')
    - PERSISTENCE_BACKEND: 'mongo' (default) or 'memory'
    - WIZ_FILE_PATH: fixed file served by GET /wiz-file. Default '/app/wizexercise.txt'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level (default 'INFO')
    """

    port: int
    host: str
    mongo_uri: str
    mongo_db_name: str
    persistence_backend: str
    wiz_file_path: str
    cors_allow_origins: List[str]
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "mongo").strip().lower()
    if backend not in {"mongo", "memory"}:
        backend = "mongo"

    port = _parse_int(_get_env("PORT", "3000"), 3000)
    if not (0 < port < 65536):
        port = 3000

    return Settings(
        port=port,
        host=_get_env("HOST", "0.0.0.0").strip(),
        mongo_uri=_get_env("MONGO_URI", "mongodb://mongo:27017/tasky").strip(),
        mongo_db_name=_get_env("MONGO_DB_NAME", "tasky").strip(),
        persistence_backend=backend,
        wiz_file_path=_get_env("WIZ_FILE_PATH", "/app/wizexercise.txt"),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
