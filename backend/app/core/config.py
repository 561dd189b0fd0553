# app/core/config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

# .env is loaded without overriding values already present in the OS env
load_dotenv(override=False)


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid."""


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return default
    v = v.strip()
    return v if v != "" else default


def _env_required(name: str) -> str:
    v = _env(name)
    if v is None:
        raise ConfigurationError(
            f"Missing required environment variable: {name}\n"
            f"Add it to .env (local) or to the deployment environment."
        )
    return v


def _env_bool(name: str, default: bool = False) -> bool:
    v = _env(name)
    if v is None:
        return default
    s = v.strip().lower()
    if s in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    """Unparseable values and values below `minimum` fall back to `default`."""
    v = _env(name)
    if v is None:
        return default
    try:
        n = int(v)
    except ValueError:
        return default
    if minimum is not None and n < minimum:
        return default
    return n


def _parse_str_list(value: Optional[str]) -> Tuple[str, ...]:
    """
    Accept:
      - comma-separated: "http://localhost:3000,https://foo.example"
      - json list: '["http://localhost:3000","https://foo.example"]'
    """
    if not value:
        return tuple()

    s = value.strip()
    if s.startswith("["):
        try:
            arr = json.loads(s)
            if isinstance(arr, list):
                items = [str(x).strip() for x in arr if str(x).strip()]
                return tuple(items)
        except json.JSONDecodeError:
            pass

    items = [x.strip() for x in s.split(",") if x.strip()]
    return tuple(items)


@dataclass(frozen=True)
class LogOptions:
    level: str = "INFO"
    directory: str = "."
    to_files: bool = True


def get_log_options() -> LogOptions:
    """
    Logging knobs only. Readable before the Supabase credentials are checked,
    so a failed startup still reaches error.log / combined.log.
    """
    return LogOptions(
        level=_env("LOG_LEVEL", "INFO"),
        directory=_env("LOG_DIR", "."),
        to_files=_env_bool("LOG_TO_FILES", default=True),
    )


@dataclass(frozen=True)
class Settings:
    # supabase
    supabase_url: str
    supabase_key: str

    # app
    app_name: str = "disease-query-api"
    env: str = "local"
    debug: bool = False
    api_prefix: str = "/api"

    # server
    host: str = "0.0.0.0"
    port: int = 3000

    # logging
    log_level: str = "INFO"
    log_dir: str = "."
    log_to_files: bool = True

    # cors
    cors_origins: Tuple[str, ...] = ("*",)

    # search
    disease_table: str = "diseases"
    search_limit: int = 5

    # optional startup checks
    check_supabase_on_startup: bool = False

    # docs
    disable_docs: bool = False

    @property
    def log_options(self) -> LogOptions:
        return LogOptions(level=self.log_level, directory=self.log_dir, to_files=self.log_to_files)

    @property
    def docs_url(self) -> Optional[str]:
        return None if self.disable_docs else "/docs"

    @property
    def redoc_url(self) -> Optional[str]:
        return None if self.disable_docs else "/redoc"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    supabase_url = _env_required("SUPABASE_URL")
    supabase_key = _env_required("SUPABASE_KEY")

    env = _env("ENV", "local")
    log = get_log_options()

    return Settings(
        supabase_url=supabase_url,
        supabase_key=supabase_key,
        app_name=_env("APP_NAME", "disease-query-api"),
        env=env,
        debug=_env_bool("DEBUG", default=(env == "local")),
        api_prefix=_env("API_PREFIX", "/api"),
        host=_env("HOST", "0.0.0.0"),
        port=_env_int("PORT", default=3000, minimum=1),
        log_level=log.level,
        log_dir=log.directory,
        log_to_files=log.to_files,
        cors_origins=_parse_str_list(_env("CORS_ORIGINS")) or ("*",),
        disease_table=_env("DISEASE_TABLE", "diseases"),
        search_limit=_env_int("SEARCH_LIMIT", default=5, minimum=1),
        check_supabase_on_startup=_env_bool("CHECK_SUPABASE_ON_STARTUP", default=False),
        disable_docs=_env_bool("DISABLE_DOCS", default=False),
    )
