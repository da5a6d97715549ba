"""
Configuration and environment loading for the chess board server.

- Loads .env (python-dotenv) and settings.yml (YAML) from the repo root; YAML takes precedence.
- Exposes SETTINGS with the server knobs (bind address, debug, log level, CORS origin).
"""
from dataclasses import dataclass
import logging
import os
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger("config")


def _repo_root() -> str:
    # this file: src/chessboard_ui/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        log.warning("Could not read %s; using environment only", path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: top level is not a mapping", path)
        return {}
    return data


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


_cfg = _load_yaml(os.path.join(_repo_root(), "settings.yml"))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None, cfg: dict | None = None) -> Any:
    cfg = _cfg if cfg is None else cfg
    if name in cfg:
        val = cfg[name]
        return cast(val) if cast else val
    env = os.environ.get(name)
    if env is not None:
        return cast(env) if cast else env
    return default


@dataclass(frozen=True)
class Settings:
    # HTTP server
    host: str
    port: int
    debug: bool
    cors_origin: str

    # Logging
    log_level: str


def load_settings(cfg: dict | None = None) -> Settings:
    return Settings(
        host=str(_get("CHESSBOARD_HOST", "0.0.0.0", cfg=cfg)),
        port=int(_get("CHESSBOARD_PORT", 8000, cast=int, cfg=cfg)),
        debug=bool(_get("CHESSBOARD_DEBUG", False, cast=_as_bool, cfg=cfg)),
        cors_origin=str(_get("CHESSBOARD_CORS_ORIGIN", "*", cfg=cfg)),
        log_level=str(_get("CHESSBOARD_LOG_LEVEL", "INFO", cfg=cfg)).upper(),
    )


SETTINGS = load_settings()
