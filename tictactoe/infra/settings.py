from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from tictactoe.game_store import DEFAULT_ID_PREFIX


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"TICTACTOE_LOG_LEVEL must be a logging level name; received {raw!r}")
    return level


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    session_id_prefix: str = DEFAULT_ID_PREFIX
    host: str = "0.0.0.0"
    port: int = 8080


def load_settings(*, dotenv: bool = True) -> Settings:
    """Build settings from TICTACTOE_* environment variables.

    A local `.env` is loaded first without overriding variables already set.
    """

    if dotenv:
        load_dotenv(override=False)

    return Settings(
        log_level=_log_level(os.environ.get("TICTACTOE_LOG_LEVEL", "INFO")),
        cors_origins=_split_csv(os.environ.get("TICTACTOE_CORS_ORIGINS", "*")) or ["*"],
        session_id_prefix=os.environ.get("TICTACTOE_SESSION_ID_PREFIX", DEFAULT_ID_PREFIX),
        host=os.environ.get("TICTACTOE_HOST", "0.0.0.0"),
        port=int(os.environ.get("TICTACTOE_PORT", "8080")),
    )
