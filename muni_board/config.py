"""Configuration loader for the Muni arrivals board."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml


@dataclass(frozen=True)
class FeedConfig:
    """511.org stop-monitoring feed configuration."""

    api_key: str
    base_url: str
    agency: str
    timeout_seconds: float


@dataclass(frozen=True)
class DirectionConfig:
    """A feed direction code and the heading shown for it."""

    code: str
    label: str


@dataclass(frozen=True)
class BoardConfig:
    """Which stops and directions the board shows."""

    watched_stops: frozenset[str]
    inbound: DirectionConfig
    outbound: DirectionConfig
    title_prefix: str = ""


@dataclass(frozen=True)
class DisplayConfig:
    """Canvas and font settings for rendering."""

    width: int = 1024
    height: int = 758
    font_path: str | None = None
    font_size: int = 24


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server bind address."""

    host: str = "0.0.0.0"
    port: int = 3001


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_dir: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    feed: FeedConfig
    board: BoardConfig
    display: DisplayConfig
    server: ServerConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _optional_mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _direction(board_section: dict[str, Any], key: str) -> DirectionConfig:
    section = _require_key(board_section, key, "board")
    if not isinstance(section, dict):
        raise ValueError(f"'board.{key}' config must be a mapping")
    context = f"board.{key}"
    return DirectionConfig(
        code=str(_require_key(section, "code", context)),
        label=str(_require_key(section, "label", context)),
    )


def _board(section: dict[str, Any]) -> BoardConfig:
    stops = _require_key(section, "watched_stops", "board")
    if not isinstance(stops, list) or not stops:
        raise ValueError("'board.watched_stops' must be a non-empty list")

    inbound = _direction(section, "inbound")
    outbound = _direction(section, "outbound")
    if inbound.code == outbound.code:
        raise ValueError("Inbound and outbound direction codes must differ")

    return BoardConfig(
        watched_stops=frozenset(str(stop) for stop in stops),
        inbound=inbound,
        outbound=outbound,
        title_prefix=str(section.get("title_prefix", "")),
    )


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    api_key = os.environ.get("SF511_API_KEY", "")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    feed_section = _require_mapping(data, "feed")
    board_section = _require_mapping(data, "board")
    display_section = _optional_mapping(data, "display")
    server_section = _optional_mapping(data, "server")
    logging_section = _optional_mapping(data, "logging")

    feed = FeedConfig(
        api_key=api_key,
        base_url=_require_key(feed_section, "base_url", "feed"),
        agency=_require_key(feed_section, "agency", "feed"),
        timeout_seconds=feed_section.get("timeout_seconds", 10),
    )

    display = DisplayConfig(
        width=display_section.get("width", DisplayConfig.width),
        height=display_section.get("height", DisplayConfig.height),
        font_path=display_section.get("font_path"),
        font_size=display_section.get("font_size", DisplayConfig.font_size),
    )

    server = ServerConfig(
        host=server_section.get("host", ServerConfig.host),
        port=server_section.get("port", ServerConfig.port),
    )

    logging = LoggingConfig(
        level=logging_section.get("level", LoggingConfig.level),
        log_dir=logging_section.get("log_dir"),
    )

    return AppConfig(
        feed=feed,
        board=_board(board_section),
        display=display,
        server=server,
        log=logging,
    )
