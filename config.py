from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class ChartConfig:
    width: int = 1000
    height: int = 500
    margin: int = 50
    background: str = "#000000"
    line_color: str = "#ff0000"
    bar_color: str = "#00ff00"

    @classmethod
    def from_env(cls) -> "ChartConfig":
        d = cls()
        return cls(
            width=_env_int("MINICHART_WIDTH", d.width),
            height=_env_int("MINICHART_HEIGHT", d.height),
            margin=_env_int("MINICHART_MARGIN", d.margin),
            background=os.environ.get("MINICHART_BACKGROUND", d.background),
            line_color=os.environ.get("MINICHART_LINE_COLOR", d.line_color),
            bar_color=os.environ.get("MINICHART_BAR_COLOR", d.bar_color),
        )


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        d = cls()
        return cls(
            host=os.environ.get("MINICHART_HOST", d.host),
            port=_env_int("MINICHART_PORT", d.port),
            log_level=os.environ.get("MINICHART_LOG_LEVEL", d.log_level).lower(),
        )
