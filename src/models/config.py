"""
Configuration models

Typed views over the merged YAML data loaded by ConfigManager
(playback.yaml, presenter.yaml, api.yaml).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.domain.animation import DEFAULT_DURATION_MS


DEFAULT_CHANNEL_NAME = "deckode-present"


@dataclass(frozen=True)
class PlaybackConfig:
    """Engine timing and channel settings"""
    channel_name: str = DEFAULT_CHANNEL_NAME
    default_duration_ms: int = DEFAULT_DURATION_MS
    preview_one_duration_ms: int = DEFAULT_DURATION_MS
    preview_clear_margin_ms: int = 100
    flash_duration_ms: int = 300

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaybackConfig":
        return cls(
            channel_name=str(data.get("channel_name", DEFAULT_CHANNEL_NAME)),
            default_duration_ms=int(data.get("default_duration_ms", DEFAULT_DURATION_MS)),
            preview_one_duration_ms=int(data.get("preview_one_duration_ms", DEFAULT_DURATION_MS)),
            preview_clear_margin_ms=int(data.get("preview_clear_margin_ms", 100)),
            flash_duration_ms=int(data.get("flash_duration_ms", 300)),
        )


@dataclass(frozen=True)
class KeyBindings:
    """
    Presenter key bindings, keyed by normalized key name.

    Names are what keyboard adapters publish: "RIGHT", "SPACE", "ESCAPE",
    or a single printable character (matched case-insensitively for letters).
    """
    advance: List[str] = field(default_factory=lambda: ["RIGHT", "SPACE"])
    back: List[str] = field(default_factory=lambda: ["LEFT"])
    exit: List[str] = field(default_factory=lambda: ["ESCAPE"])
    toggle_view: List[str] = field(default_factory=lambda: ["p"])
    open_window: List[str] = field(default_factory=lambda: ["w"])
    toggle_pointer: List[str] = field(default_factory=lambda: ["l"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyBindings":
        defaults = cls()
        return cls(**{
            name: [str(k) for k in data.get(name, getattr(defaults, name))]
            for name in ("advance", "back", "exit", "toggle_view", "open_window", "toggle_pointer")
        })


@dataclass(frozen=True)
class PresenterConfig:
    """Driver window behaviour"""
    elapsed_tick_s: float = 1.0
    open_passenger_on_start: bool = True
    request_fullscreen: bool = True
    keys: KeyBindings = field(default_factory=KeyBindings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PresenterConfig":
        return cls(
            elapsed_tick_s=float(data.get("elapsed_tick_s", 1.0)),
            open_passenger_on_start=bool(data.get("open_passenger_on_start", True)),
            request_fullscreen=bool(data.get("request_fullscreen", True)),
            keys=KeyBindings.from_dict(data.get("keys") or {}),
        )


@dataclass(frozen=True)
class ApiConfig:
    """REST + Socket.IO server"""
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiConfig":
        return cls(
            enabled=bool(data.get("enabled", True)),
            host=str(data.get("host", "0.0.0.0")),
            port=int(data.get("port", 8000)),
            cors_origins=[str(o) for o in data.get("cors_origins", ["*"])],
        )
