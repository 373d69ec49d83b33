"""
Overlay Configuration

Named, overridable settings for the overlay renderer and the API.

Settings are read from a JSON file (``config.json`` next to the backend
directory, or the path given in the OVERLAY_CONFIG environment variable).
Every field is optional; a missing or malformed file falls back to defaults.

Example config.json:
    {
        "rules": {"default_tolerance": 25, "catalog_path": "techniques.json"},
        "colors": {"good": "#00FF00", "bad": "#FF0000"},
        "style": {"stroke_width": 8}
    }
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .domain.overlay import Color, GREEN, RED, YELLOW, WHITE

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "OVERLAY_CONFIG"


@dataclass(frozen=True)
class RulesConfig:
    # Tolerance (degrees) for catalog records that don't carry their own.
    default_tolerance: float = 30.0
    # Optional JSON technique catalog; built-in catalog is used when empty.
    catalog_path: str = ""


@dataclass(frozen=True)
class ColorConfig:
    good: Color = GREEN
    bad: Color = RED
    neutral: Color = GREEN  # connections no rule governs
    point: Color = YELLOW
    label: Color = WHITE


@dataclass(frozen=True)
class StyleConfig:
    stroke_width: float = 12.0
    point_size: float = 12.0
    text_size: float = 40.0


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: tuple[str, ...] = (
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    )


@dataclass(frozen=True)
class OverlayConfig:
    rules: RulesConfig = field(default_factory=RulesConfig)
    colors: ColorConfig = field(default_factory=ColorConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


_CONFIG_PATH: Optional[Path] = None
_CONFIG_CACHE: Optional[OverlayConfig] = None


def _repo_root() -> Path:
    # backend/core/config.py -> repo root is two levels up.
    return Path(__file__).resolve().parents[2]


def get_default_config_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return _repo_root() / "config.json"


def set_config_path(path: Union[str, Path]) -> None:
    """Override the config path and drop the cached config."""
    global _CONFIG_PATH
    global _CONFIG_CACHE
    _CONFIG_PATH = Path(path).expanduser().resolve()
    _CONFIG_CACHE = None


def _deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
    return cur if cur is not None else default


def _as_float(v: Any, default: float) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return float(default)


def _as_int(v: Any, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return int(default)


def _as_str(v: Any, default: str = "") -> str:
    return str(v) if v is not None else str(default)


def _as_color(v: Any, default: Color) -> Color:
    if not isinstance(v, str):
        return default
    try:
        return Color.from_hex(v)
    except ValueError:
        logger.warning(f"Ignoring invalid color in config: {v!r}")
        return default


def _positive(value: float, default: float) -> float:
    return value if value > 0.0 else default


def load_config(path: Optional[Union[str, Path]] = None) -> OverlayConfig:
    p = Path(path).expanduser().resolve() if path else (_CONFIG_PATH or get_default_config_path())
    if not p.exists():
        return OverlayConfig()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read config {p}: {e}. Using defaults.")
        return OverlayConfig()

    if not isinstance(raw, dict):
        return OverlayConfig()

    defaults = OverlayConfig()

    tolerance = _as_float(_deep_get(raw, ["rules", "default_tolerance"], 30.0), 30.0)
    catalog_path = _as_str(_deep_get(raw, ["rules", "catalog_path"], ""), "").strip()
    if catalog_path and not Path(catalog_path).is_absolute():
        catalog_path = str(p.parent / catalog_path)

    stroke_width = _as_float(_deep_get(raw, ["style", "stroke_width"], 12.0), 12.0)
    point_size = _as_float(_deep_get(raw, ["style", "point_size"], 12.0), 12.0)
    text_size = _as_float(_deep_get(raw, ["style", "text_size"], 40.0), 40.0)

    host = _as_str(_deep_get(raw, ["server", "host"], "0.0.0.0"), "0.0.0.0")
    port = _as_int(_deep_get(raw, ["server", "port"], 8000), 8000)
    origins = _deep_get(raw, ["server", "cors_origins"], None)
    if isinstance(origins, list):
        cors_origins = tuple(str(o) for o in origins)
    else:
        cors_origins = defaults.server.cors_origins

    return OverlayConfig(
        rules=RulesConfig(
            default_tolerance=_positive(tolerance, 30.0),
            catalog_path=catalog_path,
        ),
        colors=ColorConfig(
            good=_as_color(_deep_get(raw, ["colors", "good"]), defaults.colors.good),
            bad=_as_color(_deep_get(raw, ["colors", "bad"]), defaults.colors.bad),
            neutral=_as_color(_deep_get(raw, ["colors", "neutral"]), defaults.colors.neutral),
            point=_as_color(_deep_get(raw, ["colors", "point"]), defaults.colors.point),
            label=_as_color(_deep_get(raw, ["colors", "label"]), defaults.colors.label),
        ),
        style=StyleConfig(
            stroke_width=_positive(stroke_width, 12.0),
            point_size=_positive(point_size, 12.0),
            text_size=_positive(text_size, 40.0),
        ),
        server=ServerConfig(
            host=host,
            port=port if port > 0 else 8000,
            cors_origins=cors_origins,
        ),
    )


def get_config() -> OverlayConfig:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = load_config()
    return _CONFIG_CACHE
