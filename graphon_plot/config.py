from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import tomllib
from typing import Any

from graphon_plot.errors import InvalidConfigurationError
from graphon_plot.series import RGBA


DEFAULT_EDGE_MARGIN = 20.0
DEFAULT_TICK_SIZE = 10.0
DEFAULT_POINT_SIZE = 10.0
DEFAULT_LABEL_GAP = 3.0
DEFAULT_TICK_TARGET = 5


@dataclass(frozen=True)
class ChartConfig:
    edge_margin: float = DEFAULT_EDGE_MARGIN
    tick_size: float = DEFAULT_TICK_SIZE
    point_size: float = DEFAULT_POINT_SIZE
    label_gap: float = DEFAULT_LABEL_GAP
    x_tick_target: int = DEFAULT_TICK_TARGET
    y_tick_target: int = DEFAULT_TICK_TARGET
    axis_color: RGBA = (142, 142, 147, 255)
    label_color: RGBA = (142, 142, 147, 255)
    background: RGBA = (255, 255, 255, 255)

    def __post_init__(self) -> None:
        for name in ("edge_margin", "tick_size", "point_size", "label_gap"):
            if getattr(self, name) < 0:
                raise InvalidConfigurationError(f"{name} must be >= 0")
        if self.x_tick_target <= 0 or self.y_tick_target <= 0:
            raise InvalidConfigurationError("tick targets must be > 0")
        for name in ("axis_color", "label_color", "background"):
            _check_color(name, getattr(self, name))


def load_chart_config(path: str | Path) -> ChartConfig:
    """Read a `ChartConfig` from the `[chart]` table of a TOML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigurationError(f"invalid chart config {config_path}: {exc}") from exc
    table = raw.get("chart", {})
    if not isinstance(table, dict):
        raise InvalidConfigurationError("`chart` must be a table")
    return chart_config_from_mapping(table)


def chart_config_from_mapping(values: dict[str, Any]) -> ChartConfig:
    known = {f.name: f for f in fields(ChartConfig)}
    unknown = sorted(set(values) - set(known))
    if unknown:
        raise InvalidConfigurationError(f"unknown chart config keys: {', '.join(unknown)}")
    kwargs: dict[str, Any] = {}
    for key, value in values.items():
        if key.endswith("_color") or key == "background":
            kwargs[key] = _coerce_color(key, value)
        elif key.endswith("_target"):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigurationError(f"{key} must be an integer")
            kwargs[key] = value
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigurationError(f"{key} must be a number")
            kwargs[key] = float(value)
    return ChartConfig(**kwargs)


def _coerce_color(name: str, value: Any) -> RGBA:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise InvalidConfigurationError(f"{name} must be an RGB or RGBA array")
    if len(value) == 3:
        value = (*value, 255)
    color = tuple(value)
    _check_color(name, color)
    return color  # type: ignore[return-value]


def _check_color(name: str, color: tuple[int, ...]) -> None:
    if len(color) != 4 or any(isinstance(c, bool) or not isinstance(c, int) or c < 0 or c > 255 for c in color):
        raise InvalidConfigurationError(f"{name} must hold four integers in [0, 255]")
