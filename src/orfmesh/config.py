"""Mesh parameter configuration (defaults, YAML files, environment overrides)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

_CONFIG_ENV = "ORFMESH_CONFIG"
_FLAG_ZERO_ENV = "ORFMESH_FLAG_ZERO_MISMATCH"
_LOG_LEVEL_ENV = "ORFMESH_LOG_LEVEL"

LOGGER = logging.getLogger(__name__)

Color = Tuple[float, float, float]


class MeshConfigError(ValueError):
    """Raised when a mesh config file is invalid."""


@dataclass(frozen=True)
class MeshConfig:
    """Tunable constants of the ribbon walk and the strip mesher."""

    radius: float = 2.0
    initial_scale: float = 0.3
    initial_thickness: float = 0.1
    scale_decay: float = 0.995
    thickness_decay: float = 0.9999
    accent_color: Color = (0.1, 0.8, 1.0)
    alarm_color: Color = (1.0, 0.0, 0.0)
    degenerate_epsilon: float = 1e-3
    # Mark mismatches from the explicit per-residue flag instead of the code's sign.
    flag_zero_mismatch: bool = False


DEFAULT_CONFIG = MeshConfig()

_COLOR_KEYS = {"accent_color", "alarm_color"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"", "0", "false", "no"}:
        return False
    if raw in {"1", "true", "yes"}:
        return True
    return default


def env_log_level(default: str = "WARNING") -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if not value or not value.strip():
        return default
    return value.strip().upper()


def _parse_color(key: str, value: Any) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise MeshConfigError(f"'{key}' must be a list of three numbers.")
    try:
        return tuple(float(component) for component in value)  # type: ignore[return-value]
    except (TypeError, ValueError) as exc:
        raise MeshConfigError(f"'{key}' must be a list of three numbers.") from exc


def _parse_scalar(key: str, value: Any, kind: type) -> Any:
    if kind is bool:
        if not isinstance(value, bool):
            raise MeshConfigError(f"'{key}' must be true or false.")
        return value
    if isinstance(value, bool):
        raise MeshConfigError(f"'{key}' must be a number.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise MeshConfigError(f"'{key}' must be a number.") from exc


def mesh_config_from_mapping(data: Dict[str, Any], base: MeshConfig = DEFAULT_CONFIG) -> MeshConfig:
    known = {field.name: field for field in fields(MeshConfig)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise MeshConfigError(f"Unknown mesh config keys: {', '.join(unknown)}.")
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _COLOR_KEYS:
            values[key] = _parse_color(key, value)
        else:
            kind = bool if key == "flag_zero_mismatch" else float
            values[key] = _parse_scalar(key, value, kind)
    return replace(base, **values)


def load_mesh_config(path: Path) -> MeshConfig:
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise MeshConfigError(f"Mesh config '{cfg_path}' not found.")
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise MeshConfigError("Mesh config must be a YAML mapping.")
    return mesh_config_from_mapping(data)


def resolve_mesh_config(path: Optional[Path] = None) -> MeshConfig:
    """Resolve the config requested by CLI/env, falling back to the defaults."""

    source = path or os.getenv(_CONFIG_ENV) or None
    config = load_mesh_config(Path(source)) if source else DEFAULT_CONFIG
    if os.getenv(_FLAG_ZERO_ENV) is not None:
        config = replace(config, flag_zero_mismatch=_env_bool(_FLAG_ZERO_ENV, config.flag_zero_mismatch))
    LOGGER.debug(
        "resolve_mesh_config source=%s flag_zero_mismatch=%s radius=%s",
        source,
        config.flag_zero_mismatch,
        config.radius,
    )
    return config


__all__ = [
    "MeshConfig",
    "MeshConfigError",
    "DEFAULT_CONFIG",
    "env_log_level",
    "load_mesh_config",
    "mesh_config_from_mapping",
    "resolve_mesh_config",
    "_CONFIG_ENV",
    "_FLAG_ZERO_ENV",
    "_LOG_LEVEL_ENV",
]
