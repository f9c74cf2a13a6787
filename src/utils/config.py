from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import os
import yaml

DEFAULT_GENERATOR_SETTINGS: dict[str, str] = {
    "timezones_path": "config/timezone-data.yaml",
    "template_path": "config/timezone-abstract.json",
    "output_path": "config/timezone.json",
    "parameter_name": "Tz",
    "value_prefix": "Timezone_",
}


@dataclass(frozen=True)
class GeneratorConfig:
    timezones_path: Path
    template_path: Path
    output_path: Path
    parameter_name: str = "Tz"
    value_prefix: str = "Timezone_"


def _project_root() -> Path:
    # Resolve from this file: .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def _default_config_path() -> Path:
    return _project_root() / "config" / "timezone_category.yaml"


def resolve_project_path(p: str | Path) -> Path:
    path = Path(p)
    return path if path.is_absolute() else _project_root() / path


def load_generator_config(path: str | Path | None = None) -> GeneratorConfig:
    """
    Load generator config from YAML.

    Precedence:
    - explicit `path`
    - env `TZ_CATEGORY_CONFIG`
    - project default `config/timezone_category.yaml` (built-in defaults if absent)

    Relative paths inside the config resolve against the project root.
    """
    explicit = path or os.getenv("TZ_CATEGORY_CONFIG")
    cfg_path = Path(explicit) if explicit else _default_config_path()

    if explicit or cfg_path.exists():
        cfg = load_yaml(cfg_path)
        gen = cfg.get("generator") or {}
    else:
        gen = dict(DEFAULT_GENERATOR_SETTINGS)

    missing = [f"generator.{k}" for k in ("timezones_path", "template_path", "output_path") if not gen.get(k)]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} in {cfg_path}")

    return GeneratorConfig(
        timezones_path=resolve_project_path(gen["timezones_path"]),
        template_path=resolve_project_path(gen["template_path"]),
        output_path=resolve_project_path(gen["output_path"]),
        parameter_name=str(gen.get("parameter_name") or DEFAULT_GENERATOR_SETTINGS["parameter_name"]),
        value_prefix=str(gen.get("value_prefix") or DEFAULT_GENERATOR_SETTINGS["value_prefix"]),
    )


def load_yaml(path: str | Path) -> Any:
    p = Path(path)
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
