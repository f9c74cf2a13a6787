from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from src.transforms.category import DEFAULT_PARAMETER_NAME, apply_timezone_enums, validate_category
from src.transforms.timezones import DEFAULT_VALUE_PREFIX, TimezoneEntryIn, transform_timezones
from src.utils.config import GeneratorConfig
from src.utils.logging import get_logger

logger = get_logger(component="jobs_timezone_category")


@dataclass(frozen=True)
class GenerationSummary:
    output_path: Path
    entries: int
    parameter_name: str
    written: bool
    bytes_written: int


def load_timezone_table(path: Path) -> list[TimezoneEntryIn]:
    """
    Read the static timezone table (YAML or JSON; JSON is a YAML subset).

    Accepts either a top-level list or `{timezones: [...]}`.
    """
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    rows = raw.get("timezones") if isinstance(raw, dict) else raw
    if not isinstance(rows, list):
        raise ValueError(f"Timezone table must be a list of entries: {path}")

    entries = [TimezoneEntryIn.model_validate(r) for r in rows]
    logger.info("timezone_table_loaded", path=str(path), entries=len(entries))
    return entries


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name} in category template")


def load_category_template(path: Path) -> dict[str, Any]:
    template = json.loads(Path(path).read_text(encoding="utf-8"), parse_constant=_reject_constant)
    if not isinstance(template, dict):
        raise ValueError(f"Category template must be a JSON object: {path}")
    logger.info("category_template_loaded", path=str(path), parameters=len(template.get("parameters") or []))
    return template


def render_category(category: dict[str, Any]) -> str:
    return json.dumps(category, indent=2, ensure_ascii=False, allow_nan=False)


def build_timezone_category(
    entries: list[TimezoneEntryIn],
    template: dict[str, Any],
    *,
    param_name: str = DEFAULT_PARAMETER_NAME,
    value_prefix: str = DEFAULT_VALUE_PREFIX,
) -> dict[str, Any]:
    enums = transform_timezones(entries, prefix=value_prefix)
    return apply_timezone_enums(template, enums, param_name=param_name)


def generate_timezone_category(
    cfg: GeneratorConfig,
    *,
    dry_run: bool = False,
    validate: bool = False,
) -> GenerationSummary:
    """
    Timezone table + abstract category -> full category file.

    Raises MissingParameterError before anything is written when the template
    has no `cfg.parameter_name` parameter.
    """
    entries = load_timezone_table(cfg.timezones_path)
    template = load_category_template(cfg.template_path)

    category = build_timezone_category(
        entries,
        template,
        param_name=cfg.parameter_name,
        value_prefix=cfg.value_prefix,
    )
    if validate:
        validate_category(category)

    text = render_category(category)
    data = text.encode("utf-8")

    if dry_run:
        logger.info(
            "timezone_category_dry_run",
            output=str(cfg.output_path),
            entries=len(entries),
            bytes=len(data),
        )
        return GenerationSummary(
            output_path=cfg.output_path,
            entries=len(entries),
            parameter_name=cfg.parameter_name,
            written=False,
            bytes_written=0,
        )

    cfg.output_path.parent.mkdir(parents=True, exist_ok=True)
    # write_bytes truncates any previous content
    cfg.output_path.write_bytes(data)
    logger.info(
        "timezone_category_generated",
        output=str(cfg.output_path),
        entries=len(entries),
        bytes=len(data),
    )
    return GenerationSummary(
        output_path=cfg.output_path,
        entries=len(entries),
        parameter_name=cfg.parameter_name,
        written=True,
        bytes_written=len(data),
    )
