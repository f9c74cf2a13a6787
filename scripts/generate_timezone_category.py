from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    # When run as scripts/generate_timezone_category.py, sys.path[0] is scripts/,
    # so `import src.*` fails unless the project root is on sys.path.
    sys.path.insert(0, str(PROJECT_ROOT))

from src.jobs.timezone_category import generate_timezone_category  # noqa: E402
from src.transforms.category import CategoryValidationError, MissingParameterError  # noqa: E402
from src.utils.config import load_generator_config  # noqa: E402
from src.utils.logging import get_logger, setup_logging  # noqa: E402

logger = get_logger(script="generate_timezone_category")


def main(argv: list[str] | None = None) -> int:
    setup_logging()

    parser = argparse.ArgumentParser(description="Generate the timezone configuration category")
    parser.add_argument("--config", type=str, default=None, help="Generator config YAML (default: config/timezone_category.yaml)")
    parser.add_argument("--timezones", type=str, default=None, help="Override timezone table path")
    parser.add_argument("--template", type=str, default=None, help="Override abstract category template path")
    parser.add_argument("--output", type=str, default=None, help="Override output path")
    parser.add_argument("--dry-run", action="store_true", help="Build the category but don't write the output file")
    parser.add_argument("--validate", action="store_true", help="Check category field types before writing")
    args = parser.parse_args(argv)

    cfg = load_generator_config(args.config)
    if args.timezones:
        cfg = replace(cfg, timezones_path=Path(args.timezones))
    if args.template:
        cfg = replace(cfg, template_path=Path(args.template))
    if args.output:
        cfg = replace(cfg, output_path=Path(args.output))

    try:
        summary = generate_timezone_category(cfg, dry_run=args.dry_run, validate=args.validate)
    except MissingParameterError as e:
        logger.error("missing_category_parameter", parameter=e.param_name, template=str(cfg.template_path))
        print(f"Missing parameter '{e.param_name}' in {cfg.template_path.name}")
        return 1
    except CategoryValidationError as e:
        logger.error("category_validation_failed", err=str(e), template=str(cfg.template_path))
        print(f"Invalid category: {e}")
        return 1

    if not summary.written:
        print(f"[DRY-RUN] Would generate {summary.output_path.name} ({summary.entries} timezones, {summary.parameter_name})")
        return 0

    print(f"Generated {summary.output_path.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
