import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from entity_mapper.colored_logging import (
    setup_colored_logging,
    log_progress,
    log_section,
    log_success,
)
from entity_mapper.config_validation import load_config
from entity_mapper.constants import OutputFormats
from entity_mapper.declarations import load_declarations
from entity_mapper.exceptions import EntityMapperError
from entity_mapper.mapper import build_schema
from entity_mapper.report import dump_schema, save_schema


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="entity-mapper",
        description="Validate entity declarations and print their physical schema.",
    )
    parser.add_argument(
        "declarations",
        help="Path to the YAML file declaring the entities to map.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file (naming policies and checks).",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=OutputFormats.ALL,
        help="Output format of the resolved schema. Overrides config file setting.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the resolved schema to this file instead of stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    try:
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, {"output_format": args.output_format})
        logger.debug(f"Effective configuration loaded: {config}")

        log_section(logger, "Entity declarations")
        log_progress(logger, f"Loading declarations from {args.declarations}...")
        inspector, classes = load_declarations(args.declarations)
        if not classes:
            logger.warning("No entities declared. Nothing to map.")
            return 0

        log_section(logger, "Physical schema")
        registry = build_schema(classes, inspector, config)

        if args.output:
            save_schema(registry, Path(args.output), config.output_format)
            log_success(logger, f"Schema written to {args.output}")
        else:
            sys.stdout.write(dump_schema(registry, config.output_format))
            log_success(logger, f"{len(registry)} entities mapped successfully.")

    # --- Error Handling ---
    except EntityMapperError as e:
        logger.error(f"Mapping Error: {e}", exc_info=args.verbose)
        return 1
    except OSError as e:
        logger.error(f"I/O Error: {e}", exc_info=args.verbose)
        return 1

    return 0


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
