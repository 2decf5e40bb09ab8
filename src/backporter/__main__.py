"""
Command line entry point.
Usage: backport <input_dir> [output_dir] [--verbose] [--no-clear] [--config PATH]
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .coordinator import BackportCoordinator
from .settings import BackportSettings
from .utils.logging_config import setup_logging

OUTPUT_PREFIX = "↺--"
COLOR_CODE = re.compile(r"§[0-9a-fk-or]", re.IGNORECASE)


def clean_pack_name(name: str) -> str:
    """Turn a pack folder name into a safe output folder suffix."""
    cleaned = COLOR_CODE.sub("", name).strip()[:50]
    cleaned = re.sub(r"\s+", "_", cleaned)
    cleaned = re.sub(r"[^\w\-.]", "", cleaned, flags=re.ASCII)
    cleaned = cleaned.lower().strip("_")
    return cleaned or "unknown_pack"


def default_output_dir(input_dir: Path) -> Path:
    """`dist/↺--<cleaned input folder name>`."""
    return Path("dist") / f"{OUTPUT_PREFIX}{clean_pack_name(input_dir.resolve().name)}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backport",
        description="Compile conditional item models into a legacy override/CIT resource pack.",
    )
    parser.add_argument("input_dir", type=Path, help="resource pack to convert")
    parser.add_argument(
        "output_dir",
        type=Path,
        nargs="?",
        help="destination directory (default: dist/↺--<pack name>)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="do not empty the output directory first",
    )
    parser.add_argument("--config", type=Path, help="INI settings file to use")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")
    try:
        settings = BackportSettings(args.config)
        setup_logging(settings, verbose=args.verbose)
        logger.debug(f"Using settings file {settings.get_settings_file_path()}")

        validation = settings.validate()
        for warning in validation.warnings:
            logger.warning(f"  {warning}")
        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
            return 1

        output_dir = args.output_dir or default_output_dir(args.input_dir)
        clear_output = settings.pipeline.clear_output and not args.no_clear

        coordinator = BackportCoordinator.from_settings(settings)
        coordinator.backport(args.input_dir, output_dir, clear_output=clear_output)
        logger.info(f"Output written to {output_dir}")
        return 0

    except Exception:
        logger.exception("Backport failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
