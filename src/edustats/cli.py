"""CLI entrypoint for the edu-stats lookup."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .config import EduStatsSettings
from .pipeline import EduStatsPipeline
from .service import lookup


def _load_settings(config_path: Optional[Path]) -> EduStatsSettings:
    if config_path is None:
        return EduStatsSettings.from_env()
    settings = EduStatsSettings.from_file(config_path)
    if not settings.openai.api_key:
        settings.openai.api_key = EduStatsSettings.from_env().openai.api_key
    return settings


def _run_lookup(school: str, program: str, config_path: Optional[Path]) -> int:
    pipeline = EduStatsPipeline(_load_settings(config_path))
    status, body = lookup({"school": school, "program": program}, pipeline)
    print(json.dumps(body, ensure_ascii=False, indent=2))
    return 0 if status < 400 else 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="edustats", description="Program cost, salary and employability lookup"
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="lookup",
        choices=["lookup"],
        help="Command to run (only 'lookup' is supported)",
    )
    parser.add_argument("--school", required=True, help="School name")
    parser.add_argument("--program", required=True, help="Program name")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON/TOML configuration file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    return _run_lookup(args.school, args.program, args.config)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
