"""
REPL Configuration
==================
Command-line and environment settings for the magicalc REPL.
"""
from __future__ import annotations

import argparse
import os
from dataclasses import dataclass

DEFAULT_DEFINITIONS = "init.rpg"
DEFINITIONS_ENV = "MAGICALC_FILE"


@dataclass
class ReplConfig:
    """Settings for one REPL session."""

    definitions: str = DEFAULT_DEFINITIONS   # Spell definition file to load
    check_only: bool = False                  # Compile and list spells, then exit
    show_banner: bool = True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="magicalc",
        description="Spell damage calculator driven by a definition file.",
    )
    parser.add_argument(
        "definitions", nargs="?", default=None,
        help=f"Spell definition file (default: ${DEFINITIONS_ENV} or {DEFAULT_DEFINITIONS})",
    )
    parser.add_argument(
        "--check", action="store_true",
        help="Compile the definition file, list its spells and exit",
    )
    parser.add_argument(
        "--no-banner", action="store_true",
        help="Skip the startup banner",
    )
    return parser


def load_config(argv: list[str] | None = None) -> ReplConfig:
    """Build a ReplConfig from argv, falling back to the environment."""
    args = build_parser().parse_args(argv)
    definitions = args.definitions or os.environ.get(DEFINITIONS_ENV, "") or DEFAULT_DEFINITIONS
    return ReplConfig(
        definitions=definitions,
        check_only=args.check,
        show_banner=not args.no_banner,
    )
