#!/usr/bin/env python3
"""
Recipe Chef - Run programs written as cooking recipes

Loads a recipe program from a file, stdin or URL, builds it and cooks
the main recipe, serving its output to stdout.
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterator

from dotenv import load_dotenv

from recipe_chef.config import RunnerSettings
from recipe_chef.const import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL
from recipe_chef.exceptions import ChefError
from recipe_chef.services.recipe_service import compile_program
from recipe_chef.services.runner import ChefRunner
from recipe_chef.sources import load_source

logger = logging.getLogger(__name__)


def _stdin_values() -> Iterator[str]:
    """Yield whitespace-separated tokens from stdin as they are needed."""
    for line in sys.stdin:
        yield from line.split()


def _input_values(args: argparse.Namespace) -> Iterator[str]:
    if args.input is not None:
        return iter(args.input.split())
    if args.input_file is not None:
        return iter(args.input_file.read_text(encoding="utf-8").split())
    if args.source == "-":
        return iter(())
    return _stdin_values()


def _describe(program) -> None:
    """Print a one-line summary per recipe."""
    for key, recipe in program.recipes.items():
        role = "main" if key == program.main else "auxiliary"
        print(f"{recipe.name} ({role}): {len(recipe.ingredients)} ingredient(s), "
              f"{len(recipe.instructions)} instruction(s)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run programs written as cooking recipes"
    )
    parser.add_argument(
        "source",
        type=str,
        help="Recipe file, '-' for stdin, or an http(s) URL"
    )
    values = parser.add_mutually_exclusive_group()
    values.add_argument(
        "--input",
        help="Whitespace-separated whole numbers for 'Take ... from refrigerator'"
    )
    values.add_argument(
        "--input-file",
        type=Path,
        help="File of whitespace-separated whole numbers (default: read stdin)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for 'Mix ... well' shuffles (can also be set via RECIPE_CHEF_SEED)"
    )
    parser.add_argument(
        "--max-call-depth",
        type=int,
        help="Deepest allowed chain of 'Serve with' calls (default: 200)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING, or RECIPE_CHEF_LOG_LEVEL)"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only parse and build the program, then describe its recipes"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point for the recipe runner."""
    load_dotenv()

    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=args.log_level or os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        settings = RunnerSettings.from_env(
            seed=args.seed,
            max_call_depth=args.max_call_depth,
        )
        text = load_source(args.source, settings)
        program = compile_program(text)

        if args.check:
            _describe(program)
            return 0

        ChefRunner(
            program,
            inputs=_input_values(args),
            output=sys.stdout,
            settings=settings,
        ).run()
        sys.stdout.flush()
        return 0

    except (ChefError, OSError) as e:
        sys.stdout.flush()
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
