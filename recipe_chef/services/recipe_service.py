"""
Recipe Service.

This module ties the three stages together: parse program text, build
a program from the parsed recipes, and run it.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Iterable, TextIO

from ..config import RunnerSettings
from ..models.recipe import Program
from ..parsers.chef_parser import ChefParser
from .kitchen import Frame
from .program_builder import build_program
from .runner import ChefRunner

_LOGGER = logging.getLogger(__name__)


def compile_program(text: str) -> Program:
    """Parse and build a program from its text.

    Raises:
        ChefParseError: If the text is malformed
        ChefBuildError: If the recipes do not form a consistent program
    """
    parsed = ChefParser().parse_program(text)
    program = build_program(parsed)
    _LOGGER.debug("Compiled program with main recipe '%s'", program.main_recipe.name)
    return program


def cook(
    text: str,
    inputs: Iterable[Any] = (),
    output: TextIO | None = None,
    settings: RunnerSettings | None = None,
) -> Frame:
    """Parse, build and run a program.

    Args:
        text: Program text
        inputs: Values for 'Take ... from refrigerator', in order
        output: Sink for served output (defaults to stdout)
        settings: Run limits

    Returns:
        The main recipe's final frame

    Raises:
        ChefError: From whichever stage fails first
    """
    program = compile_program(text)
    return ChefRunner(program, inputs=inputs, output=output, settings=settings).run()


def cook_to_string(text: str, inputs: Iterable[Any] = (),
                   settings: RunnerSettings | None = None) -> str:
    """Run a program and return everything it served."""
    output = io.StringIO()
    cook(text, inputs=inputs, output=output, settings=settings)
    return output.getvalue()
