"""
Recipe Chef.

An interpreter for programs written as cooking recipes. Ingredients are
variables, mixing bowls and baking dishes are stacks, and the method is
the code. Running a program has three stages:

- parse: program text -> ParsedRecipe list (``ChefParser``)
- build: ParsedRecipe list -> Program (``build_program``)
- run: Program + inputs -> served output (``ChefRunner``)
"""
from __future__ import annotations

from .config import RunnerSettings
from .exceptions import (
    ChefBuildError,
    ChefError,
    ChefParseError,
    ChefRunError,
    ChefSourceError,
)
from .models import Program, Recipe, Value
from .parsers import ChefParser
from .services import ChefRunner, build_program, compile_program, cook, cook_to_string

__version__ = "0.1.0"

__all__ = [
    "ChefBuildError",
    "ChefError",
    "ChefParseError",
    "ChefParser",
    "ChefRunError",
    "ChefRunner",
    "ChefSourceError",
    "Program",
    "Recipe",
    "RunnerSettings",
    "Value",
    "build_program",
    "compile_program",
    "cook",
    "cook_to_string",
]
