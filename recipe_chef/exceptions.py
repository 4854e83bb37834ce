"""
Recipe Chef errors.

Parsing, building and running each fail with their own error type so
callers can tell a malformed recipe from a broken program or a failed
run. None of them is recoverable: the operation in progress stops.
"""
from __future__ import annotations


class ChefError(Exception):
    """Base class for every error raised by Recipe Chef."""


class ChefSourceError(ChefError):
    """Recipe text could not be loaded from its source."""


class ChefParseError(ChefError):
    """Recipe text does not follow the recipe grammar.

    Attributes:
        line: 1-based line number of the offending text, if known
        text: The offending line or statement
    """

    def __init__(self, message: str, line: int | None = None, text: str | None = None) -> None:
        self.line = line
        self.text = text
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ChefBuildError(ChefError):
    """Parsed recipes do not form a consistent program.

    Attributes:
        recipe: Title of the recipe the inconsistency was found in
    """

    def __init__(self, message: str, recipe: str | None = None) -> None:
        self.recipe = recipe
        if recipe is not None:
            message = f"recipe '{recipe}': {message}"
        super().__init__(message)


class ChefRunError(ChefError):
    """A fatal condition stopped the program while it was running.

    Attributes:
        recipe: Title of the recipe that was executing
        step: 0-based index of the failing instruction
    """

    def __init__(self, message: str, recipe: str | None = None, step: int | None = None) -> None:
        self.recipe = recipe
        self.step = step
        self.reason = message
        if recipe is not None:
            where = f"recipe '{recipe}'" if step is None else f"recipe '{recipe}', step {step + 1}"
            message = f"{where}: {message}"
        super().__init__(message)
