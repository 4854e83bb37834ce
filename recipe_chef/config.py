"""
Settings for loading and running recipe programs.

Values come from keyword arguments, then environment variables (a .env
file loaded by the command line script may supply them), then the
defaults in const.py.
"""
from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, ValidationError

from .const import (
    DEFAULT_MAX_CALL_DEPTH,
    DEFAULT_MAX_SOURCE_BYTES,
    DEFAULT_TIMEOUT,
    ENV_MAX_CALL_DEPTH,
    ENV_MAX_SOURCE_BYTES,
    ENV_SEED,
    ENV_TIMEOUT,
)
from .exceptions import ChefError

_LOGGER = logging.getLogger(__name__)


class RunnerSettings(BaseModel):
    """Limits and knobs for a run.

    Attributes:
        max_call_depth: Deepest allowed chain of 'Serve with' calls
        seed: Seed for the shuffle used by 'Mix', for repeatable runs
        timeout: Seconds to wait when fetching a recipe from a URL
        max_source_bytes: Largest accepted recipe source
    """

    max_call_depth: int = Field(default=DEFAULT_MAX_CALL_DEPTH, ge=1)
    seed: int | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_source_bytes: int = Field(default=DEFAULT_MAX_SOURCE_BYTES, gt=0)

    @classmethod
    def from_env(cls, **overrides) -> RunnerSettings:
        """Create settings from the environment, with explicit overrides.

        Overrides that are None are ignored.

        Raises:
            ChefError: If a setting has an invalid value
        """
        values = {
            "max_call_depth": os.getenv(ENV_MAX_CALL_DEPTH),
            "seed": os.getenv(ENV_SEED),
            "timeout": os.getenv(ENV_TIMEOUT),
            "max_source_bytes": os.getenv(ENV_MAX_SOURCE_BYTES),
        }
        values.update(overrides)
        values = {key: value for key, value in values.items() if value not in (None, "")}
        try:
            settings = cls(**values)
        except ValidationError as e:
            raise ChefError(f"Invalid settings: {e}") from e
        _LOGGER.debug("Using settings %s", settings)
        return settings
