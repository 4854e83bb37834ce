"""
Base Recipe Parser.

This module defines the interface recipe program parsers implement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.recipe import ParsedRecipe


class BaseRecipeParser(ABC):
    """Abstract base class for recipe parsers.

    Parsers convert raw program text into structured ParsedRecipe
    objects, one per recipe, in the order they appear.
    """

    @abstractmethod
    def parse_program(self, text: str) -> list[ParsedRecipe]:
        """Parse every recipe in a program.

        Args:
            text: The raw program text

        Returns:
            The parsed recipes, main recipe first

        Raises:
            ChefParseError: If any part of the text is malformed
        """
