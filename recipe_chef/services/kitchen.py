"""
Runtime state of one recipe invocation.

A frame owns numbered mixing bowls and baking dishes (created on first
use) and the current value of every ingredient the recipe declares.
Stacks keep their top at the end of the list. A pushed value is the
ingredient's own value object until arithmetic or a read replaces it.
"""
from __future__ import annotations

import logging

from ..exceptions import ChefRunError
from ..models.recipe import Ingredient, Recipe
from ..models.value import IngredientKind, Value

_LOGGER = logging.getLogger(__name__)

Stack = list[Value]


class Frame:
    """Bowls, dishes and ingredient values of a running recipe."""

    def __init__(self, recipe: Recipe, bowls: dict[int, Stack] | None = None,
                 is_main: bool = False) -> None:
        """Create a frame for a recipe.

        Args:
            recipe: The recipe being run
            bowls: Mixing bowls handed over by a caller; they are copied
            is_main: Whether this is the program's main recipe
        """
        self.recipe = recipe
        self.is_main = is_main
        self.bowls: dict[int, Stack] = copy_stacks(bowls or {})
        self.dishes: dict[int, Stack] = {}
        self.values: dict[str, Value] = {
            ingredient.name: Value.of(ingredient.initial_value or 0, ingredient.kind)
            for ingredient in recipe.ingredients
        }
        self.position = 0

    def bowl(self, number: int) -> Stack:
        return self.bowls.setdefault(number, [])

    def dish(self, number: int) -> Stack:
        return self.dishes.setdefault(number, [])

    def ingredient(self, name: str) -> Ingredient:
        ingredient = self.recipe.ingredient(name)
        if ingredient is None:
            raise ChefRunError(f"Ingredient '{name}' is not in the ingredient list")
        return ingredient

    def value(self, name: str) -> Value:
        if name not in self.values:
            self.ingredient(name)
        return self.values[name]

    def set_value(self, name: str, value: Value) -> None:
        self.ingredient(name)
        self.values[name] = value

    def dry_total(self) -> int:
        return sum(
            value.number for name, value in self.values.items()
            if self.ingredient(name).kind is IngredientKind.DRY
        )

    def peek(self, number: int) -> Value:
        bowl = self.bowl(number)
        if not bowl:
            raise ChefRunError(f"Mixing bowl {number} is empty")
        return bowl[-1]

    def pop(self, number: int) -> Value:
        value = self.peek(number)
        self.bowls[number].pop()
        return value

    def take_back(self, callee: Frame) -> None:
        """Overwrite this frame's bowls with those of a finished callee."""
        for number, bowl in callee.bowls.items():
            self.bowls[number] = [value.copy_value() for value in bowl]


def copy_stacks(stacks: dict[int, Stack]) -> dict[int, Stack]:
    """Copy stacks and their values, so frames never share a value."""
    return {number: [value.copy_value() for value in stack] for number, stack in stacks.items()}
