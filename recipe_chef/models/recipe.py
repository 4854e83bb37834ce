"""
Recipe data models for the Recipe Chef interpreter.

This module defines the Pydantic models produced by parsing recipe text
(``ParsedRecipe``) and by building a runnable program from it
(``Recipe`` and ``Program``).
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .instructions import Instruction
from .value import IngredientKind


def recipe_key(title: str) -> str:
    """Normalize a recipe title for lookups by ``Serve with``."""
    return " ".join(title.split()).casefold()


class Ingredient(BaseModel):
    """A declared ingredient.

    Attributes:
        name: The name of the ingredient (e.g., 'sugar', 'olive oil')
        initial_value: Optional starting quantity (e.g., 72)
        kind: Whether the measure makes it dry, liquid or either
        measure: The measure as written (e.g., 'g', 'heaped cups')
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the ingredient, e.g., 'sugar'"
    )
    initial_value: int | None = Field(
        default=None,
        description="The declared quantity, e.g., 72"
    )
    kind: IngredientKind = Field(
        default=IngredientKind.EITHER,
        description="Interpretation derived from the measure"
    )
    measure: str | None = Field(
        default=None,
        description="The measure as written, e.g., 'g', 'level teaspoon'"
    )


class ParsedRecipe(BaseModel):
    """One recipe as it appears in program text.

    Attributes:
        title: The recipe title, without its trailing period
        comment: Free text following the title
        ingredients: Declared ingredients, in declaration order
        cooking_time: Cooking time in minutes (inert)
        oven_temperature: Oven temperature in degrees Celsius (inert)
        gas_mark: Oven gas mark (inert)
        instructions: Method instructions, in order
        lines: Source line of each instruction
        serves: Number of baking dishes to serve, if stated
    """

    title: str = Field(description="The recipe title")
    comment: str = Field(default="", description="Free text after the title")
    ingredients: list[Ingredient] = Field(default_factory=list)
    cooking_time: int | None = None
    oven_temperature: int | None = None
    gas_mark: int | None = None
    instructions: list[Instruction] = Field(default_factory=list)
    lines: list[int] = Field(default_factory=list)
    serves: int | None = None


class Recipe(BaseModel):
    """A built, callable recipe.

    Instruction indices are private to each recipe; loop and break
    targets refer to positions in ``instructions``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The recipe title")
    ingredients: tuple[Ingredient, ...] = ()
    instructions: tuple[Instruction, ...] = ()
    lines: tuple[int, ...] = ()

    def ingredient(self, name: str) -> Ingredient | None:
        # A later declaration of the same name replaces an earlier one
        for ingredient in reversed(self.ingredients):
            if ingredient.name == name:
                return ingredient
        return None


class Program(BaseModel):
    """Recipes by normalized title; the first recipe is the main one."""

    model_config = ConfigDict(frozen=True)

    recipes: dict[str, Recipe] = Field(default_factory=dict)
    main: str = Field(description="Key of the main recipe")

    @property
    def main_recipe(self) -> Recipe:
        return self.recipes[self.main]

    def lookup(self, title: str) -> Recipe | None:
        return self.recipes.get(recipe_key(title))
