"""Models package."""
from .instructions import (
    Add,
    AddDry,
    Arithmetic,
    Break,
    Call,
    ClearStack,
    CopyStack,
    Divide,
    Instruction,
    Liquefy,
    LiquefyContents,
    LoopEnd,
    LoopStart,
    Mix,
    Multiply,
    Pop,
    PrintStacks,
    Push,
    Read,
    Return,
    Stir,
    StirIngredient,
    Subtract,
)
from .recipe import Ingredient, ParsedRecipe, Program, Recipe, recipe_key
from .value import IngredientKind, Value

__all__ = [
    "Add",
    "AddDry",
    "Arithmetic",
    "Break",
    "Call",
    "ClearStack",
    "CopyStack",
    "Divide",
    "Ingredient",
    "IngredientKind",
    "Instruction",
    "Liquefy",
    "LiquefyContents",
    "LoopEnd",
    "LoopStart",
    "Mix",
    "Multiply",
    "ParsedRecipe",
    "Pop",
    "PrintStacks",
    "Program",
    "Push",
    "Read",
    "Recipe",
    "Return",
    "Stir",
    "StirIngredient",
    "Subtract",
    "Value",
    "recipe_key",
]
