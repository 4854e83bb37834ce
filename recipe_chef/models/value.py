"""
Values held by ingredients, mixing bowls and baking dishes.

A value is a whole number plus a flag saying whether it is liquid. Dry
values are served as numbers, liquid values as the character with that
code point. Putting an ingredient into a bowl puts its current value
object there, so liquefying the ingredient also liquefies what was put.
The number never changes in place; arithmetic makes new values.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class IngredientKind(str, Enum):
    """How an ingredient's measure makes it behave."""

    DRY = "dry"
    LIQUID = "liquid"
    EITHER = "either"


class Value(BaseModel):
    """A numeric cell with its liquid flag."""

    number: int = Field(description="The numeric content")
    liquid: bool = Field(
        default=False,
        description="Whether the value is served as a character"
    )

    @classmethod
    def of(cls, number: int, kind: IngredientKind) -> Value:
        """Create a fresh value for an ingredient of the given kind."""
        return cls(number=number, liquid=kind is IngredientKind.LIQUID)

    def liquefy(self) -> None:
        """Set the liquid flag; it is never cleared again."""
        self.liquid = True

    def copy_value(self) -> Value:
        return Value(number=self.number, liquid=self.liquid)

    def with_number(self, number: int) -> Value:
        return Value(number=number, liquid=self.liquid)

    def serve(self) -> str:
        """Render the value the way it appears in served output.

        Raises:
            ValueError: If a liquid value is not a valid code point
        """
        if self.liquid:
            return chr(self.number)
        return str(self.number)
