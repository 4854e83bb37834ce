"""
Method instructions.

Each statement of a recipe's method becomes one of the frozen models
below. ``to_text`` renders the canonical statement for an instruction,
so every accepted surface variant of a statement parses back to the
same model. Loop and break instructions carry the jump targets filled
in by the program builder.
"""
from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


def _bowl(number: int) -> str:
    return f"mixing bowl {number}"


def _dish(number: int) -> str:
    return f"baking dish {number}"


class Instruction(BaseModel):
    """Base class for every method instruction."""

    model_config = ConfigDict(frozen=True)

    def to_text(self) -> str:
        raise NotImplementedError


class Read(Instruction):
    ingredient: str

    def to_text(self) -> str:
        return f"Take {self.ingredient} from refrigerator."


class Push(Instruction):
    ingredient: str
    bowl: int = 1

    def to_text(self) -> str:
        return f"Put {self.ingredient} into {_bowl(self.bowl)}."


class Pop(Instruction):
    bowl: int = 1
    ingredient: str

    def to_text(self) -> str:
        return f"Fold {self.ingredient} into {_bowl(self.bowl)}."


class Arithmetic(Instruction):
    """Combine the top of a bowl with an ingredient, replacing the top."""

    ingredient: str
    bowl: int = 1

    verb: ClassVar[str] = ""
    preposition: ClassVar[str] = ""

    def apply(self, top: int, operand: int) -> int:
        raise NotImplementedError

    def to_text(self) -> str:
        return f"{self.verb} {self.ingredient} {self.preposition} {_bowl(self.bowl)}."


class Add(Arithmetic):
    verb: ClassVar[str] = "Add"
    preposition: ClassVar[str] = "to"

    def apply(self, top: int, operand: int) -> int:
        return top + operand


class Subtract(Arithmetic):
    verb: ClassVar[str] = "Remove"
    preposition: ClassVar[str] = "from"

    def apply(self, top: int, operand: int) -> int:
        return top - operand


class Multiply(Arithmetic):
    verb: ClassVar[str] = "Combine"
    preposition: ClassVar[str] = "into"

    def apply(self, top: int, operand: int) -> int:
        return top * operand


class Divide(Arithmetic):
    verb: ClassVar[str] = "Divide"
    preposition: ClassVar[str] = "into"

    def apply(self, top: int, operand: int) -> int:
        """Integer division truncating toward zero.

        Raises:
            ZeroDivisionError: If operand is zero
        """
        if operand == 0:
            raise ZeroDivisionError("division by zero")
        quotient = abs(top) // abs(operand)
        return quotient if (top < 0) == (operand < 0) else -quotient


class AddDry(Instruction):
    bowl: int = 1

    def to_text(self) -> str:
        return f"Add dry ingredients to {_bowl(self.bowl)}."


class Liquefy(Instruction):
    ingredient: str

    def to_text(self) -> str:
        return f"Liquefy {self.ingredient}."


class LiquefyContents(Instruction):
    bowl: int = 1

    def to_text(self) -> str:
        return f"Liquefy contents of {_bowl(self.bowl)}."


class Stir(Instruction):
    minutes: int
    bowl: int = 1

    def to_text(self) -> str:
        unit = "minute" if self.minutes == 1 else "minutes"
        return f"Stir {_bowl(self.bowl)} for {self.minutes} {unit}."


class StirIngredient(Instruction):
    ingredient: str
    bowl: int = 1

    def to_text(self) -> str:
        return f"Stir {self.ingredient} into {_bowl(self.bowl)}."


class Mix(Instruction):
    bowl: int = 1

    def to_text(self) -> str:
        return f"Mix {_bowl(self.bowl)} well."


class ClearStack(Instruction):
    bowl: int = 1

    def to_text(self) -> str:
        return f"Clean {_bowl(self.bowl)}."


class CopyStack(Instruction):
    bowl: int = 1
    dish: int = 1

    def to_text(self) -> str:
        return f"Pour contents of {_bowl(self.bowl)} into {_dish(self.dish)}."


class LoopStart(Instruction):
    """``<Verb> the <ingredient>.``; loops while the ingredient is non-zero."""

    verb: str
    ingredient: str
    keyword: str | None = Field(
        default=None,
        description="Closing keyword derived from the verb, set when the program is built"
    )
    end: int | None = Field(
        default=None,
        description="Index of the matching LoopEnd"
    )

    def to_text(self) -> str:
        return f"{self.verb} the {self.ingredient}."


class LoopEnd(Instruction):
    """``<Verb> [the <ingredient>] until <verbed>.``"""

    verb: str
    ingredient: str | None = None
    keyword: str
    start: int | None = Field(
        default=None,
        description="Index of the matching LoopStart"
    )

    def to_text(self) -> str:
        if self.ingredient is None:
            return f"{self.verb} until {self.keyword}."
        return f"{self.verb} the {self.ingredient} until {self.keyword}."


class Break(Instruction):
    end: int | None = Field(
        default=None,
        description="Index of the LoopEnd closing the innermost enclosing loop"
    )

    def to_text(self) -> str:
        return "Set aside."


class Call(Instruction):
    recipe: str

    def to_text(self) -> str:
        return f"Serve with {self.recipe}."


class Return(Instruction):
    hours: int | None = None

    def to_text(self) -> str:
        if self.hours is None:
            return "Refrigerate."
        unit = "hour" if self.hours == 1 else "hours"
        return f"Refrigerate for {self.hours} {unit}."


class PrintStacks(Instruction):
    dishes: int

    def to_text(self) -> str:
        return f"Serves {self.dishes}."
