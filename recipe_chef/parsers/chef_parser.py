"""
Recipe program parser.

Program text is a sequence of blocks separated by blank lines. Each
recipe is a title block, an optional comment block, an optional
ingredient list, optional cooking time and oven temperature, the method
and an optional 'Serves' line. Any text that fits none of these stops
the parse; no partial program is returned.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ..const import HEADER_INGREDIENTS, HEADER_METHOD
from ..exceptions import ChefParseError
from ..measures import parse_ingredient
from ..models.recipe import ParsedRecipe
from .base_parser import BaseRecipeParser
from .method_grammar import parse_serves, parse_statement

_LOGGER = logging.getLogger(__name__)

_COOKING_TIME = re.compile(r"Cooking time: (?P<time>\d+) (?P<unit>hours?|minutes?)\.")
_OVEN = re.compile(
    r"Pre-heat oven to (?P<degrees>\d+) degrees Celsius"
    r"(?: \(gas mark (?P<gas_mark>\d+)\))?\."
)
_SENTENCE = re.compile(r"[^.]*\.")


@dataclass
class _Block:
    """Consecutive non-blank lines and the line number of the first."""

    line: int
    lines: list[str]

    @property
    def first(self) -> str:
        return self.lines[0]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def split_blocks(text: str) -> list[_Block]:
    """Split program text into blank-line separated blocks."""
    blocks: list[_Block] = []
    current: _Block | None = None
    for number, raw in enumerate(text.replace("\r\n", "\n").split("\n"), start=1):
        line = raw.strip()
        if not line:
            current = None
            continue
        if current is None:
            current = _Block(line=number, lines=[])
            blocks.append(current)
        current.lines.append(line)
    return blocks


def _single_line(block: _Block, pattern: re.Pattern) -> re.Match | None:
    if len(block.lines) != 1:
        return None
    return pattern.fullmatch(" ".join(block.first.split()))


class ChefParser(BaseRecipeParser):
    """Parses recipe programs into ParsedRecipe objects."""

    def __init__(self) -> None:
        """Initialize the recipe program parser."""
        _LOGGER.debug("Initialized ChefParser")

    def parse_program(self, text: str) -> list[ParsedRecipe]:
        blocks = split_blocks(text)
        if not blocks:
            raise ChefParseError("Program contains no recipes", line=1)

        recipes = []
        position = 0
        while position < len(blocks):
            recipe, position = self._parse_recipe(blocks, position)
            recipes.append(recipe)

        _LOGGER.debug("Parsed %d recipe(s): %s", len(recipes),
                      ", ".join(recipe.title for recipe in recipes))
        return recipes

    def _parse_recipe(self, blocks: list[_Block], position: int) -> tuple[ParsedRecipe, int]:
        """Parse the recipe starting at ``blocks[position]``.

        Returns:
            The parsed recipe and the position of the next unread block
        """
        title_block = blocks[position]
        title = title_block.first
        if not title.endswith(".") or len(title) < 2:
            raise ChefParseError("Recipe title must end with a period",
                                 line=title_block.line, text=title)
        recipe = ParsedRecipe(title=" ".join(title[:-1].split()))
        comment = title_block.lines[1:]
        position += 1

        def peek() -> _Block | None:
            return blocks[position] if position < len(blocks) else None

        block = peek()
        if block is not None and not self._is_section(block):
            comment.extend(block.lines)
            position += 1
        recipe.comment = "\n".join(comment)

        block = peek()
        if block is not None and block.first == HEADER_INGREDIENTS:
            if len(block.lines) < 2:
                raise ChefParseError("Ingredient list is empty", line=block.line, text=block.first)
            recipe.ingredients = [
                parse_ingredient(line, line=block.line + offset)
                for offset, line in enumerate(block.lines[1:], start=1)
            ]
            position += 1

        block = peek()
        match = _single_line(block, _COOKING_TIME) if block else None
        if match:
            time = int(match.group("time"))
            recipe.cooking_time = time * 60 if match.group("unit").startswith("hour") else time
            position += 1

        block = peek()
        match = _single_line(block, _OVEN) if block else None
        if match:
            recipe.oven_temperature = int(match.group("degrees"))
            if match.group("gas_mark"):
                recipe.gas_mark = int(match.group("gas_mark"))
            position += 1

        block = peek()
        if block is None or not block.first.startswith(HEADER_METHOD):
            line = block.line if block else blocks[-1].line + len(blocks[-1].lines)
            raise ChefParseError(f"Expected '{HEADER_METHOD}' in recipe '{recipe.title}'",
                                 line=line, text=block.first if block else None)
        self._parse_method(block, recipe)
        position += 1

        block = peek()
        if block is not None and recipe.serves is None:
            serves = self._parse_serves_block(block)
            if serves is not None:
                recipe.serves = serves
                position += 1

        _LOGGER.debug("Parsed recipe '%s' with %d ingredient(s) and %d instruction(s)",
                      recipe.title, len(recipe.ingredients), len(recipe.instructions))
        return recipe, position

    def _is_section(self, block: _Block) -> bool:
        return (
            block.first == HEADER_INGREDIENTS
            or block.first.startswith(HEADER_METHOD)
            or _single_line(block, _COOKING_TIME) is not None
            or _single_line(block, _OVEN) is not None
        )

    def _parse_serves_block(self, block: _Block) -> int | None:
        if len(block.lines) != 1:
            return None
        try:
            serves = parse_serves(block.first)
        except ValueError as e:
            raise ChefParseError(str(e), line=block.line, text=block.first) from e
        return serves.dishes if serves else None

    def _parse_method(self, block: _Block, recipe: ParsedRecipe) -> None:
        """Parse the method statements of a recipe into its instructions.

        Statements end with a period; several may share a line and one
        may wrap across lines.
        """
        body = block.text[len(HEADER_METHOD):]
        statements = []
        end = 0
        for match in _SENTENCE.finditer(body):
            if match.group().strip() == ".":
                raise ChefParseError("Empty statement", line=self._line_of(block, body, match.start()))
            statements.append((match.group(), self._line_of(block, body, match.start())))
            end = match.end()

        leftover = body[end:].strip()
        if leftover:
            raise ChefParseError("Statement must end with a period",
                                 line=self._line_of(block, body, end), text=leftover)
        if not statements:
            raise ChefParseError(f"Method of recipe '{recipe.title}' has no instructions",
                                 line=block.line, text=block.first)

        last_text, last_line = statements[-1]
        try:
            serves = parse_serves(last_text)
        except ValueError as e:
            raise ChefParseError(str(e), line=last_line, text=last_text.strip()) from e
        if serves is not None:
            recipe.serves = serves.dishes
            statements.pop()
            if not statements:
                raise ChefParseError(f"Method of recipe '{recipe.title}' has no instructions",
                                     line=block.line, text=block.first)

        for text, line in statements:
            try:
                instruction = parse_statement(text)
            except ValueError as e:
                raise ChefParseError(str(e), line=line, text=" ".join(text.split())) from e
            recipe.instructions.append(instruction)
            recipe.lines.append(line)

    @staticmethod
    def _line_of(block: _Block, body: str, offset: int) -> int:
        """Source line of ``body[offset]``, skipping leading whitespace."""
        while offset < len(body) and body[offset].isspace():
            offset += 1
        return block.line + body.count("\n", 0, offset)
