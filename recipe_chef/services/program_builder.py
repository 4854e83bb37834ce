"""
Program Builder.

Turns parsed recipes into a validated Program: recipes are keyed by
title (the first one is main), loop starts are paired with their loop
ends, breaks are pointed at the end of their enclosing loop, and every
'Serve with' must name a recipe in the program.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..exceptions import ChefBuildError
from ..models.instructions import Break, Call, Instruction, LoopEnd, LoopStart, PrintStacks
from ..models.recipe import ParsedRecipe, Program, Recipe, recipe_key

_LOGGER = logging.getLogger(__name__)


def closing_keyword(verb: str) -> str:
    """Derive the keyword that closes a loop from its opening verb.

    Examples:
        >>> closing_keyword('Sift')
        'sifted'
        >>> closing_keyword('Bake')
        'baked'
    """
    verb = verb.lower()
    return verb + "d" if verb.endswith("e") else verb + "ed"


@dataclass
class _PendingLoop:
    """An open loop start and the breaks found directly inside it."""

    index: int
    keyword: str
    breaks: list[int] = field(default_factory=list)


def resolve_loops(title: str, instructions: list[Instruction]) -> list[Instruction]:
    """Pair loop starts with loop ends and resolve break targets.

    A loop end closes the nearest open loop start with the same closing
    keyword. Starts above it on the open-loop stack stay open and must be
    closed by later statements.

    Args:
        title: Recipe title, for error reporting
        instructions: The recipe's instructions

    Returns:
        A new instruction list with loop and break targets filled in

    Raises:
        ChefBuildError: If a loop end has no open start, a loop start is
            never closed, or 'Set aside' appears outside any loop
    """
    resolved = list(instructions)
    pending: list[_PendingLoop] = []

    for index, instruction in enumerate(instructions):
        if isinstance(instruction, LoopStart):
            keyword = closing_keyword(instruction.verb)
            pending.append(_PendingLoop(index=index, keyword=keyword))
            resolved[index] = instruction.model_copy(update={"keyword": keyword})

        elif isinstance(instruction, LoopEnd):
            for depth in range(len(pending) - 1, -1, -1):
                if pending[depth].keyword == instruction.keyword:
                    break
            else:
                raise ChefBuildError(
                    f"'{instruction.to_text()}' (step {index + 1}) closes no open loop", recipe=title)

            loop = pending.pop(depth)
            resolved[loop.index] = resolved[loop.index].model_copy(update={"end": index})
            resolved[index] = instruction.model_copy(update={"start": loop.index})
            for break_index in loop.breaks:
                resolved[break_index] = Break(end=index)
            _LOGGER.debug("Recipe '%s': loop '%s' spans steps %d-%d",
                          title, loop.keyword, loop.index + 1, index + 1)

        elif isinstance(instruction, Break):
            if not pending:
                raise ChefBuildError(
                    f"'Set aside' (step {index + 1}) is not inside a loop", recipe=title)
            pending[-1].breaks.append(index)

    if pending:
        loop = pending[-1]
        raise ChefBuildError(
            f"'{instructions[loop.index].to_text()}' (step {loop.index + 1}) is never "
            f"closed by '... until {loop.keyword}.'", recipe=title)

    return resolved


def build_recipe(parsed: ParsedRecipe) -> Recipe:
    """Build one runnable recipe from its parse result."""
    instructions = resolve_loops(parsed.title, parsed.instructions)
    lines = list(parsed.lines)
    if parsed.serves is not None:
        instructions.append(PrintStacks(dishes=parsed.serves))
        lines.append(lines[-1] if lines else 0)
    return Recipe(
        name=parsed.title,
        ingredients=tuple(parsed.ingredients),
        instructions=tuple(instructions),
        lines=tuple(lines),
    )


def build_program(parsed_recipes: list[ParsedRecipe]) -> Program:
    """Build a validated program from parsed recipes.

    Args:
        parsed_recipes: Parse results, main recipe first

    Returns:
        The program, ready to run

    Raises:
        ChefBuildError: At the first structural inconsistency found
    """
    if not parsed_recipes:
        raise ChefBuildError("Program has no recipes")

    recipes: dict[str, Recipe] = {}
    for parsed in parsed_recipes:
        key = recipe_key(parsed.title)
        if key in recipes:
            raise ChefBuildError("Recipe title is used more than once", recipe=parsed.title)
        recipes[key] = build_recipe(parsed)

    main = recipe_key(parsed_recipes[0].title)
    for key, recipe in recipes.items():
        if key != main and any(isinstance(i, PrintStacks) for i in recipe.instructions):
            _LOGGER.warning("Recipe '%s' is not the main recipe; its 'Serves' line is ignored",
                            recipe.name)
        for index, instruction in enumerate(recipe.instructions):
            if isinstance(instruction, Call) and recipe_key(instruction.recipe) not in recipes:
                raise ChefBuildError(
                    f"'Serve with {instruction.recipe}' (step {index + 1}) names no recipe "
                    f"in this program", recipe=recipe.name)

    _LOGGER.debug("Built program with %d recipe(s); main recipe is '%s'",
                  len(recipes), recipes[main].name)
    return Program(recipes=recipes, main=main)
