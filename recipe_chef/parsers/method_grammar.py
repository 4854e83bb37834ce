"""
Method statement grammar.

Statements are matched against an ordered list of patterns and the
first match wins, so longer phrasings are listed before the bare forms
they would otherwise be swallowed by (``Add X to mixing bowl 2`` before
``Add X``). Anything shaped like ``<Verb> the <ingredient>`` that
matches nothing else is a loop start.
"""
from __future__ import annotations

import logging
import re
from typing import Callable

from ..const import DEFAULT_BOWL
from ..models.instructions import (
    Add,
    AddDry,
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

_LOGGER = logging.getLogger(__name__)

_THE = r"(?:the )?"


def _container(noun: str, group: str) -> str:
    """Pattern for a numbered container, e.g. 'the 2nd mixing bowl' or 'mixing bowl 2'."""
    return (
        rf"{_THE}(?:(?P<{group}_ord>\d+)(?:st|nd|rd|th) )?{noun}"
        rf"(?: (?P<{group}>\d+))?"
    )


BOWL = _container("mixing bowl", "bowl")
DISH = _container("baking dish", "dish")


def _number(groups: dict[str, str | None], group: str) -> int:
    ordinal = groups.get(f"{group}_ord")
    trailing = groups.get(group)
    if ordinal is not None and trailing is not None:
        raise ValueError(f"{group} number given twice")
    number = ordinal or trailing
    if number is None:
        return DEFAULT_BOWL
    if int(number) < 1:
        raise ValueError(f"{group} numbers start at 1")
    return int(number)


def _arithmetic(cls: type) -> Callable[[dict], Instruction]:
    return lambda g: cls(ingredient=g["ing"], bowl=_number(g, "bowl"))


def _return(g: dict) -> Return:
    if g["hours"] is None:
        return Return()
    hours = int(g["hours"])
    if hours < 1:
        raise ValueError("Refrigerate needs at least 1 hour")
    if (hours == 1) != (g["unit"] == "hour"):
        raise ValueError(f"'{hours} {g['unit']}' does not agree in number")
    return Return(hours=hours)


_STATEMENTS: list[tuple[str, Callable[[dict], Instruction]]] = [
    (rf"Take (?P<ing>.+?) from {_THE}refrigerator",
     lambda g: Read(ingredient=g["ing"])),
    (rf"Put (?P<ing>.+?) into {BOWL}",
     lambda g: Push(ingredient=g["ing"], bowl=_number(g, "bowl"))),
    (rf"Fold (?P<ing>.+?) into {BOWL}",
     lambda g: Pop(ingredient=g["ing"], bowl=_number(g, "bowl"))),
    (rf"Add dry ingredients(?: to {BOWL})?",
     lambda g: AddDry(bowl=_number(g, "bowl"))),
    (rf"Add (?P<ing>.+?) to {BOWL}", _arithmetic(Add)),
    (rf"Remove (?P<ing>.+?) from {BOWL}", _arithmetic(Subtract)),
    (rf"Combine (?P<ing>.+?) into {BOWL}", _arithmetic(Multiply)),
    (rf"Divide (?P<ing>.+?) into {BOWL}", _arithmetic(Divide)),
    (r"Add (?P<ing>.+)", _arithmetic(Add)),
    (r"Remove (?P<ing>.+)", _arithmetic(Subtract)),
    (r"Combine (?P<ing>.+)", _arithmetic(Multiply)),
    (r"Divide (?P<ing>.+)", _arithmetic(Divide)),
    (rf"Liqu[ei]fy {_THE}contents of {BOWL}",
     lambda g: LiquefyContents(bowl=_number(g, "bowl"))),
    (r"Liqu[ei]fy (?P<ing>.+)",
     lambda g: Liquefy(ingredient=g["ing"])),
    (rf"Stir(?: {BOWL})? for (?P<minutes>\d+) minutes?",
     lambda g: Stir(minutes=int(g["minutes"]), bowl=_number(g, "bowl"))),
    (rf"Stir (?P<ing>.+?) into {BOWL}",
     lambda g: StirIngredient(ingredient=g["ing"], bowl=_number(g, "bowl"))),
    (rf"Mix(?: {BOWL})? well",
     lambda g: Mix(bowl=_number(g, "bowl"))),
    (rf"Clean {BOWL}",
     lambda g: ClearStack(bowl=_number(g, "bowl"))),
    (rf"Pour contents of {BOWL} into {DISH}",
     lambda g: CopyStack(bowl=_number(g, "bowl"), dish=_number(g, "dish"))),
    (r"Set aside",
     lambda g: Break()),
    (r"Serve with (?P<recipe>.+)",
     lambda g: Call(recipe=g["recipe"])),
    (r"Refrigerate(?: for (?P<hours>\d+) (?P<unit>hours?))?", _return),
    (r"(?P<verb>[A-Za-z]+)(?: (?:the )?(?P<ing>.+?))? until (?P<keyword>[A-Za-z]+)",
     lambda g: LoopEnd(verb=g["verb"], ingredient=g["ing"], keyword=g["keyword"].lower())),
    (r"(?P<verb>[A-Za-z]+) the (?P<ing>.+)",
     lambda g: LoopStart(verb=g["verb"], ingredient=g["ing"])),
]

STATEMENTS = [(re.compile(pattern), factory) for pattern, factory in _STATEMENTS]

SERVES = re.compile(r"Serves (?P<dishes>\d+)")


def normalize_statement(text: str) -> str:
    """Collapse whitespace and drop the trailing period."""
    text = " ".join(text.split())
    if text.endswith("."):
        text = text[:-1].rstrip()
    return text


def parse_statement(text: str) -> Instruction:
    """Parse one method statement into an instruction.

    Args:
        text: The statement, with or without its trailing period

    Returns:
        The instruction for the first matching statement form

    Raises:
        ValueError: If no statement form matches, or a matching form is
            used inconsistently (e.g. 'Refrigerate for 2 hour')
    """
    statement = normalize_statement(text)
    for pattern, factory in STATEMENTS:
        match = pattern.fullmatch(statement)
        if match:
            instruction = factory(match.groupdict())
            _LOGGER.debug("Parsed %r as %s", statement, type(instruction).__name__)
            return instruction
    raise ValueError(f"Unrecognized instruction: {statement!r}")


def parse_serves(text: str) -> PrintStacks | None:
    """Parse a 'Serves N.' statement, or return None if it is not one."""
    match = SERVES.fullmatch(normalize_statement(text))
    if not match:
        return None
    dishes = int(match.group("dishes"))
    if dishes < 1:
        raise ValueError("A recipe serves at least 1")
    return PrintStacks(dishes=dishes)
