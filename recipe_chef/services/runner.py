"""
Recipe program runner.

Walks a recipe's instructions against a Frame, one at a time. 'Serve
with' runs another recipe in a fresh frame that starts with a copy of
the caller's mixing bowls; when it finishes, its bowls are copied back
over the caller's. Output is written to the sink as each value is
served.
"""
from __future__ import annotations

import logging
import random
import sys
from typing import Any, Callable, Iterable, TextIO

from ..config import RunnerSettings
from ..exceptions import ChefRunError
from ..models.instructions import (
    Add,
    AddDry,
    Arithmetic,
    Break,
    Call,
    ClearStack,
    CopyStack,
    Divide,
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
from ..models.recipe import Program
from ..models.value import Value
from .kitchen import Frame

_LOGGER = logging.getLogger(__name__)

# Returned by a handler to end the current recipe
_FINISHED = object()


class ChefRunner:
    """Runs a built program against an input source and an output sink."""

    def __init__(
        self,
        program: Program,
        inputs: Iterable[Any] = (),
        output: TextIO | None = None,
        settings: RunnerSettings | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            program: The program to run
            inputs: Values consumed in order by 'Take ... from refrigerator'
            output: Sink for served output (defaults to stdout)
            settings: Run limits; defaults apply when omitted
        """
        self.program = program
        self.settings = settings or RunnerSettings()
        self._inputs = iter(inputs)
        self._output = output if output is not None else sys.stdout
        self._random = random.Random(self.settings.seed)
        self._handlers: dict[type, Callable[[Frame, Any, int], Any]] = {
            Read: self._read,
            Push: self._push,
            Pop: self._pop,
            Add: self._arithmetic,
            Subtract: self._arithmetic,
            Multiply: self._arithmetic,
            Divide: self._arithmetic,
            AddDry: self._add_dry,
            Liquefy: self._liquefy,
            LiquefyContents: self._liquefy_contents,
            Stir: self._stir,
            StirIngredient: self._stir_ingredient,
            Mix: self._mix,
            ClearStack: self._clear,
            CopyStack: self._pour,
            LoopStart: self._loop_start,
            LoopEnd: self._loop_end,
            Break: self._break,
            Call: self._call,
            Return: self._return,
            PrintStacks: self._print_stacks,
        }

    def run(self) -> Frame:
        """Run the main recipe to completion.

        Returns:
            The main recipe's final frame

        Raises:
            ChefRunError: If a fatal condition stops the run; output
                already written stays written
        """
        recipe = self.program.main_recipe
        _LOGGER.info("Cooking '%s'", recipe.name)
        frame = Frame(recipe, is_main=True)
        self.cook(frame, depth=0)
        _LOGGER.info("Finished cooking '%s'", recipe.name)
        return frame

    def cook(self, frame: Frame, depth: int) -> None:
        """Execute a frame's recipe until it runs out of steps or returns."""
        instructions = frame.recipe.instructions
        while frame.position < len(instructions):
            instruction = instructions[frame.position]
            try:
                target = self._handlers[type(instruction)](frame, instruction, depth)
            except ChefRunError as e:
                if e.recipe is not None:
                    raise
                raise ChefRunError(e.reason, recipe=frame.recipe.name, step=frame.position) from e
            if target is _FINISHED:
                return
            frame.position = frame.position + 1 if target is None else target

    def _read(self, frame: Frame, instruction: Read, depth: int) -> None:
        ingredient = frame.ingredient(instruction.ingredient)
        try:
            raw = next(self._inputs)
        except StopIteration:
            raise ChefRunError("Input is exhausted") from None
        try:
            number = int(raw)
        except (TypeError, ValueError):
            raise ChefRunError(f"Input {raw!r} is not a whole number") from None
        frame.set_value(ingredient.name, Value.of(number, ingredient.kind))

    def _push(self, frame: Frame, instruction: Push, depth: int) -> None:
        frame.bowl(instruction.bowl).append(frame.value(instruction.ingredient))

    def _pop(self, frame: Frame, instruction: Pop, depth: int) -> None:
        frame.ingredient(instruction.ingredient)
        frame.set_value(instruction.ingredient, frame.pop(instruction.bowl))

    def _arithmetic(self, frame: Frame, instruction: Arithmetic, depth: int) -> None:
        operand = frame.value(instruction.ingredient)
        top = frame.peek(instruction.bowl)
        try:
            number = instruction.apply(top.number, operand.number)
        except ZeroDivisionError:
            raise ChefRunError(f"Cannot divide by '{instruction.ingredient}': it is 0") from None
        frame.bowls[instruction.bowl][-1] = operand.with_number(number)

    def _add_dry(self, frame: Frame, instruction: AddDry, depth: int) -> None:
        frame.bowl(instruction.bowl).append(Value(number=frame.dry_total()))

    def _liquefy(self, frame: Frame, instruction: Liquefy, depth: int) -> None:
        frame.value(instruction.ingredient).liquefy()

    def _liquefy_contents(self, frame: Frame, instruction: LiquefyContents, depth: int) -> None:
        for value in frame.bowl(instruction.bowl):
            value.liquefy()

    def _stir(self, frame: Frame, instruction: Stir, depth: int) -> None:
        self._stir_bowl(frame, instruction.bowl, instruction.minutes)

    def _stir_ingredient(self, frame: Frame, instruction: StirIngredient, depth: int) -> None:
        minutes = frame.value(instruction.ingredient).number
        self._stir_bowl(frame, instruction.bowl, minutes)

    @staticmethod
    def _stir_bowl(frame: Frame, number: int, minutes: int) -> None:
        top = frame.pop(number)
        bowl = frame.bowls[number]
        bowl.insert(max(len(bowl) - max(minutes, 0), 0), top)

    def _mix(self, frame: Frame, instruction: Mix, depth: int) -> None:
        self._random.shuffle(frame.bowl(instruction.bowl))

    def _clear(self, frame: Frame, instruction: ClearStack, depth: int) -> None:
        frame.bowl(instruction.bowl).clear()

    def _pour(self, frame: Frame, instruction: CopyStack, depth: int) -> None:
        frame.dish(instruction.dish).extend(frame.bowl(instruction.bowl))

    def _loop_start(self, frame: Frame, instruction: LoopStart, depth: int) -> int | None:
        if frame.value(instruction.ingredient).number == 0:
            return instruction.end + 1
        return None

    def _loop_end(self, frame: Frame, instruction: LoopEnd, depth: int) -> int:
        if instruction.ingredient is not None:
            value = frame.value(instruction.ingredient)
            frame.set_value(instruction.ingredient, value.with_number(value.number - 1))
        return instruction.start

    def _break(self, frame: Frame, instruction: Break, depth: int) -> int:
        return instruction.end + 1

    def _call(self, frame: Frame, instruction: Call, depth: int) -> None:
        recipe = self.program.lookup(instruction.recipe)
        if recipe is None:
            raise ChefRunError(f"Recipe '{instruction.recipe}' is not in this program")
        if depth + 1 > self.settings.max_call_depth:
            raise ChefRunError(
                f"'Serve with' calls nested deeper than {self.settings.max_call_depth}")

        _LOGGER.debug("Serving '%s' with '%s' (depth %d)", frame.recipe.name, recipe.name, depth + 1)
        try:
            callee = Frame(recipe, bowls=frame.bowls)
            self.cook(callee, depth + 1)
        except RecursionError:
            raise ChefRunError(
                f"'Serve with' calls nested too deeply at depth {depth + 1}") from None
        frame.take_back(callee)

    def _return(self, frame: Frame, instruction: Return, depth: int) -> object:
        if frame.is_main and instruction.hours is not None:
            self.serve(frame, instruction.hours)
        return _FINISHED

    def _print_stacks(self, frame: Frame, instruction: PrintStacks, depth: int) -> None:
        if frame.is_main:
            self.serve(frame, instruction.dishes)

    def serve(self, frame: Frame, dishes: int) -> None:
        """Empty baking dishes 1..dishes into the output, top first.

        A line break separates the output of successive dishes.
        """
        _LOGGER.debug("Serving %d baking dish(es)", dishes)
        for number in range(1, dishes + 1):
            if number > 1:
                self._output.write("\n")
            dish = frame.dish(number)
            while dish:
                value = dish.pop()
                try:
                    text = value.serve()
                except (ValueError, OverflowError):
                    raise ChefRunError(
                        f"Cannot serve {value.number} as a character") from None
                self._output.write(text)


def run_program(program: Program, inputs: Iterable[Any] = (), output: TextIO | None = None,
                settings: RunnerSettings | None = None) -> Frame:
    """Run a program; see ChefRunner.run."""
    return ChefRunner(program, inputs=inputs, output=output, settings=settings).run()
