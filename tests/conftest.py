"""Shared recipe programs for the Recipe Chef tests."""
from __future__ import annotations

import io
import textwrap

import pytest

from recipe_chef.services.recipe_service import compile_program
from recipe_chef.services.runner import ChefRunner

HELLO_WORLD = textwrap.dedent("""\
    Hello World Souffle.

    This recipe prints the immortal words "Hello world!", in a basically brute force way.
    It also makes a lot of food for one person.

    Ingredients.
    72 g haricot beans
    101 eggs
    108 g lard
    111 cups oil
    32 zucchinis
    119 ml water
    114 g red salmon
    100 g dijon mustard
    33 potatoes

    Method.
    Put potatoes into the mixing bowl. Put dijon mustard into the mixing bowl.
    Put lard into the mixing bowl. Put red salmon into the mixing bowl.
    Put oil into the mixing bowl. Put water into the mixing bowl.
    Put zucchinis into the mixing bowl. Put oil into the mixing bowl.
    Put lard into the mixing bowl. Put lard into the mixing bowl.
    Put eggs into the mixing bowl. Put haricot beans into the mixing bowl.
    Liquefy contents of the mixing bowl.
    Pour contents of the mixing bowl into the baking dish.

    Serves 1.
""")


def make_recipe(title: str, ingredients: list[str], method: list[str],
                serves: int | None = None) -> str:
    """Render one recipe's text."""
    parts = [f"{title}.", ""]
    if ingredients:
        parts += ["Ingredients.", *ingredients, ""]
    parts += ["Method.", *method, ""]
    if serves is not None:
        parts += [f"Serves {serves}.", ""]
    return "\n".join(parts)


def make_program(*recipes: str) -> str:
    return "\n".join(recipes)


@pytest.fixture
def hello_world() -> str:
    return HELLO_WORLD


class Kitchen:
    """Runs program text and keeps the served output."""

    def __init__(self) -> None:
        self.output = io.StringIO()

    def run(self, text: str, inputs=(), settings=None):
        program = compile_program(text)
        return ChefRunner(program, inputs=inputs, output=self.output, settings=settings).run()

    @property
    def served(self) -> str:
        return self.output.getvalue()


@pytest.fixture
def kitchen() -> Kitchen:
    return Kitchen()
