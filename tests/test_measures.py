"""Tests for measure classification and ingredient lines."""
from __future__ import annotations

import pytest

from recipe_chef.const import DRY_MEASURES, EITHER_MEASURES, LIQUID_MEASURES, MEASURE_TYPES
from recipe_chef.exceptions import ChefParseError
from recipe_chef.measures import classify_measure, parse_ingredient
from recipe_chef.models import IngredientKind

UNIT_TABLE = (
    [(measure, IngredientKind.DRY) for measure in DRY_MEASURES]
    + [(measure, IngredientKind.LIQUID) for measure in LIQUID_MEASURES]
    + [(measure, IngredientKind.EITHER) for measure in EITHER_MEASURES]
)


@pytest.mark.parametrize("measure,kind", UNIT_TABLE)
def test_measure_kind_follows_unit_table(measure, kind):
    assert classify_measure(measure) is kind
    ingredient = parse_ingredient(f"5 {measure} stock")
    assert ingredient.kind is kind
    assert ingredient.measure == measure
    assert ingredient.name == "stock"
    assert ingredient.initial_value == 5


@pytest.mark.parametrize("measure_type", MEASURE_TYPES)
@pytest.mark.parametrize("measure,_kind", UNIT_TABLE)
def test_heaped_and_level_force_dry(measure_type, measure, _kind):
    assert classify_measure(measure, measure_type) is IngredientKind.DRY
    ingredient = parse_ingredient(f"2 {measure_type} {measure} cocoa")
    assert ingredient.kind is IngredientKind.DRY
    assert ingredient.measure == f"{measure_type} {measure}"
    assert ingredient.name == "cocoa"


def test_no_measure_is_either():
    assert classify_measure(None) is IngredientKind.EITHER
    ingredient = parse_ingredient("3 eggs")
    assert ingredient.kind is IngredientKind.EITHER
    assert ingredient.initial_value == 3
    assert ingredient.name == "eggs"


def test_name_only():
    ingredient = parse_ingredient("flour")
    assert ingredient.initial_value is None
    assert ingredient.measure is None
    assert ingredient.name == "flour"


def test_measure_without_quantity():
    ingredient = parse_ingredient("g brown sugar")
    assert ingredient.initial_value is None
    assert ingredient.kind is IngredientKind.DRY
    assert ingredient.name == "brown sugar"


@pytest.mark.parametrize("text,name", [
    ("2 lemons", "lemons"),
    ("4 glasses water", "glasses water"),
    ("1 cupcake", "cupcake"),
])
def test_measure_must_be_a_whole_word(text, name):
    ingredient = parse_ingredient(text)
    assert ingredient.name == name
    assert ingredient.kind is IngredientKind.EITHER


def test_longest_measure_wins():
    ingredient = parse_ingredient("2 pinches salt")
    assert ingredient.measure == "pinches"
    assert ingredient.name == "salt"


def test_unrecognized_measure_after_heaped():
    with pytest.raises(ChefParseError) as excinfo:
        parse_ingredient("2 heaped oz butter", line=7)
    assert excinfo.value.line == 7
    assert "oz" in str(excinfo.value)


def test_unrecognized_measure():
    with pytest.raises(ValueError):
        classify_measure("oz")
