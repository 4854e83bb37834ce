"""
Measure classification for recipe ingredients.

An ingredient's measure decides whether it is dry, liquid or either.
This module also parses single ingredient declaration lines such as
``72 g sugar`` or ``2 heaped cups flour``.
"""
from __future__ import annotations

import logging
import re

from .const import DRY_MEASURES, EITHER_MEASURES, LIQUID_MEASURES, MEASURE_TYPES
from .exceptions import ChefParseError
from .models.recipe import Ingredient
from .models.value import IngredientKind

_LOGGER = logging.getLogger(__name__)

MEASURE_KINDS = {
    **{measure: IngredientKind.DRY for measure in DRY_MEASURES},
    **{measure: IngredientKind.LIQUID for measure in LIQUID_MEASURES},
    **{measure: IngredientKind.EITHER for measure in EITHER_MEASURES},
}

# Longest first so 'pinches' is not read as 'pinch' + 'es'
_MEASURES = "|".join(sorted(MEASURE_KINDS, key=len, reverse=True))

_INGREDIENT_PATTERN = re.compile(
    rf"^(?:(?P<value>-?\d+)\s+)?"
    rf"(?:(?P<type>{'|'.join(MEASURE_TYPES)})\s+(?P<typed>\S+)\s+"
    rf"|(?P<measure>{_MEASURES})\s+)?"
    rf"(?P<name>\S.*?)\s*$"
)


def classify_measure(measure: str | None, measure_type: str | None = None) -> IngredientKind:
    """Classify a measure as dry, liquid or either.

    Args:
        measure: The measure (e.g., 'g', 'dashes', 'cups'), or None
        measure_type: Optional 'heaped' or 'level' prefix

    Returns:
        The ingredient kind for the measure

    Raises:
        ValueError: If the measure is not a recognized one

    Examples:
        >>> classify_measure('kg')
        <IngredientKind.DRY: 'dry'>
        >>> classify_measure('cup', 'heaped')
        <IngredientKind.DRY: 'dry'>
        >>> classify_measure(None)
        <IngredientKind.EITHER: 'either'>
    """
    if measure is None:
        if measure_type is not None:
            raise ValueError(f"'{measure_type}' must be followed by a measure")
        return IngredientKind.EITHER

    if measure not in MEASURE_KINDS:
        raise ValueError(f"Unrecognized measure: {measure}")

    if measure_type is not None:
        if measure_type not in MEASURE_TYPES:
            raise ValueError(f"Unrecognized measure type: {measure_type}")
        return IngredientKind.DRY

    return MEASURE_KINDS[measure]


def parse_ingredient(text: str, line: int | None = None) -> Ingredient:
    """Parse one ingredient declaration line.

    Supported shapes:
    - Name only: "eggs"
    - Quantity and name: "3 eggs"
    - Measure and name: "g flour"
    - Full: "72 g sugar", "2 heaped cups flour"

    Args:
        text: The ingredient line
        line: Source line number, for error reporting

    Returns:
        Structured Ingredient object

    Raises:
        ChefParseError: If the line is empty or names an unknown measure
    """
    match = _INGREDIENT_PATTERN.match(text.strip())
    if not match:
        raise ChefParseError("Expected an ingredient declaration", line=line, text=text)

    value = match.group("value")
    measure_type = match.group("type")
    measure = match.group("typed") if measure_type else match.group("measure")

    try:
        kind = classify_measure(measure, measure_type)
    except ValueError as e:
        raise ChefParseError(str(e), line=line, text=text) from e

    if measure_type:
        written = f"{measure_type} {measure}"
    else:
        written = measure

    ingredient = Ingredient(
        name=match.group("name"),
        initial_value=int(value) if value is not None else None,
        kind=kind,
        measure=written,
    )
    _LOGGER.debug("Parsed ingredient %r as %s", ingredient.name, kind.value)
    return ingredient
