"""Constants for the Recipe Chef interpreter."""

PACKAGE = "recipe_chef"

# Environment variable names (a .env file may supply them)
ENV_LOG_LEVEL = "RECIPE_CHEF_LOG_LEVEL"
ENV_MAX_CALL_DEPTH = "RECIPE_CHEF_MAX_CALL_DEPTH"
ENV_SEED = "RECIPE_CHEF_SEED"
ENV_TIMEOUT = "RECIPE_CHEF_TIMEOUT"
ENV_MAX_SOURCE_BYTES = "RECIPE_CHEF_MAX_SOURCE_BYTES"

# Default values
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_CALL_DEPTH = 200
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 3
DEFAULT_MAX_SOURCE_BYTES = 1 * 1024 * 1024  # 1MB

# Default bowl/dish number when a statement names none
DEFAULT_BOWL = 1

# Measures, grouped by how they make an ingredient behave
DRY_MEASURES = ("g", "kg", "pinch", "pinches")
LIQUID_MEASURES = ("ml", "l", "dash", "dashes")
EITHER_MEASURES = (
    "cup",
    "cups",
    "teaspoon",
    "teaspoons",
    "tablespoon",
    "tablespoons",
)
MEASURE_TYPES = ("heaped", "level")

# Section headers
HEADER_INGREDIENTS = "Ingredients."
HEADER_METHOD = "Method."
