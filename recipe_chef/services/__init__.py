"""Services package."""
from .kitchen import Frame
from .program_builder import build_program, closing_keyword, resolve_loops
from .recipe_service import compile_program, cook, cook_to_string
from .runner import ChefRunner, run_program

__all__ = [
    "ChefRunner",
    "Frame",
    "build_program",
    "closing_keyword",
    "compile_program",
    "cook",
    "cook_to_string",
    "resolve_loops",
    "run_program",
]
