"""Parsers package."""
from .base_parser import BaseRecipeParser
from .chef_parser import ChefParser
from .method_grammar import parse_statement

__all__ = ["BaseRecipeParser", "ChefParser", "parse_statement"]
