"""Conventional-commit parsing and classification."""

from .classifier import classify
from .parser import CONVENTIONAL_PATTERN, parse_commit

__all__ = ["CONVENTIONAL_PATTERN", "classify", "parse_commit"]
