"""Utility modules for shared functionality."""

from .github import split_repository_reference
from .labels import extract_label_names
from .retry import retry_on_rate_limit

__all__ = [
    "extract_label_names",
    "retry_on_rate_limit",
    "split_repository_reference",
]
