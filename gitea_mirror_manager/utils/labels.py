"""Contains utility functions for handling labels returned by the GitHub API."""

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class HasName(Protocol):
    """Protocol for objects that have a name attribute."""

    name: str


LabelType = str | dict[str, Any] | HasName

DEFAULT_LABEL_COLOR = "#ededed"
"""Color used for labels created on Gitea when GitHub did not provide one."""


def extract_label_names(labels: Sequence[LabelType]) -> set[str]:
    """Extract label names from a list of GitHub label objects, strings, or dicts."""
    names: set[str] = set()
    for label in labels:
        if isinstance(label, str):
            names.add(label)
        elif isinstance(label, dict) and label.get("name"):
            names.add(label["name"])
        elif isinstance(label, HasName) and label.name:
            names.add(label.name)
    return names
