# labelbot/services/labels.py
"""Label set arithmetic shared by the issue and pull request handlers."""

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class LabelDiff:
    """Label operations that actually change the target."""

    to_add: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.to_add or self.to_remove)


def _unique(labels: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for label in labels:
        if label not in seen:
            seen.add(label)
            result.append(label)
    return result


def compute_label_diff(
    current: Iterable[str], to_add: Iterable[str], to_remove: Iterable[str]
) -> LabelDiff:
    """
    Compute the minimal label changes for a request.

    Args:
        current: Labels currently on the issue or pull request
        to_add: Requested labels to add
        to_remove: Requested labels to remove

    Returns:
        LabelDiff with to_add - current and to_remove & current, request order kept
    """
    current_set = set(current)
    return LabelDiff(
        to_add=[label for label in _unique(to_add) if label not in current_set],
        to_remove=[label for label in _unique(to_remove) if label in current_set],
    )


def find_missing_labels(requested: Iterable[str], repo_labels: Iterable[str]) -> list[str]:
    """Return the requested labels that do not exist in the repository."""
    existing = {label.lower() for label in repo_labels}
    return [label for label in _unique(requested) if label.lower() not in existing]
