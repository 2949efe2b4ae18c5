# labelbot/services/squash.py
"""Decide whether a pull request should carry the needs-squash label."""

from typing import Iterable

from labelbot.models.policy import SquashConfig
from labelbot.services.labels import LabelDiff


def evaluate_squash(
    commit_count: int, labels: Iterable[str], squash: SquashConfig, squash_label: str
) -> LabelDiff:
    """
    Compare the commit count with the threshold.

    Args:
        commit_count: Number of commits on the pull request
        labels: Labels currently on the pull request
        squash: Squash settings of the repository policy
        squash_label: Name of the needs-squash label

    Returns:
        LabelDiff adding or removing the squash label, empty if nothing changes
    """
    if squash.unable_checking_squash:
        return LabelDiff()

    has_label = squash_label in set(labels)
    if commit_count > squash.commits_threshold and not has_label:
        return LabelDiff(to_add=[squash_label])
    if commit_count <= squash.commits_threshold and has_label:
        return LabelDiff(to_remove=[squash_label])
    return LabelDiff()
