# labelbot/services/clearer.py
"""Labels to strip from a pull request when its source branch changes."""

import re
from typing import Iterable


def labels_to_clear(
    pr_labels: Iterable[str],
    clear_labels: Iterable[str],
    clear_regexp: re.Pattern[str] | None = None,
) -> list[str]:
    """
    Select the current labels that a source update invalidates.

    Args:
        pr_labels: Labels currently on the pull request
        clear_labels: Labels configured to be cleared explicitly
        clear_regexp: Optional pattern; matching current labels are cleared too

    Returns:
        Labels to remove, in the order they appear on the pull request
    """
    clear_set = set(clear_labels)
    result: list[str] = []
    for label in pr_labels:
        if label in result:
            continue
        if label in clear_set or (clear_regexp is not None and clear_regexp.search(label)):
            result.append(label)
    return result
