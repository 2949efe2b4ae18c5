# labelbot/services/commands.py
"""Slash-command parsing for label, close and reopen commands."""

import re

ADD_LABEL_PATTERN = re.compile(r"^/(kind|priority|sig|good)[\t ]+([A-Za-z0-9_-]+)$")
REMOVE_LABEL_PATTERN = re.compile(r"^/remove-(kind|priority|sig|good)[\t ]+([A-Za-z0-9_-]+)$")

REOPEN_PATTERN = re.compile(r"^/reopen\s*$", re.IGNORECASE | re.MULTILINE)
CLOSE_PATTERN = re.compile(r"^/close\s*$", re.IGNORECASE | re.MULTILINE)

# "good" labels are written without a separator, e.g. /good first -> goodfirst
_NO_SEPARATOR_CATEGORIES = frozenset({"good"})


def label_from_line(line: str, pattern: re.Pattern[str]) -> str:
    """
    Match one comment line against a label command pattern.

    Args:
        line: A single line of the comment
        pattern: ADD_LABEL_PATTERN or REMOVE_LABEL_PATTERN

    Returns:
        The canonical label name, or an empty string if the line does not match
    """
    match = pattern.match(line.strip())
    if not match:
        return ""

    category, value = match.groups()
    if category in _NO_SEPARATOR_CATEGORIES:
        return category + value
    return f"{category}/{value}"


def parse_label_commands(comment: str) -> tuple[list[str], list[str]]:
    """
    Extract the labels to add and to remove from a comment.

    Args:
        comment: Raw comment body

    Returns:
        Tuple of (to_add, to_remove), each in order of appearance
    """
    to_add: list[str] = []
    to_remove: list[str] = []
    for line in comment.split("\n"):
        label = label_from_line(line, ADD_LABEL_PATTERN)
        if label:
            to_add.append(label)
            continue
        label = label_from_line(line, REMOVE_LABEL_PATTERN)
        if label:
            to_remove.append(label)
    return to_add, to_remove


def check_conflict(to_add: list[str], to_remove: list[str]) -> tuple[bool, str]:
    """
    Find labels requested to be both added and removed.

    Names are compared case-insensitively.

    Returns:
        Tuple of (has_conflict, sorted conflicting names joined with ", ")
    """
    if not to_add or not to_remove:
        return False, ""

    conflicts = {label.lower() for label in to_add} & {label.lower() for label in to_remove}
    if not conflicts:
        return False, ""
    return True, ", ".join(sorted(conflicts))


def is_reopen_command(comment: str) -> bool:
    return bool(REOPEN_PATTERN.search(comment))


def is_close_command(comment: str) -> bool:
    return bool(CLOSE_PATTERN.search(comment))
