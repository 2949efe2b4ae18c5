"""Normalized webhook event handed to the robot."""
from dataclasses import dataclass, field
from enum import Enum

STATE_OPEN = "open"
STATE_CLOSED = "closed"


class EventKind(str, Enum):
    """The sub-events the robot reacts to."""

    PR_OPENED = "pr_opened"
    PR_SOURCE_UPDATED = "pr_source_updated"
    ISSUE_COMMENT = "issue_comment"
    PR_COMMENT = "pr_comment"


@dataclass(frozen=True)
class Event:
    """One webhook delivery, reduced to what the handlers need."""

    kind: EventKind
    org: str
    repo: str
    number: int
    actor: str
    author: str
    state: str = STATE_OPEN
    comment: str = ""
    labels: tuple[str, ...] = field(default=())
    action: str = ""

    @property
    def is_pull_request(self) -> bool:
        return self.kind in (EventKind.PR_OPENED, EventKind.PR_SOURCE_UPDATED, EventKind.PR_COMMENT)

    @property
    def full_name(self) -> str:
        """Target in ``org/repo#number`` form, for logs."""
        return f"{self.org}/{self.repo}#{self.number}"
