# labelbot/robot.py
"""Routes normalized events to the registered handlers."""
import logging
from typing import Callable

from labelbot.handlers.comments import CommentHandler
from labelbot.handlers.pull_request import PullRequestHandler
from labelbot.models.event import Event, EventKind
from labelbot.models.policy import Configuration
from labelbot.services.github_client import GitHubClient

logger = logging.getLogger(__name__)

CATEGORY_PULL_REQUEST = "pull_request"
CATEGORY_ISSUE_COMMENT = "issue_comment"
CATEGORY_PULL_REQUEST_COMMENT = "pull_request_comment"

_CATEGORY_BY_KIND = {
    EventKind.PR_OPENED: CATEGORY_PULL_REQUEST,
    EventKind.PR_SOURCE_UPDATED: CATEGORY_PULL_REQUEST,
    EventKind.ISSUE_COMMENT: CATEGORY_ISSUE_COMMENT,
    EventKind.PR_COMMENT: CATEGORY_PULL_REQUEST_COMMENT,
}

EventHandler = Callable[[Event, Configuration], None]


class Robot:
    """Label and state automation bot for issues and pull requests."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client
        self.handlers: dict[str, EventHandler] = {}
        self.register_event_handlers()

    def register_event_handlers(self) -> None:
        pull_requests = PullRequestHandler(self.client)
        comments = CommentHandler(self.client)
        self.handlers[CATEGORY_PULL_REQUEST] = pull_requests.handle
        self.handlers[CATEGORY_ISSUE_COMMENT] = comments.handle
        self.handlers[CATEGORY_PULL_REQUEST_COMMENT] = comments.handle

    def dispatch(self, event: Event, config: Configuration) -> None:
        """
        Run the handler registered for the event's category.

        Any exception is logged and swallowed so one bad event never affects
        the others.

        Args:
            event: Normalized webhook event
            config: Configuration snapshot taken when the event arrived
        """
        category = _CATEGORY_BY_KIND[event.kind]
        handler = self.handlers.get(category)
        if handler is None:
            logger.debug(f"No handler registered for {category}")
            return

        logger.info(
            f"Handling {event.kind.value} ({event.action or 'no action'}) on {event.full_name} "
            f"by {event.actor}, labels: {list(event.labels)}"
        )
        try:
            handler(event, config)
        except Exception as e:
            logger.error(f"Error handling {event.kind.value} on {event.full_name}: {e}", exc_info=True)
