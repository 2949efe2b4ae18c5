# labelbot/handlers/base.py
"""Behaviour shared by the event handlers."""

import logging

from labelbot.models.event import Event
from labelbot.models.policy import Configuration, RepoPolicy
from labelbot.services.github_client import GitHubClient

logger = logging.getLogger(__name__)


class BaseHandler:
    """Base class giving handlers access to the client and target helpers."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def resolve_policy(self, event: Event, config: Configuration) -> RepoPolicy | None:
        """Find the policy for the event's repository, logging when there is none."""
        policy = config.get_repo_policy(event.org, event.repo)
        if policy is None:
            logger.warning(f"No config for this repo: {event.org}/{event.repo}, ignoring {event.kind.value}")
        return policy

    def comment(self, event: Event, body: str) -> bool:
        """Post a comment on the issue or pull request the event targets."""
        if event.is_pull_request:
            return self.client.create_pr_comment(event.org, event.repo, event.number, body)
        return self.client.create_issue_comment(event.org, event.repo, event.number, body)

    def get_labels(self, event: Event) -> tuple[list[str], bool]:
        if event.is_pull_request:
            return self.client.get_pull_request_labels(event.org, event.repo, event.number)
        return self.client.get_issue_labels(event.org, event.repo, event.number)

    def add_labels(self, event: Event, labels: list[str]) -> list[str]:
        """Add labels to the target. Returns the labels that could not be added."""
        if event.is_pull_request:
            success = self.client.add_pr_labels(event.org, event.repo, event.number, labels)
        else:
            success = self.client.add_issue_labels(event.org, event.repo, event.number, labels)
        return [] if success else list(labels)

    def remove_labels(self, event: Event, labels: list[str]) -> list[str]:
        """Remove labels from the target. Returns the labels that could not be removed."""
        if event.is_pull_request:
            return self.client.remove_pr_labels(event.org, event.repo, event.number, labels)
        return self.client.remove_issue_labels(event.org, event.repo, event.number, labels)

    def update_state(self, event: Event, state: str) -> bool:
        if event.is_pull_request:
            return self.client.update_pr_state(event.org, event.repo, event.number, state)
        return self.client.update_issue_state(event.org, event.repo, event.number, state)
