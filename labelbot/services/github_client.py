# labelbot/services/github_client.py
"""GitHub client exposing the calls the robot needs as success flags."""

import logging
from typing import Callable, TypeVar

from github import Github, GithubException
from github.Issue import Issue
from github.PullRequest import PullRequest
from github.Repository import Repository

logger = logging.getLogger(__name__)

T = TypeVar("T")

WRITE_PERMISSIONS = frozenset({"admin", "maintain", "write"})


class GitHubClient:
    """
    Thin wrapper over PyGithub.

    Every method makes a single best-effort attempt. API errors are logged and
    reported through the returned success flag instead of being raised.
    """

    def __init__(self, token: str, base_url: str | None = None) -> None:
        """
        Initialize GitHub client with a token.

        Args:
            token: Personal access or installation token
            base_url: API root for GitHub Enterprise, defaults to api.github.com

        Raises:
            ValueError: If no token is provided
        """
        if not token:
            raise ValueError("A GitHub token must be provided")

        if base_url:
            self._github = Github(token, base_url=base_url)
        else:
            self._github = Github(token)

    def _repo(self, org: str, repo: str) -> Repository:
        return self._github.get_repo(f"{org}/{repo}", lazy=True)

    def _issue(self, org: str, repo: str, number: int) -> Issue:
        return self._repo(org, repo).get_issue(number)

    def _pull(self, org: str, repo: str, number: int) -> PullRequest:
        return self._repo(org, repo).get_pull(number)

    def _call(self, description: str, fn: Callable[[], T], default: T) -> tuple[T, bool]:
        try:
            return fn(), True
        except (GithubException, OSError) as e:
            logger.error(f"GitHub request failed: {description}: {e}", exc_info=True)
            return default, False

    # Reads

    def check_permission(self, org: str, repo: str, username: str) -> tuple[bool, bool]:
        """
        Check whether a user can write to the repository.

        Returns:
            Tuple of (has_permission, request_succeeded)
        """
        permission, success = self._call(
            f"permission of {username} on {org}/{repo}",
            lambda: self._repo(org, repo).get_collaborator_permission(username),
            "none",
        )
        return permission in WRITE_PERMISSIONS, success

    def get_pull_request_commit_count(self, org: str, repo: str, number: int) -> tuple[int, bool]:
        return self._call(
            f"commits of {org}/{repo}#{number}",
            lambda: self._pull(org, repo, number).commits,
            0,
        )

    def get_pull_request_labels(self, org: str, repo: str, number: int) -> tuple[list[str], bool]:
        return self._call(
            f"labels of pull request {org}/{repo}#{number}",
            lambda: [label.name for label in self._pull(org, repo, number).get_labels()],
            [],
        )

    def get_issue_labels(self, org: str, repo: str, number: int) -> tuple[list[str], bool]:
        return self._call(
            f"labels of issue {org}/{repo}#{number}",
            lambda: [label.name for label in self._issue(org, repo, number).get_labels()],
            [],
        )

    def get_repo_labels(self, org: str, repo: str) -> tuple[list[str], bool]:
        labels, success = self._call(
            f"labels of {org}/{repo}",
            lambda: [label.name for label in self._repo(org, repo).get_labels()],
            [],
        )
        if success:
            logger.info(f"Fetched {len(labels)} labels from {org}/{repo}")
        return labels, success

    def get_issue_linked_pr_count(self, org: str, repo: str, number: int) -> tuple[int, bool]:
        """
        Count the pull requests linked to an issue.

        Pull requests that reference the issue show up in its timeline as
        ``cross-referenced`` events; manual links as ``connected`` and
        ``disconnected`` events.

        This is an approximation of "linked": the REST timeline does not tell
        closing references apart from plain mentions, so any pull request
        that mentions the issue counts.

        Returns:
            Tuple of (linked_count, request_succeeded)
        """

        def count() -> int:
            referenced: set[str] = set()
            connected = 0
            for event in self._issue(org, repo, number).get_timeline():
                if event.event == "connected":
                    connected += 1
                elif event.event == "disconnected":
                    connected -= 1
                elif event.event == "cross-referenced" and event.source and event.source.issue:
                    source = event.source.issue
                    if source.pull_request is not None:
                        referenced.add(source.html_url)
            return len(referenced) + max(connected, 0)

        return self._call(f"linked pull requests of {org}/{repo}#{number}", count, 0)

    # Writes

    def add_issue_labels(self, org: str, repo: str, number: int, labels: list[str]) -> bool:
        _, success = self._call(
            f"add {labels} to issue {org}/{repo}#{number}",
            lambda: self._issue(org, repo, number).add_to_labels(*labels),
            None,
        )
        return success

    def _remove_each(
        self, description: str, fetch: Callable[[], Issue | PullRequest], labels: list[str]
    ) -> list[str]:
        """Remove labels one call at a time. Returns the labels that could not be removed."""
        target, success = self._call(description, fetch, None)
        if not success or target is None:
            return list(labels)

        failed = []
        for label in labels:
            _, removed = self._call(
                f"remove {label} from {description}", lambda: target.remove_from_labels(label), None
            )
            if not removed:
                failed.append(label)
        return failed

    def remove_issue_labels(self, org: str, repo: str, number: int, labels: list[str]) -> list[str]:
        return self._remove_each(
            f"issue {org}/{repo}#{number}", lambda: self._issue(org, repo, number), labels
        )

    def add_pr_labels(self, org: str, repo: str, number: int, labels: list[str]) -> bool:
        _, success = self._call(
            f"add {labels} to pull request {org}/{repo}#{number}",
            lambda: self._pull(org, repo, number).add_to_labels(*labels),
            None,
        )
        return success

    def remove_pr_labels(self, org: str, repo: str, number: int, labels: list[str]) -> list[str]:
        return self._remove_each(
            f"pull request {org}/{repo}#{number}", lambda: self._pull(org, repo, number), labels
        )

    def create_repo_label(self, org: str, repo: str, name: str, color: str) -> bool:
        _, success = self._call(
            f"create label {name} in {org}/{repo}",
            lambda: self._repo(org, repo).create_label(name, color),
            None,
        )
        return success

    def update_issue_state(self, org: str, repo: str, number: int, state: str) -> bool:
        _, success = self._call(
            f"set issue {org}/{repo}#{number} {state}",
            lambda: self._issue(org, repo, number).edit(state=state),
            None,
        )
        return success

    def update_pr_state(self, org: str, repo: str, number: int, state: str) -> bool:
        _, success = self._call(
            f"set pull request {org}/{repo}#{number} {state}",
            lambda: self._pull(org, repo, number).edit(state=state),
            None,
        )
        return success

    def create_issue_comment(self, org: str, repo: str, number: int, body: str) -> bool:
        _, success = self._call(
            f"comment on issue {org}/{repo}#{number}",
            lambda: self._issue(org, repo, number).create_comment(body),
            None,
        )
        return success

    def create_pr_comment(self, org: str, repo: str, number: int, body: str) -> bool:
        _, success = self._call(
            f"comment on pull request {org}/{repo}#{number}",
            lambda: self._pull(org, repo, number).create_issue_comment(body),
            None,
        )
        return success
