# labelbot/models/policy.py
"""Repository policies and the configuration snapshot they live in."""
import re
from dataclasses import dataclass, field
from typing import Any

from config.messages import DEFAULT_MESSAGES

DEFAULT_SQUASH_COMMIT_LABEL = "stat/needs-squash"
DEFAULT_USER_MARK_FORMAT = "@{login}"
DEFAULT_LABEL_COLOR = "ededed"
DEFAULT_COMMITS_THRESHOLD = 1


class ConfigError(ValueError):
    """Raised when the policy file is missing or invalid."""


@dataclass(frozen=True)
class RepoFilter:
    """Organizations and repositories a policy applies to."""

    repos: tuple[str, ...] = ()
    excluded_repos: tuple[str, ...] = ()

    def can_apply(self, org: str, org_repo: str) -> bool:
        """Check whether the org or org/repo is included and not excluded."""
        if not org or not self.repos:
            return False
        if org not in self.repos and org_repo not in self.repos:
            return False
        return org not in self.excluded_repos and org_repo not in self.excluded_repos

    def validate(self) -> list[str]:
        errors = []
        if not self.repos:
            errors.append("the repositories configuration can not be empty")
        elif set(self.repos) & set(self.excluded_repos):
            errors.append("some org or org/repo exists in both repos and excluded_repos")
        return errors


@dataclass(frozen=True)
class SquashConfig:
    """Settings for the needs-squash label check."""

    unable_checking_squash: bool = False
    commits_threshold: int = DEFAULT_COMMITS_THRESHOLD


@dataclass(frozen=True)
class RepoPolicy:
    """Ruleset for one group of repositories."""

    repo_filter: RepoFilter
    clear_labels: tuple[str, ...] = ()
    clear_labels_by_regexp: str = ""
    allow_creating_labels_by_collaborator: bool = False
    need_issue_has_link_pull_requests: bool = False
    squash: SquashConfig = field(default_factory=SquashConfig)
    clear_labels_regexp: re.Pattern[str] | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RepoPolicy":
        """
        Build a policy from one entry of ``config_items``.

        Args:
            data: Mapping parsed from the YAML file

        Returns:
            RepoPolicy with the regexp compiled and the threshold defaulted

        Raises:
            ConfigError: If a field has the wrong type or the regexp does not compile
        """
        pattern = data.get("clear_labels_by_regexp") or ""
        if not isinstance(pattern, str):
            raise ConfigError("clear_labels_by_regexp must be a string")
        compiled = None
        if pattern:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise ConfigError(f"invalid clear_labels_by_regexp {pattern!r}: {e}") from e

        threshold = data.get("commits_threshold")
        if threshold is None:
            threshold = 0
        if not isinstance(threshold, int) or isinstance(threshold, bool):
            raise ConfigError(f"commits_threshold must be an integer, got {threshold!r}")
        if threshold < 0:
            raise ConfigError("commits_threshold can not be negative")
        # Zero means "not set", never "always needs squash"
        threshold = threshold or DEFAULT_COMMITS_THRESHOLD

        return cls(
            repo_filter=RepoFilter(
                repos=_string_list(data, "repos"),
                excluded_repos=_string_list(data, "excluded_repos"),
            ),
            clear_labels=_string_list(data, "clear_labels"),
            clear_labels_by_regexp=pattern,
            allow_creating_labels_by_collaborator=_flag(data, "allow_creating_labels_by_collaborator"),
            need_issue_has_link_pull_requests=_flag(data, "need_issue_has_link_pull_requests"),
            squash=SquashConfig(
                unable_checking_squash=_flag(data, "unable_checking_squash"),
                commits_threshold=threshold,
            ),
            clear_labels_regexp=compiled,
        )

    def validate(self) -> list[str]:
        return self.repo_filter.validate()


@dataclass(frozen=True)
class Configuration:
    """Immutable snapshot of the whole policy file."""

    config_items: tuple[RepoPolicy, ...] = ()
    squash_commit_label: str = DEFAULT_SQUASH_COMMIT_LABEL
    user_mark_format: str = DEFAULT_USER_MARK_FORMAT
    new_label_color: str = DEFAULT_LABEL_COLOR
    messages: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Configuration":
        """Parse the top-level YAML mapping, filling in defaults."""
        items = data.get("config_items") or []
        if not isinstance(items, list):
            raise ConfigError("config_items must be a list")

        messages = dict(DEFAULT_MESSAGES)
        overrides = data.get("messages") or {}
        if not isinstance(overrides, dict):
            raise ConfigError("messages must be a mapping")
        messages.update({str(k): "" if v is None else str(v) for k, v in overrides.items()})

        policies = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ConfigError(f"config_items[{index}] must be a mapping, got {item!r}")
            policies.append(RepoPolicy.from_dict(item))

        return cls(
            config_items=tuple(policies),
            squash_commit_label=str(data.get("squash_commit_label", DEFAULT_SQUASH_COMMIT_LABEL) or ""),
            user_mark_format=str(data.get("user_mark_format", DEFAULT_USER_MARK_FORMAT) or ""),
            new_label_color=str(data.get("new_label_color") or DEFAULT_LABEL_COLOR),
            messages=messages,
        )

    def validate(self) -> list[str]:
        """Validate the snapshot. Returns list of errors."""
        errors: list[str] = []
        for item in self.config_items:
            errors.extend(item.validate())

        missing = []
        if not self.squash_commit_label.strip():
            missing.append("squash_commit_label")
        if not self.user_mark_format.strip():
            missing.append("user_mark_format")
        for key in DEFAULT_MESSAGES:
            if not self.messages.get(key, "").strip():
                missing.append(f"messages.{key}")
        if missing:
            errors.append("missing the follow config: " + ", ".join(missing))
        return errors

    def get_repo_policy(self, org: str, repo: str) -> RepoPolicy | None:
        """Return the first policy whose filter accepts org/repo, or None."""
        for item in self.config_items:
            if item.repo_filter.can_apply(org, f"{org}/{repo}"):
                return item
        return None

    def mark_user(self, login: str) -> str:
        """Render a login with ``user_mark_format``, e.g. ``@octocat``."""
        return self.user_mark_format.replace("{login}", login)

    def render(self, key: str, **values: str) -> str:
        """
        Fill a message template.

        Args:
            key: Template name, one of DEFAULT_MESSAGES
            **values: Placeholder values (commenter, action, labels)

        Returns:
            The message with known placeholders substituted
        """
        return self.messages[key].format_map(_KeepMissing(values))


def _string_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return tuple(value)


def _flag(data: dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


class _KeepMissing(dict[str, str]):
    """format_map helper leaving unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"
