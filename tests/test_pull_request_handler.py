# tests/test_pull_request_handler.py
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from labelbot.handlers.pull_request import PullRequestHandler
from labelbot.models.event import Event, EventKind
from labelbot.models.policy import Configuration
from labelbot.services.config_store import load_configuration

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def configuration() -> Configuration:
    return load_configuration(FIXTURES / "config.yaml")


@pytest.fixture
def client() -> MagicMock:
    mock_client = MagicMock()
    mock_client.get_pull_request_commit_count.return_value = (1, True)
    mock_client.get_pull_request_labels.return_value = ([], True)
    mock_client.remove_pr_labels.return_value = []
    mock_client.add_pr_labels.return_value = True
    return mock_client


def make_event(kind: EventKind = EventKind.PR_OPENED, org: str = "owner2", repo: str = "repo1") -> Event:
    return Event(kind=kind, org=org, repo=repo, number=12, actor="author", author="author")


def test_unconfigured_repository_does_nothing(client: MagicMock, configuration: Configuration) -> None:
    PullRequestHandler(client).handle(make_event(org="nobody"), configuration)
    assert client.method_calls == []


def test_squash_label_added_over_threshold(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_commit_count.return_value = (3, True)
    PullRequestHandler(client).handle(make_event(), configuration)
    client.add_pr_labels.assert_called_once_with("owner2", "repo1", 12, ["stat/needs-squash"])
    client.remove_pr_labels.assert_not_called()


def test_squash_label_removed_under_threshold(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_commit_count.return_value = (2, True)
    client.get_pull_request_labels.return_value = (["stat/needs-squash"], True)
    PullRequestHandler(client).handle(make_event(), configuration)
    client.remove_pr_labels.assert_called_once_with("owner2", "repo1", 12, ["stat/needs-squash"])
    client.add_pr_labels.assert_not_called()


def test_squash_label_already_present(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_commit_count.return_value = (3, True)
    client.get_pull_request_labels.return_value = (["stat/needs-squash"], True)
    PullRequestHandler(client).handle(make_event(), configuration)
    client.add_pr_labels.assert_not_called()
    client.remove_pr_labels.assert_not_called()


def test_commit_count_failure_posts_trigger_comment(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_commit_count.return_value = (0, False)
    PullRequestHandler(client).handle(make_event(), configuration)
    client.create_pr_comment.assert_called_once_with(
        "owner2", "repo1", 12, configuration.messages["command_trigger"]
    )
    client.get_pull_request_labels.assert_not_called()


def test_squash_disabled_makes_no_calls(client: MagicMock, configuration: Configuration) -> None:
    PullRequestHandler(client).handle(make_event(org="owner3"), configuration)
    client.get_pull_request_commit_count.assert_not_called()


def test_opened_does_not_clear_labels(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_labels.return_value = (["lgtm"], True)
    PullRequestHandler(client).handle(make_event(EventKind.PR_OPENED), configuration)
    client.remove_pr_labels.assert_not_called()


def test_source_update_clears_labels_and_comments(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_labels.return_value = (["label1", "approved-by/bob", "kind/bug"], True)
    PullRequestHandler(client).handle(make_event(EventKind.PR_SOURCE_UPDATED), configuration)

    client.remove_pr_labels.assert_called_once_with("owner2", "repo1", 12, ["label1", "approved-by/bob"])
    body = client.create_pr_comment.call_args[0][3]
    assert "label1, approved-by/bob" in body


def test_source_update_without_clearable_labels(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_labels.return_value = (["sig/aaa"], True)
    PullRequestHandler(client).handle(make_event(EventKind.PR_SOURCE_UPDATED), configuration)
    client.remove_pr_labels.assert_not_called()
    client.create_pr_comment.assert_not_called()


def test_source_update_removal_failure_posts_nothing(client: MagicMock, configuration: Configuration) -> None:
    client.get_pull_request_labels.return_value = (["label1"], True)
    client.remove_pr_labels.return_value = ["label1"]
    PullRequestHandler(client).handle(make_event(EventKind.PR_SOURCE_UPDATED), configuration)
    client.remove_pr_labels.assert_called_once()
    client.create_pr_comment.assert_not_called()


def test_comment_kinds_are_ignored(client: MagicMock, configuration: Configuration) -> None:
    PullRequestHandler(client).handle(make_event(EventKind.PR_COMMENT), configuration)
    assert client.method_calls == []
