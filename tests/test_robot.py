# tests/test_robot.py
import logging
from unittest.mock import MagicMock

import pytest

from labelbot.models.event import STATE_CLOSED, Event, EventKind
from labelbot.models.policy import Configuration, RepoFilter, RepoPolicy
from labelbot.robot import (
    CATEGORY_ISSUE_COMMENT,
    CATEGORY_PULL_REQUEST,
    CATEGORY_PULL_REQUEST_COMMENT,
    Robot,
)


def make_configuration() -> Configuration:
    policy = RepoPolicy(repo_filter=RepoFilter(repos=("org",)), need_issue_has_link_pull_requests=True)
    return Configuration(config_items=(policy,))


def make_event(kind: EventKind, comment: str = "", state: str = "open") -> Event:
    return Event(
        kind=kind, org="org", repo="repo", number=3, actor="reviewer", author="author",
        state=state, comment=comment,
    )


def test_registers_all_categories() -> None:
    robot = Robot(MagicMock())
    assert set(robot.handlers) == {
        CATEGORY_PULL_REQUEST, CATEGORY_ISSUE_COMMENT, CATEGORY_PULL_REQUEST_COMMENT,
    }


def test_dispatches_by_category() -> None:
    robot = Robot(MagicMock())
    for category in list(robot.handlers):
        robot.handlers[category] = MagicMock()

    configuration = make_configuration()
    event = make_event(EventKind.PR_SOURCE_UPDATED)
    robot.dispatch(event, configuration)
    robot.handlers[CATEGORY_PULL_REQUEST].assert_called_once_with(event, configuration)

    event = make_event(EventKind.PR_COMMENT, "/kind bug")
    robot.dispatch(event, configuration)
    robot.handlers[CATEGORY_PULL_REQUEST_COMMENT].assert_called_once_with(event, configuration)
    robot.handlers[CATEGORY_ISSUE_COMMENT].assert_not_called()


def test_handler_errors_are_contained() -> None:
    client = MagicMock()
    client.check_permission.side_effect = RuntimeError("boom")
    robot = Robot(client)
    # Must not raise
    robot.dispatch(make_event(EventKind.ISSUE_COMMENT, "/reopen", state=STATE_CLOSED), make_configuration())
    client.update_issue_state.assert_not_called()


def test_reopen_end_to_end() -> None:
    client = MagicMock()
    client.check_permission.return_value = (True, True)
    client.update_issue_state.return_value = True
    Robot(client).dispatch(
        make_event(EventKind.ISSUE_COMMENT, "/reopen", state=STATE_CLOSED), make_configuration()
    )
    client.update_issue_state.assert_called_once_with("org", "repo", 3, "open")


def test_close_requires_linked_pull_request() -> None:
    client = MagicMock()
    client.check_permission.return_value = (True, True)
    client.get_issue_linked_pr_count.return_value = (0, True)
    configuration = make_configuration()
    Robot(client).dispatch(make_event(EventKind.ISSUE_COMMENT, "/close"), configuration)
    client.update_issue_state.assert_not_called()
    client.create_issue_comment.assert_called_once_with(
        "org", "repo", 3, configuration.render("issue_needs_link_pr", commenter="@reviewer")
    )


def test_dispatch_logs_action_and_labels(caplog: pytest.LogCaptureFixture) -> None:
    robot = Robot(MagicMock())
    robot.handlers[CATEGORY_PULL_REQUEST] = MagicMock()
    event = Event(
        kind=EventKind.PR_SOURCE_UPDATED, org="org", repo="repo", number=3, actor="reviewer",
        author="author", labels=("lgtm", "kind/bug"), action="synchronize",
    )
    with caplog.at_level(logging.INFO, logger="labelbot.robot"):
        robot.dispatch(event, make_configuration())
    assert "(synchronize) on org/repo#3" in caplog.text
    assert "labels: ['lgtm', 'kind/bug']" in caplog.text
