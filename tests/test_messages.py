# tests/test_messages.py
from config.messages import (
    DEFAULT_MESSAGES,
    NO_PERMISSION_OPERATE_ISSUE,
    NO_PERMISSION_OPERATE_PR,
)


def test_all_messages_are_non_empty() -> None:
    assert len(DEFAULT_MESSAGES) == 9
    for key, template in DEFAULT_MESSAGES.items():
        assert template.strip(), key


def test_commenter_placeholder_in_user_facing_messages() -> None:
    no_commenter = {"command_trigger", "remove_labels_when_pr_source_code_updated"}
    for key, template in DEFAULT_MESSAGES.items():
        if key not in no_commenter:
            assert "{commenter}" in template, key


def test_label_messages_list_labels() -> None:
    for key in ("label_command_conflict", "update_label_failed", "add_not_exist_label"):
        assert "{labels}" in DEFAULT_MESSAGES[key]


def test_permission_messages_format() -> None:
    issue = NO_PERMISSION_OPERATE_ISSUE.format(commenter="@bob", action="close")
    assert issue.startswith("@bob You can not close this issue.")
    pr = NO_PERMISSION_OPERATE_PR.format(commenter="@bob", action="reopen")
    assert "reopen this pull request" in pr
