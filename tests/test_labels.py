# tests/test_labels.py
import re

from labelbot.models.policy import SquashConfig
from labelbot.services.clearer import labels_to_clear
from labelbot.services.labels import LabelDiff, compute_label_diff, find_missing_labels
from labelbot.services.squash import evaluate_squash


def test_diff_skips_present_and_absent_labels() -> None:
    diff = compute_label_diff(
        current=["kind/bug", "sig/Kernel"],
        to_add=["kind/bug", "priority/high"],
        to_remove=["sig/Kernel", "sig/Network"],
    )
    assert diff.to_add == ["priority/high"]
    assert diff.to_remove == ["sig/Kernel"]


def test_diff_drops_duplicates() -> None:
    diff = compute_label_diff([], ["kind/bug", "kind/bug"], [])
    assert diff.to_add == ["kind/bug"]


def test_diff_is_idempotent() -> None:
    current = ["sig/Kernel"]
    request = ["kind/bug", "priority/high"]
    first = compute_label_diff(current, request, [])
    assert first.to_add == request

    second = compute_label_diff(current + first.to_add, request, [])
    assert second.to_add == []
    assert not second


def test_empty_diff_is_falsy() -> None:
    assert not LabelDiff()
    assert LabelDiff(to_remove=["x"])


def test_find_missing_labels_ignores_case() -> None:
    missing = find_missing_labels(["sig/Kernel", "kind/new"], ["sig/kernel", "kind/bug"])
    assert missing == ["kind/new"]


def test_squash_adds_label_over_threshold() -> None:
    diff = evaluate_squash(2, ["kind/bug"], SquashConfig(commits_threshold=1), "stat/needs-squash")
    assert diff.to_add == ["stat/needs-squash"]
    assert diff.to_remove == []


def test_squash_removes_label_under_threshold() -> None:
    diff = evaluate_squash(1, ["stat/needs-squash"], SquashConfig(commits_threshold=2), "stat/needs-squash")
    assert diff.to_add == []
    assert diff.to_remove == ["stat/needs-squash"]


def test_squash_no_action_when_label_already_present() -> None:
    diff = evaluate_squash(2, ["stat/needs-squash"], SquashConfig(commits_threshold=1), "stat/needs-squash")
    assert not diff


def test_squash_no_action_at_threshold_without_label() -> None:
    assert not evaluate_squash(1, [], SquashConfig(commits_threshold=1), "stat/needs-squash")


def test_squash_disabled() -> None:
    squash = SquashConfig(unable_checking_squash=True, commits_threshold=1)
    assert not evaluate_squash(10, [], squash, "stat/needs-squash")


def test_clear_nothing_when_no_configured_label_present() -> None:
    assert labels_to_clear(["sig/aaa"], ["label1"]) == []


def test_clear_configured_label() -> None:
    assert labels_to_clear(["label1"], ["label1"]) == ["label1"]


def test_clear_by_regexp_keeps_pr_label_order() -> None:
    cleared = labels_to_clear(
        ["approved-by/alice", "kind/bug", "lgtm", "approved-by/bob"],
        ["lgtm", "not-present"],
        re.compile("^approved-by/"),
    )
    assert cleared == ["approved-by/alice", "lgtm", "approved-by/bob"]
