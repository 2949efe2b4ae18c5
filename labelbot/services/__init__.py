from labelbot.services.clearer import labels_to_clear
from labelbot.services.commands import check_conflict, parse_label_commands
from labelbot.services.config_store import ConfigStore, load_configuration
from labelbot.services.github_client import GitHubClient
from labelbot.services.labels import LabelDiff, compute_label_diff, find_missing_labels
from labelbot.services.permissions import check_commenter_permission
from labelbot.services.squash import evaluate_squash

__all__ = [
    "check_commenter_permission",
    "check_conflict",
    "compute_label_diff",
    "ConfigStore",
    "evaluate_squash",
    "find_missing_labels",
    "GitHubClient",
    "LabelDiff",
    "labels_to_clear",
    "load_configuration",
    "parse_label_commands",
]
