# labelbot/handlers/pull_request.py
"""Pull request events: squash check and label clearing on source updates."""

import logging

from labelbot.handlers.base import BaseHandler
from labelbot.models.event import Event, EventKind
from labelbot.models.policy import Configuration, RepoPolicy
from labelbot.services.clearer import labels_to_clear
from labelbot.services.squash import evaluate_squash

logger = logging.getLogger(__name__)


class PullRequestHandler(BaseHandler):
    """Handles pull request opened and source-updated events."""

    def handle(self, event: Event, config: Configuration) -> None:
        if event.kind not in (EventKind.PR_OPENED, EventKind.PR_SOURCE_UPDATED):
            logger.debug(f"Ignoring {event.kind.value} on {event.full_name}")
            return

        policy = self.resolve_policy(event, config)
        if policy is None:
            return

        self.handle_squash_label(event, policy, config)

        if event.kind == EventKind.PR_SOURCE_UPDATED:
            self.clear_labels_when_source_updated(event, policy, config)

    def handle_squash_label(self, event: Event, policy: RepoPolicy, config: Configuration) -> None:
        """Add or remove the needs-squash label depending on the commit count."""
        if policy.squash.unable_checking_squash:
            return

        org, repo, number = event.org, event.repo, event.number
        commit_count, success = self.client.get_pull_request_commit_count(org, repo, number)
        if not success:
            self.client.create_pr_comment(org, repo, number, config.render("command_trigger"))
            return

        labels, success = self.client.get_pull_request_labels(org, repo, number)
        if not success:
            logger.warning(f"Skipping squash check on {event.full_name}: labels unavailable")
            return

        diff = evaluate_squash(commit_count, labels, policy.squash, config.squash_commit_label)
        if diff.to_add:
            logger.info(
                f"{event.full_name} has {commit_count} commits "
                f"(threshold {policy.squash.commits_threshold}), adding {diff.to_add}"
            )
            self.client.add_pr_labels(org, repo, number, diff.to_add)
        if diff.to_remove:
            logger.info(f"{event.full_name} has {commit_count} commits, removing {diff.to_remove}")
            self.client.remove_pr_labels(org, repo, number, diff.to_remove)

    def clear_labels_when_source_updated(
        self, event: Event, policy: RepoPolicy, config: Configuration
    ) -> None:
        """Strip the configured labels after new commits were pushed."""
        if not policy.clear_labels and policy.clear_labels_regexp is None:
            return

        org, repo, number = event.org, event.repo, event.number
        labels, success = self.client.get_pull_request_labels(org, repo, number)
        if not success or not labels:
            return

        to_clear = labels_to_clear(labels, policy.clear_labels, policy.clear_labels_regexp)
        if not to_clear:
            return

        failed = self.client.remove_pr_labels(org, repo, number, to_clear)
        if failed:
            logger.warning(f"Source of {event.full_name} updated, could not remove {failed}")
            return

        logger.info(f"Source of {event.full_name} updated, removed {to_clear}")
        body = config.render("remove_labels_when_pr_source_code_updated", labels=", ".join(to_clear))
        self.client.create_pr_comment(org, repo, number, body)
