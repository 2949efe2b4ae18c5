# labelbot/handlers/comments.py
"""Comment events on issues and pull requests: /close, /reopen and label commands."""

import logging
from typing import Callable

from labelbot.handlers.base import BaseHandler
from labelbot.models.event import STATE_CLOSED, STATE_OPEN, Event
from labelbot.models.policy import Configuration, RepoPolicy
from labelbot.services.commands import (
    check_conflict,
    is_close_command,
    is_reopen_command,
    parse_label_commands,
)
from labelbot.services.labels import compute_label_diff, find_missing_labels
from labelbot.services.permissions import check_commenter_permission

logger = logging.getLogger(__name__)


class CommentHandler(BaseHandler):
    """Handles comments left on issues and pull requests."""

    def handle(self, event: Event, config: Configuration) -> None:
        policy = self.resolve_policy(event, config)
        if policy is None:
            return

        if event.state == STATE_CLOSED and is_reopen_command(event.comment):
            self.handle_reopen(event, config)
            return

        if event.state == STATE_OPEN and is_close_command(event.comment):
            self.handle_close(event, policy, config)
            return

        self.handle_label_commands(event, policy, config)

    def _check_permission(self, event: Event, config: Configuration, action: str) -> bool:
        template = "no_permission_operate_pr" if event.is_pull_request else "no_permission_operate_issue"

        def deny() -> None:
            self.comment(
                event,
                config.render(template, commenter=config.mark_user(event.actor), action=action),
            )

        return check_commenter_permission(
            self.client, event.org, event.repo, event.author, event.actor, deny
        )

    def handle_reopen(self, event: Event, config: Configuration) -> None:
        """Reopen a closed issue or pull request if the commenter may do so."""
        if not self._check_permission(event, config, "reopen"):
            return

        if self.update_state(event, STATE_OPEN):
            logger.info(f"{event.actor} reopened {event.full_name}")

    def handle_close(self, event: Event, policy: RepoPolicy, config: Configuration) -> None:
        """Close an open issue or pull request if the commenter may do so."""
        if not self._check_permission(event, config, "close"):
            return

        if event.is_pull_request:
            if self.update_state(event, STATE_CLOSED):
                logger.info(f"{event.actor} closed {event.full_name}")
            return

        self.check_issue_needs_linking_pr(event, policy, config)

    def check_issue_needs_linking_pr(
        self, event: Event, policy: RepoPolicy, config: Configuration
    ) -> None:
        """Close the issue, requiring a linked pull request when the policy says so."""
        org, repo, number = event.org, event.repo, event.number
        commenter = config.mark_user(event.actor)

        if policy.need_issue_has_link_pull_requests:
            count, success = self.client.get_issue_linked_pr_count(org, repo, number)
            logger.info(
                f"Linked pull requests of {event.full_name}: request succeeded={success}, count={count}"
            )
            # Unknown count: do not close, ask the user to try again
            if not success:
                self.client.create_issue_comment(
                    org, repo, number,
                    config.render("list_linking_pull_requests_failure", commenter=commenter),
                )
                return

            if count == 0:
                self.client.create_issue_comment(
                    org, repo, number, config.render("issue_needs_link_pr", commenter=commenter)
                )
                return

        if self.client.update_issue_state(org, repo, number, STATE_CLOSED):
            logger.info(f"{event.actor} closed {event.full_name}")

    def handle_label_commands(
        self, event: Event, policy: RepoPolicy, config: Configuration
    ) -> None:
        """Apply /kind, /priority, /sig, /good and their /remove- forms."""
        to_add, to_remove = parse_label_commands(event.comment)
        if not to_add and not to_remove:
            return

        commenter = config.mark_user(event.actor)
        conflict, names = check_conflict(to_add, to_remove)
        if conflict:
            logger.info(f"Conflicting label command from {event.actor} on {event.full_name}: {names}")
            self.comment(
                event, config.render("label_command_conflict", commenter=commenter, labels=names)
            )
            return

        if to_add:
            allowed = self.ensure_labels_exist(event, policy, config, to_add)
            if allowed is None:
                return
            to_add = allowed

        current, success = self.get_labels(event)
        if not success:
            logger.warning(f"Skipping label command on {event.full_name}: labels unavailable")
            return

        diff = compute_label_diff(current, to_add, to_remove)
        if not diff:
            logger.debug(f"Label command on {event.full_name} changes nothing")
            return

        # Adds and removes are independent; one failing does not stop the other
        if diff.to_add:
            self._apply(event, config, diff.to_add, self.add_labels, "Added")
        if diff.to_remove:
            self._apply(event, config, diff.to_remove, self.remove_labels, "Removed")

    def _apply(
        self,
        event: Event,
        config: Configuration,
        labels: list[str],
        operation: Callable[[Event, list[str]], list[str]],
        verb: str,
    ) -> None:
        failed = operation(event, labels)
        done = [label for label in labels if label not in failed]
        if done:
            logger.info(f"{verb} {done} on {event.full_name} for {event.actor}")
        if not failed:
            return

        self.comment(
            event,
            config.render(
                "update_label_failed",
                commenter=config.mark_user(event.actor),
                labels=", ".join(failed),
            ),
        )

    def ensure_labels_exist(
        self, event: Event, policy: RepoPolicy, config: Configuration, to_add: list[str]
    ) -> list[str] | None:
        """
        Make sure every label to add exists in the repository.

        Missing labels are created when the policy allows collaborators to do
        so and the commenter passes the permission gate.

        Returns:
            The labels that can be added, or None if the command must stop
        """
        org, repo = event.org, event.repo
        repo_labels, success = self.client.get_repo_labels(org, repo)
        if not success:
            logger.warning(f"Skipping label command on {event.full_name}: repository labels unavailable")
            return None

        missing = find_missing_labels(to_add, repo_labels)
        if not missing:
            return to_add

        commenter = config.mark_user(event.actor)

        def reject() -> None:
            self.comment(
                event,
                config.render("add_not_exist_label", commenter=commenter, labels=", ".join(missing)),
            )

        if not policy.allow_creating_labels_by_collaborator:
            reject()
            return None

        if not check_commenter_permission(self.client, org, repo, event.author, event.actor, reject):
            return None

        failed = [
            label for label in missing
            if not self.client.create_repo_label(org, repo, label, config.new_label_color)
        ]
        if failed:
            self.comment(
                event,
                config.render("update_label_failed", commenter=commenter, labels=", ".join(failed)),
            )
        created = [label for label in missing if label not in failed]
        if created:
            logger.info(f"{event.actor} created labels {created} in {org}/{repo}")
        return [label for label in to_add if label not in failed]
