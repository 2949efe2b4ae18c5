# labelbot/services/permissions.py
"""Permission gate shared by close, reopen and label creation."""

import logging
from typing import Callable

from labelbot.services.github_client import GitHubClient

logger = logging.getLogger(__name__)


def check_commenter_permission(
    client: GitHubClient,
    org: str,
    repo: str,
    author: str,
    commenter: str,
    on_denied: Callable[[], None],
) -> bool:
    """
    Decide whether the commenter may operate on the issue or pull request.

    The author always passes. Anyone else needs write permission on the
    repository. ``on_denied`` runs only on a definitive "no"; when the check
    itself fails nothing is posted, since the answer is unknown.

    Args:
        client: GitHub client used for the live check
        org: Repository owner
        repo: Repository name
        author: Author of the issue or pull request
        commenter: User who issued the command
        on_denied: Callback posting the rejection comment

    Returns:
        True if the operation may proceed
    """
    if commenter and commenter == author:
        return True

    has_permission, success = client.check_permission(org, repo, commenter)
    logger.info(
        f"Permission check for {commenter} on {org}/{repo}: "
        f"request succeeded={success}, has permission={has_permission}"
    )

    if not success:
        logger.warning(f"Could not verify permission of {commenter} on {org}/{repo}, skipping")
        return False
    if not has_permission:
        on_denied()
        return False
    return True
