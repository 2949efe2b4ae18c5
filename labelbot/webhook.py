# labelbot/webhook.py
"""GitHub webhook payload parsing and signature verification.

Payload fields used (pull_request event):
{
  "action": "synchronize",
  "number": 12,
  "pull_request": {"number": 12, "state": "open", "user": {"login": "author"},
                   "labels": [{"name": "kind/bug"}]},
  "repository": {"name": "repo", "owner": {"login": "org"}},
  "sender": {"login": "author"}
}

issue_comment events carry "issue" instead of "pull_request" (with a
"pull_request" key inside the issue when it is a PR) and a "comment" object
whose "user" is the commenter.
"""

import hashlib
import hmac
import logging
from typing import Any

from labelbot.models.event import Event, EventKind

logger = logging.getLogger(__name__)

PR_OPENED_ACTIONS = frozenset({"opened", "reopened"})
PR_SOURCE_UPDATED_ACTIONS = frozenset({"synchronize"})
COMMENT_ACTIONS = frozenset({"created"})


def verify_signature(secret: str, body: bytes, signature_header: str | None) -> bool:
    """
    Check the X-Hub-Signature-256 header against the raw request body.

    Args:
        secret: Webhook secret shared with GitHub
        body: Raw request body
        signature_header: Header value, "sha256=<hexdigest>"

    Returns:
        True if the signature matches
    """
    if not signature_header or not signature_header.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature_header[len("sha256="):])


def _login(data: Any) -> str:
    if isinstance(data, dict) and isinstance(data.get("login"), str):
        return data["login"].strip()
    return ""


def _labels(data: Any) -> tuple[str, ...]:
    if not isinstance(data, list):
        return ()
    return tuple(
        label["name"] for label in data
        if isinstance(label, dict) and isinstance(label.get("name"), str)
    )


def _repository(payload: dict[str, Any]) -> tuple[str, str]:
    repo_data = payload.get("repository")
    if not isinstance(repo_data, dict):
        return "", ""
    name = repo_data.get("name")
    return _login(repo_data.get("owner")), name if isinstance(name, str) else ""


def _parse_pull_request(payload: dict[str, Any]) -> Event | None:
    action = payload.get("action", "")
    if action in PR_OPENED_ACTIONS:
        kind = EventKind.PR_OPENED
    elif action in PR_SOURCE_UPDATED_ACTIONS:
        kind = EventKind.PR_SOURCE_UPDATED
    else:
        logger.debug(f"Ignoring pull_request action: {action}")
        return None

    pull = payload.get("pull_request")
    if not isinstance(pull, dict):
        logger.warning("Missing or invalid 'pull_request' field in payload")
        return None

    org, repo = _repository(payload)
    return Event(
        kind=kind,
        org=org,
        repo=repo,
        number=pull.get("number") or payload.get("number") or 0,
        actor=_login(payload.get("sender")),
        author=_login(pull.get("user")),
        state=pull.get("state", ""),
        labels=_labels(pull.get("labels")),
        action=action,
    )


def _parse_issue_comment(payload: dict[str, Any]) -> Event | None:
    action = payload.get("action", "")
    if action not in COMMENT_ACTIONS:
        logger.debug(f"Ignoring issue_comment action: {action}")
        return None

    issue = payload.get("issue")
    comment = payload.get("comment")
    if not isinstance(issue, dict) or not isinstance(comment, dict):
        logger.warning("Missing or invalid 'issue' or 'comment' field in payload")
        return None

    org, repo = _repository(payload)
    kind = EventKind.PR_COMMENT if issue.get("pull_request") else EventKind.ISSUE_COMMENT
    return Event(
        kind=kind,
        org=org,
        repo=repo,
        number=issue.get("number") or 0,
        actor=_login(comment.get("user")),
        author=_login(issue.get("user")),
        state=issue.get("state", ""),
        comment=comment.get("body") or "",
        labels=_labels(issue.get("labels")),
        action=action,
    )


_PARSERS = {
    "pull_request": _parse_pull_request,
    "issue_comment": _parse_issue_comment,
}


def parse_event(event_name: str, payload: Any) -> Event | None:
    """
    Turn a webhook delivery into an Event.

    Args:
        event_name: Value of the X-GitHub-Event header
        payload: Decoded JSON body

    Returns:
        Event, or None for unsupported or malformed deliveries
    """
    parser = _PARSERS.get(event_name)
    if parser is None:
        logger.debug(f"Ignoring unsupported event type: {event_name}")
        return None
    if not isinstance(payload, dict):
        logger.warning(f"Invalid payload: expected dict, got {type(payload)}")
        return None

    event = parser(payload)
    if event is None:
        return None
    if not event.org or not event.repo or not isinstance(event.number, int) or event.number <= 0:
        logger.warning(f"Incomplete {event_name} payload: {event.org}/{event.repo}#{event.number}")
        return None
    return event
