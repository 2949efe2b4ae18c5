# config/messages.py
"""Default comment templates posted by the bot.

Placeholders are ``{commenter}``, ``{action}`` and ``{labels}``. Any of these
can be overridden from the ``messages`` mapping of the policy file.
"""

COMMAND_TRIGGER = """\
The bot could not count the commits of this pull request. \
Push again, or close and reopen it, to trigger the squash check."""

REMOVE_LABELS_WHEN_PR_SOURCE_CODE_UPDATED = (
    "This pull request source branch has changed, "
    "so removes the following label(s): {labels}."
)

LABEL_COMMAND_CONFLICT = (
    "{commenter} The label(s) **{labels}** are requested to be added and removed "
    "at the same time. Please check your command and comment again."
)

UPDATE_LABEL_FAILED = (
    "{commenter} Failed to update the label(s) **{labels}**. Please try again later."
)

ADD_NOT_EXIST_LABEL = (
    "{commenter} The label(s) **{labels}** do not exist in this repository "
    "and you are not allowed to create them."
)

NO_PERMISSION_OPERATE_ISSUE = (
    "{commenter} You can not {action} this issue. "
    "Only the author and the repository collaborators can do that."
)

NO_PERMISSION_OPERATE_PR = (
    "{commenter} You can not {action} this pull request. "
    "Only the author and the repository collaborators can do that."
)

ISSUE_NEEDS_LINK_PR = (
    "{commenter} This issue can not be closed before a pull request is linked to it."
)

LIST_LINKING_PULL_REQUESTS_FAILURE = (
    "{commenter} Failed to list the pull requests linked to this issue, "
    "so it was not closed. Please comment `/close` again."
)

DEFAULT_MESSAGES: dict[str, str] = {
    "command_trigger": COMMAND_TRIGGER,
    "remove_labels_when_pr_source_code_updated": REMOVE_LABELS_WHEN_PR_SOURCE_CODE_UPDATED,
    "label_command_conflict": LABEL_COMMAND_CONFLICT,
    "update_label_failed": UPDATE_LABEL_FAILED,
    "add_not_exist_label": ADD_NOT_EXIST_LABEL,
    "no_permission_operate_issue": NO_PERMISSION_OPERATE_ISSUE,
    "no_permission_operate_pr": NO_PERMISSION_OPERATE_PR,
    "issue_needs_link_pr": ISSUE_NEEDS_LINK_PR,
    "list_linking_pull_requests_failure": LIST_LINKING_PULL_REQUESTS_FAILURE,
}
