"""Git operations used by the release pipeline.

All operations use xrelease.utils.shell.run() for command execution
and raise GitError on failures.
"""

from xrelease.git.operations import commit, push, push_tag, stage_all, tag
from xrelease.git.queries import get_commit_log, get_current_branch, get_latest_tag

__all__ = [
    # Query operations
    "get_current_branch",
    "get_latest_tag",
    "get_commit_log",
    # Modification operations
    "stage_all",
    "commit",
    "tag",
    "push",
    "push_tag",
]
