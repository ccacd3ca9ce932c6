"""Release pipeline stages.

Each stage is a plain function (or, for actions, a small executor) that
receives its configuration explicitly and raises a ReleaseError subclass on
failure. Sequencing and reporting belong to xrelease.workflow.
"""

from xrelease.stages.actions import ActionExecutor, ActionRecord
from xrelease.stages.branch import branch_matches, check_branch, get_allowed_branches
from xrelease.stages.bump import bump_project_version
from xrelease.stages.changelog import generate_changelog
from xrelease.stages.checks import (
    run_post_release_steps,
    run_pre_release_checks,
    run_pre_release_steps,
    run_steps,
)
from xrelease.stages.files import update_version_files, update_version_in_file

__all__ = [
    "check_branch",
    "get_allowed_branches",
    "branch_matches",
    "run_steps",
    "run_pre_release_checks",
    "run_pre_release_steps",
    "run_post_release_steps",
    "bump_project_version",
    "update_version_in_file",
    "update_version_files",
    "generate_changelog",
    "ActionExecutor",
    "ActionRecord",
]
