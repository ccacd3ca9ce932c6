"""Release publishers."""

from xrelease.publishers.github import (
    create_release,
    delete_release,
    ensure_gh_authenticated,
    ensure_gh_installed,
    expand_assets,
    publish_release,
    release_exists,
)

__all__ = [
    "ensure_gh_installed",
    "ensure_gh_authenticated",
    "release_exists",
    "delete_release",
    "expand_assets",
    "create_release",
    "publish_release",
]
