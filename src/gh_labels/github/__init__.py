"""GitHub-backed label store."""

from gh_labels.github.client import PER_PAGE, GitHubLabelStore, describe_error

__all__ = ["PER_PAGE", "GitHubLabelStore", "describe_error"]
