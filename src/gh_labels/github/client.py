"""GitHub label store backed by PyGithub.

Authenticates with HTTP basic auth using the login and OAuth token that the gh
CLI stored for the host. All PyGithub and transport errors are translated to
`LabelStoreError` with a normalized reason.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from github import Auth, Github, GithubException
from github.Label import Label as GithubLabel
from github.Repository import Repository

from gh_labels.errors import LabelStoreError
from gh_labels.store import Label

logger = logging.getLogger(__name__)

PER_PAGE = 100


def describe_error(exc: Exception) -> str:
    """Return a short, user-facing reason for a failed GitHub call.

    GitHub validation failures carry a list of sub-errors. When there is
    exactly one, its code is the reason, or its message when the code is
    "custom". Anything else is surfaced as-is.
    """

    if not isinstance(exc, GithubException):
        return str(exc)

    data = exc.data
    errors = data.get("errors") if isinstance(data, dict) else None
    if not isinstance(errors, list) or len(errors) != 1:
        return str(exc)

    sub = errors[0]
    if not isinstance(sub, dict):
        return str(exc)
    code = sub.get("code")
    if code == "custom":
        message = sub.get("message")
        if isinstance(message, str) and message:
            return message
    if isinstance(code, str) and code:
        return code
    return str(exc)


class GitHubLabelStore:
    """Label operations for one repository."""

    def __init__(
        self,
        *,
        repository: str,
        username: str,
        token: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository
        # Labels seen by list_labels(), reused by update/delete.
        self._listed: dict[str, GithubLabel] = {}

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        if not token:
            raise ValueError("GitHub token is required")

        auth = Auth.Login(username, token)
        # Lazy: no request is made until the first label call. No retries: a
        # failed or rate-limited call is reported, not waited out.
        self._github = github_api or Github(
            auth=auth,
            base_url=base_url,
            per_page=PER_PAGE,
            retry=None,
            lazy=True,
        )
        self._repo = self._github.get_repo(repository)

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def list_labels(self) -> list[Label]:
        """Fetch every label, page by page, before returning."""

        labels: list[Label] = []
        try:
            paginated = self._repo.get_labels()
            page = 0
            while True:
                items: list[Any] = paginated.get_page(page)
                for item in items:
                    self._listed[item.name] = item
                    labels.append(Label(name=item.name, color=item.color))
                logger.debug("Fetched label page", extra={"page": page + 1, "count": len(items)})
                if len(items) < PER_PAGE:
                    break
                page += 1
        except (GithubException, requests.RequestException) as e:
            raise LabelStoreError(describe_error(e)) from e
        return labels

    def create_label(self, name: str, color: str) -> None:
        try:
            created = self._repo.create_label(name=name, color=color)
        except (GithubException, requests.RequestException) as e:
            raise LabelStoreError(describe_error(e)) from e
        self._listed[name] = created

    def update_label(self, name: str, color: str) -> None:
        try:
            label = self._listed.get(name) or self._repo.get_label(name)
            label.edit(name=name, color=color)
        except (GithubException, requests.RequestException) as e:
            raise LabelStoreError(describe_error(e)) from e

    def delete_label(self, name: str) -> None:
        try:
            label = self._listed.get(name) or self._repo.get_label(name)
            label.delete()
        except (GithubException, requests.RequestException) as e:
            raise LabelStoreError(describe_error(e)) from e
        self._listed.pop(name, None)

    def close(self) -> None:
        if self._github is not None:
            self._github.close()
