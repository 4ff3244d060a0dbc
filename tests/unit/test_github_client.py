"""Unit tests for the PyGithub-backed label store (mocked)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests
from github import Auth, GithubException

from gh_labels.errors import LabelStoreError
from gh_labels.github.client import PER_PAGE, GitHubLabelStore, describe_error
from gh_labels.store import Label


def _gh_label(name: str, color: str) -> Mock:
    label = Mock()
    label.name = name
    label.color = color
    return label


def _store(repo: Mock) -> GitHubLabelStore:
    # Inject a repo to avoid any network calls during construction.
    return GitHubLabelStore(repository="octo-org/octo-repo", username="", token="", repo=repo)


def test_list_labels_fetches_until_short_page() -> None:
    pages = [
        [_gh_label(f"a{i}", "000000") for i in range(PER_PAGE)],
        [_gh_label(f"b{i}", "111111") for i in range(PER_PAGE)],
        [_gh_label("last", "222222")],
    ]
    repo = Mock()
    repo.get_labels.return_value.get_page.side_effect = pages

    labels = _store(repo).list_labels()

    assert len(labels) == 2 * PER_PAGE + 1
    assert labels[0] == Label("a0", "000000")
    assert labels[-1] == Label("last", "222222")
    assert [c.args for c in repo.get_labels.return_value.get_page.call_args_list] == [
        (0,),
        (1,),
        (2,),
    ]


def test_list_labels_full_last_page_needs_one_more_request() -> None:
    repo = Mock()
    repo.get_labels.return_value.get_page.side_effect = [
        [_gh_label(f"a{i}", "000000") for i in range(PER_PAGE)],
        [],
    ]

    labels = _store(repo).list_labels()

    assert len(labels) == PER_PAGE
    assert repo.get_labels.return_value.get_page.call_count == 2


def test_list_labels_error_is_normalized() -> None:
    repo = Mock()
    repo.get_labels.return_value.get_page.side_effect = GithubException(
        401, {"message": "Bad credentials"}
    )

    with pytest.raises(LabelStoreError) as excinfo:
        _store(repo).list_labels()

    assert "Bad credentials" in excinfo.value.reason


def test_update_and_delete_reuse_listed_labels() -> None:
    bug = _gh_label("bug", "ff0000")
    wip = _gh_label("wip", "ffffff")
    repo = Mock()
    repo.get_labels.return_value.get_page.return_value = [bug, wip]
    store = _store(repo)
    store.list_labels()

    store.update_label("bug", "e11d21")
    store.delete_label("wip")

    bug.edit.assert_called_once_with(name="bug", color="e11d21")
    wip.delete.assert_called_once_with()
    repo.get_label.assert_not_called()


def test_update_unlisted_label_fetches_it() -> None:
    repo = Mock()
    store = _store(repo)

    store.update_label("bug", "e11d21")

    repo.get_label.assert_called_once_with("bug")
    repo.get_label.return_value.edit.assert_called_once_with(name="bug", color="e11d21")


def test_create_label() -> None:
    repo = Mock()

    _store(repo).create_label("feature", "009800")

    repo.create_label.assert_called_once_with(name="feature", color="009800")


def test_create_error_uses_single_sub_error_code() -> None:
    repo = Mock()
    repo.create_label.side_effect = GithubException(
        422,
        {
            "message": "Validation Failed",
            "errors": [{"resource": "Label", "code": "already_exists", "field": "name"}],
        },
    )

    with pytest.raises(LabelStoreError) as excinfo:
        _store(repo).create_label("bug", "e11d21")

    assert excinfo.value.reason == "already_exists"


def test_delete_transport_error_is_normalized() -> None:
    repo = Mock()
    repo.get_label.return_value.delete.side_effect = requests.ConnectionError("connection reset")

    with pytest.raises(LabelStoreError, match="connection reset"):
        _store(repo).delete_label("wip")


def test_describe_error_custom_code_uses_message() -> None:
    exc = GithubException(
        422,
        {
            "message": "Validation Failed",
            "errors": [{"resource": "Label", "code": "custom", "message": "color is invalid"}],
        },
    )

    assert describe_error(exc) == "color is invalid"


@pytest.mark.parametrize(
    "data",
    [
        {"message": "Not Found"},
        {"message": "Validation Failed", "errors": []},
        {
            "message": "Validation Failed",
            "errors": [{"code": "invalid"}, {"code": "missing_field"}],
        },
        "plain text body",
    ],
)
def test_describe_error_otherwise_returns_raw_error(data: object) -> None:
    exc = GithubException(422, data)

    assert describe_error(exc) == str(exc)


def test_store_requires_repository() -> None:
    with pytest.raises(ValueError, match="repository"):
        GitHubLabelStore(repository="", username="octocat", token="t", repo=Mock())


def test_store_requires_token_without_injected_repo() -> None:
    with pytest.raises(ValueError, match="token"):
        GitHubLabelStore(repository="octo-org/octo-repo", username="octocat", token="")


def test_store_uses_injected_api_and_closes() -> None:
    github_api = Mock()

    store = GitHubLabelStore(
        repository="octo-org/octo-repo",
        username="octocat",
        token="gho_test",
        github_api=github_api,
    )
    store.close()

    github_api.get_repo.assert_called_once_with("octo-org/octo-repo")
    github_api.close.assert_called_once_with()


def test_store_uses_basic_auth_without_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    github_cls = Mock()
    monkeypatch.setattr("gh_labels.github.client.Github", github_cls)

    GitHubLabelStore(repository="octo-org/octo-repo", username="octocat", token="gho_test")

    auth = github_cls.call_args.kwargs["auth"]
    assert isinstance(auth, Auth.Login)
    assert auth.login == "octocat"
    assert auth.password == "gho_test"
    assert github_cls.call_args.kwargs["per_page"] == PER_PAGE
    assert github_cls.call_args.kwargs["lazy"] is True
    # Failed and rate-limited calls surface immediately instead of being retried.
    assert github_cls.call_args.kwargs["retry"] is None
    github_cls.return_value.get_repo.assert_called_once_with("octo-org/octo-repo")
