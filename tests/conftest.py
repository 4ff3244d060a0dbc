"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from gh_labels.errors import LabelStoreError
from gh_labels.store import Label


class FakeLabelStore:
    """In-memory label store that records every call."""

    def __init__(self, labels: list[Label] | None = None) -> None:
        self.labels: dict[str, str] = {label.name: label.color for label in labels or []}
        self.calls: list[tuple[str, ...]] = []
        self.fail: dict[tuple[str, str], str] = {}
        self.list_error: str | None = None
        self.repository = "octo-org/octo-repo"
        self.closed = False

    def _maybe_fail(self, op: str, name: str) -> None:
        reason = self.fail.get((op, name))
        if reason is not None:
            raise LabelStoreError(reason)

    def list_labels(self) -> list[Label]:
        self.calls.append(("list",))
        if self.list_error is not None:
            raise LabelStoreError(self.list_error)
        return [Label(name=name, color=color) for name, color in self.labels.items()]

    def create_label(self, name: str, color: str) -> None:
        self.calls.append(("create", name, color))
        self._maybe_fail("create", name)
        self.labels[name] = color

    def update_label(self, name: str, color: str) -> None:
        self.calls.append(("update", name, color))
        self._maybe_fail("update", name)
        self.labels[name] = color

    def delete_label(self, name: str) -> None:
        self.calls.append(("delete", name))
        self._maybe_fail("delete", name)
        del self.labels[name]

    def close(self) -> None:
        self.closed = True

    def mutations(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] != "list"]


@pytest.fixture
def fake_store() -> FakeLabelStore:
    """Provide the store from the end-to-end example: bug is stale, wip unmanaged."""
    return FakeLabelStore([Label("bug", "ff0000"), Label("wip", "ffffff")])


@pytest.fixture
def labels_file(tmp_path: Path) -> Path:
    """Provide a desired-state config file."""
    path = tmp_path / "gh-labels.yml"
    path.write_text(
        "labels:\n"
        "  bug: red\n"
        "  feature: green\n"
        "colors:\n"
        "  red: e11d21\n"
        '  green: "009800"\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def gh_config_dir(tmp_path: Path) -> Path:
    """Provide a gh config dir with credentials for github.com."""
    config_dir = tmp_path / "gh"
    config_dir.mkdir()
    (config_dir / "hosts.yml").write_text(
        "github.com:\n"
        "    user: octocat\n"
        "    oauth_token: gho_test\n"
        "    git_protocol: https\n",
        encoding="utf-8",
    )
    return config_dir


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and .env out of settings."""
    for var in (
        "GH_LABELS_CONFIG_PATH",
        "GH_LABELS_CLEANUP",
        "GH_LABELS_LOG_LEVEL",
        "GH_HOST",
        "GITHUB_BASE_URL",
        "GH_CONFIG_DIR",
        "XDG_CONFIG_HOME",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_store() -> type[FakeLabelStore]:
    """Provide the fake store class for tests that need their own labels."""
    return FakeLabelStore
