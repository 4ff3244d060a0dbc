"""Run settings for gh-labels.

Settings are loaded from environment variables and a local `.env` file (if
present); command-line flags override them. The resulting object is built once
in `main` and passed down explicitly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_labels.credentials import DEFAULT_HOST, hosts_file_path


class LabelSyncSettings(BaseSettings):
    """Settings for a single label sync run.

    Environment variables:
    - GH_LABELS_CONFIG_PATH (optional)
    - GH_LABELS_CLEANUP    (optional)
    - GH_LABELS_LOG_LEVEL  (optional)
    - GH_HOST              (optional)
    - GITHUB_BASE_URL      (optional)
    - GH_CONFIG_DIR        (optional)
    """

    config_path: Path = Field(
        default=Path("gh-labels.yml"),
        description="Path to the desired-state YAML file",
    )
    cleanup: bool = Field(
        default=False,
        description="Delete labels that are not in the config",
    )
    log_level: str = Field(
        default="info",
        description="Log level (debug|info|warn|err)",
    )
    github_host: str = Field(
        default=DEFAULT_HOST,
        validation_alias="GH_HOST",
        description="Host entry to read from the gh hosts file",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    gh_config_dir: Path | None = Field(
        default=None,
        validation_alias="GH_CONFIG_DIR",
        description="gh configuration directory (defaults to ~/.config/gh)",
    )

    model_config = SettingsConfigDict(
        env_prefix="GH_LABELS_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def hosts_file(self) -> Path:
        """Path of the gh hosts file holding credentials."""

        return hosts_file_path(self.gh_config_dir)


def parse_repository(value: str) -> tuple[str, str]:
    """Split "owner/repo" into its parts.

    Raises:
        ValueError: unless there is exactly one slash with text on both sides.
    """

    if value.count("/") != 1:
        raise ValueError(f"Expected 'owner/repo', got {value!r}")
    owner, repo = value.split("/")
    if not owner or not repo:
        raise ValueError(f"Expected 'owner/repo', got {value!r}")
    return owner, repo
