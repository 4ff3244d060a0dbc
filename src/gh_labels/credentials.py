"""Discover GitHub credentials from the gh CLI configuration.

gh keeps per-host credentials in `hosts.yml`:

    github.com:
        user: octocat
        oauth_token: gho_xxx
        git_protocol: https
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from gh_labels.errors import CredentialsInvalid, CredentialsMissing, CredentialsReadError

HOSTS_FILE_NAME = "hosts.yml"
DEFAULT_HOST = "github.com"


@dataclass(frozen=True, slots=True)
class GitHubCredentials:
    user: str
    token: str

    def __repr__(self) -> str:
        return f"GitHubCredentials(user={self.user!r}, token='***')"


def gh_config_dir(config_dir: Path | None = None) -> Path:
    """Return the gh configuration directory.

    Same lookup order as gh: explicit dir (GH_CONFIG_DIR), then
    $XDG_CONFIG_HOME/gh, then ~/.config/gh.
    """

    if config_dir is not None:
        return config_dir
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gh"
    return Path.home() / ".config" / "gh"


def hosts_file_path(config_dir: Path | None = None) -> Path:
    return gh_config_dir(config_dir) / HOSTS_FILE_NAME


def load_gh_credentials(path: Path, host: str = DEFAULT_HOST) -> GitHubCredentials:
    """Read the login and OAuth token gh stored for `host`.

    Raises:
        CredentialsMissing: the hosts file does not exist.
        CredentialsReadError: the hosts file could not be read.
        CredentialsInvalid: the file has no usable entry for `host`.
    """

    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CredentialsMissing() from e
    except OSError as e:
        raise CredentialsReadError(f"failed to read {path}: {e}") from e

    try:
        # Scalars stay as written, so a numeric login is still a string.
        hosts = yaml.load(data, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise CredentialsInvalid() from e

    entry = hosts.get(host) if isinstance(hosts, dict) else None
    if not isinstance(entry, dict):
        raise CredentialsInvalid()

    user = entry.get("user")
    token = entry.get("oauth_token")
    if not isinstance(user, str) or not user or not isinstance(token, str) or not token:
        raise CredentialsInvalid()

    return GitHubCredentials(user=user, token=token)
