"""Error kinds raised while syncing labels.

Fatal errors (config, credentials, listing) propagate to the CLI and abort the
run before any mutation. `MutationError` is never raised out of the reconciler;
it is collected per label so the rest of the run can continue.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gh_labels.reconcile import LabelAction


class LabelSyncError(Exception):
    """Base class for all gh-labels errors."""


class ConfigReadError(LabelSyncError):
    """The desired-state file could not be read or parsed."""


class MissingColor(LabelSyncError):
    """A label references a color name that is not defined."""

    def __init__(self, label: str, color: str) -> None:
        super().__init__(f"label {label!r}: missing color {color!r}")
        self.label = label
        self.color = color


class CredentialsMissing(LabelSyncError):
    """The gh hosts file does not exist."""

    def __init__(self, message: str = "gh tool is not installed or not configured") -> None:
        super().__init__(message)


class CredentialsInvalid(LabelSyncError):
    """The gh hosts file exists but has no usable entry for the host."""

    def __init__(self, message: str = "failed to detect configuration of gh tool") -> None:
        super().__init__(message)


class CredentialsReadError(LabelSyncError):
    """The gh hosts file exists but could not be read."""


class LabelStoreError(LabelSyncError):
    """A remote label call failed.

    `reason` is already normalized for display.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ListError(LabelSyncError):
    """Fetching the existing labels failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"failed to list labels: {reason}")
        self.reason = reason


class MutationError(LabelSyncError):
    """A single create/update/delete failed."""

    def __init__(self, action: LabelAction, reason: str) -> None:
        super().__init__(f"failed to {action.kind} label {action.name!r}: {reason}")
        self.action = action
        self.reason = reason
