"""Label value type and the remote label store capability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Label:
    name: str
    color: str


class LabelStore(Protocol):
    """Remote label operations needed by the reconciler.

    Implementations raise `gh_labels.errors.LabelStoreError` with a reason that
    is ready to show to the user.
    """

    def list_labels(self) -> list[Label]: ...

    def create_label(self, name: str, color: str) -> None: ...

    def update_label(self, name: str, color: str) -> None: ...

    def delete_label(self, name: str) -> None: ...
