"""Reconcile a repository's labels against the desired state.

The run is split in two steps:

1. `plan_changes` partitions existing vs desired labels into an ordered list of
   actions. It is pure and does not touch the desired mapping.
2. `apply_plan` executes the actions one by one against a `LabelStore`.

Each mutation is isolated: a failure is logged and recorded, then the next
action runs. The overall result fails iff at least one mutation failed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from gh_labels.errors import LabelStoreError, ListError, MutationError
from gh_labels.store import Label, LabelStore

logger = logging.getLogger(__name__)

ActionKind = Literal["ignore", "remove", "update", "exists", "create"]

MUTATING_KINDS: frozenset[str] = frozenset({"remove", "update", "create"})


@dataclass(frozen=True, slots=True)
class LabelAction:
    kind: ActionKind
    name: str
    color: str | None = None
    old_color: str | None = None

    @property
    def mutates(self) -> bool:
        return self.kind in MUTATING_KINDS


@dataclass(slots=True)
class ReconcileResult:
    applied: list[LabelAction] = field(default_factory=list)
    skipped: list[LabelAction] = field(default_factory=list)
    failures: list[MutationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def last_error(self) -> MutationError | None:
        return self.failures[-1] if self.failures else None


def plan_changes(
    existing: Sequence[Label],
    desired: Mapping[str, str],
    cleanup: bool,
) -> list[LabelAction]:
    """Compute the actions that converge `existing` to `desired`.

    Existing labels are handled first, in fetch order. Labels that only exist in
    `desired` follow as creates.
    """

    actions: list[LabelAction] = []
    seen: set[str] = set()

    for label in existing:
        seen.add(label.name)
        want = desired.get(label.name)
        if want is None:
            kind: ActionKind = "remove" if cleanup else "ignore"
            actions.append(LabelAction(kind=kind, name=label.name, old_color=label.color))
        elif want != label.color:
            actions.append(
                LabelAction(kind="update", name=label.name, color=want, old_color=label.color)
            )
        else:
            actions.append(LabelAction(kind="exists", name=label.name, old_color=label.color))

    for name, color in desired.items():
        if name not in seen:
            actions.append(LabelAction(kind="create", name=name, color=color))

    return actions


def _apply_one(store: LabelStore, action: LabelAction) -> None:
    if action.kind == "remove":
        store.delete_label(action.name)
    elif action.kind == "update":
        if action.color is None:
            raise ValueError(f"Update of {action.name!r} has no target color")
        store.update_label(action.name, action.color)
    elif action.kind == "create":
        if action.color is None:
            raise ValueError(f"Create of {action.name!r} has no color")
        store.create_label(action.name, action.color)
    else:
        raise ValueError(f"Action {action.kind!r} does not mutate")


def _log_extra(action: LabelAction) -> dict[str, str]:
    extra = {"label": action.name}
    if action.color is not None:
        extra["color"] = action.color
    if action.kind == "update" and action.old_color is not None:
        extra["old_color"] = action.old_color
    return extra


def apply_plan(store: LabelStore, plan: Sequence[LabelAction]) -> ReconcileResult:
    """Run every action in order; never stops on a failed mutation."""

    result = ReconcileResult()
    for action in plan:
        if not action.mutates:
            logger.debug(action.kind, extra={"label": action.name})
            result.skipped.append(action)
            continue

        try:
            _apply_one(store, action)
        except LabelStoreError as e:
            failure = MutationError(action, e.reason)
            logger.warning(
                f"failed to {action.kind}",
                extra={**_log_extra(action), "err": e.reason},
            )
            result.failures.append(failure)
            continue

        logger.info(action.kind, extra=_log_extra(action))
        result.applied.append(action)

    return result


def reconcile(
    store: LabelStore,
    existing: Sequence[Label],
    desired: Mapping[str, str],
    cleanup: bool,
) -> ReconcileResult:
    return apply_plan(store, plan_changes(existing, desired, cleanup))


def sync_labels(store: LabelStore, desired: Mapping[str, str], cleanup: bool) -> ReconcileResult:
    """List the current labels, then reconcile them against `desired`.

    Raises:
        ListError: if the listing failed; nothing has been mutated.
    """

    try:
        existing = store.list_labels()
    except LabelStoreError as e:
        logger.error("failed to list labels", extra={"err": e.reason})
        raise ListError(e.reason) from e

    logger.debug(
        "Fetched existing labels",
        extra={"existing": len(existing), "desired": len(desired)},
    )
    result = reconcile(store, existing, desired, cleanup)
    if not result.ok:
        logger.debug("Some label changes failed", extra={"failed": len(result.failures)})
    return result
