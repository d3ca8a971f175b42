"""Optimistic local mutation with explicit confirm/revert transitions."""

from enum import Enum
from typing import Any

_MISSING = object()


class OptimisticState(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"


class OptimisticUpdate:
    """Sets one field on an in-memory record before the server confirms it.

    pending → applied → confirmed | reverted. Reverting restores the exact
    previous value (or removes the key if it was absent).
    """

    def __init__(self, target: dict[str, Any], field: str, value: Any):
        self._target = target
        self.field = field
        self.value = value
        self._previous: Any = _MISSING
        self.state = OptimisticState.PENDING

    @property
    def previous(self) -> Any:
        return None if self._previous is _MISSING else self._previous

    def apply(self) -> None:
        if self.state is not OptimisticState.PENDING:
            raise ValueError(f"Cannot apply an update in state '{self.state.value}'")
        self._previous = self._target.get(self.field, _MISSING)
        self._target[self.field] = self.value
        self.state = OptimisticState.APPLIED

    def confirm(self) -> None:
        if self.state is not OptimisticState.APPLIED:
            raise ValueError(f"Cannot confirm an update in state '{self.state.value}'")
        self.state = OptimisticState.CONFIRMED

    def revert(self) -> None:
        if self.state is not OptimisticState.APPLIED:
            raise ValueError(f"Cannot revert an update in state '{self.state.value}'")
        if self._previous is _MISSING:
            self._target.pop(self.field, None)
        else:
            self._target[self.field] = self._previous
        self.state = OptimisticState.REVERTED
