"""Per-record lifecycle of dispatched mutations."""

from enum import Enum

from admin_dashboard.domain.exceptions import MutationInFlightError


class MutationState(str, Enum):
    """idle → in_flight → {success → refetching → idle} | {failed → idle}"""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCESS = "success"
    REFETCHING = "refetching"
    FAILED = "failed"


_TRANSITIONS: dict[MutationState, frozenset[MutationState]] = {
    MutationState.IDLE: frozenset({MutationState.IN_FLIGHT}),
    MutationState.IN_FLIGHT: frozenset({MutationState.SUCCESS, MutationState.FAILED}),
    MutationState.SUCCESS: frozenset({MutationState.REFETCHING, MutationState.IDLE}),
    MutationState.REFETCHING: frozenset({MutationState.IDLE}),
    MutationState.FAILED: frozenset({MutationState.IDLE}),
}


class MutationTracker:
    """Tracks one state per (record, kind) and rejects duplicate in-flight work."""

    def __init__(self) -> None:
        self._states: dict[tuple[str, str], MutationState] = {}

    def state(self, record_key: object, kind: str) -> MutationState:
        return self._states.get((str(record_key), kind), MutationState.IDLE)

    def is_busy(self, record_key: object, kind: str) -> bool:
        return self.state(record_key, kind) is not MutationState.IDLE

    def begin(self, record_key: object, kind: str) -> None:
        if self.is_busy(record_key, kind):
            raise MutationInFlightError(str(record_key), kind)
        self._move(record_key, kind, MutationState.IN_FLIGHT)

    def succeed(self, record_key: object, kind: str) -> None:
        self._move(record_key, kind, MutationState.SUCCESS)

    def refetching(self, record_key: object, kind: str) -> None:
        self._move(record_key, kind, MutationState.REFETCHING)

    def fail(self, record_key: object, kind: str) -> None:
        self._move(record_key, kind, MutationState.FAILED)
        self.settle(record_key, kind)

    def settle(self, record_key: object, kind: str) -> None:
        self._move(record_key, kind, MutationState.IDLE)
        self._states.pop((str(record_key), kind), None)

    def _move(self, record_key: object, kind: str, target: MutationState) -> None:
        current = self.state(record_key, kind)
        if target not in _TRANSITIONS[current]:
            raise ValueError(
                f"Illegal mutation transition {current.value} → {target.value} "
                f"for '{record_key}' ({kind})"
            )
        self._states[(str(record_key), kind)] = target
