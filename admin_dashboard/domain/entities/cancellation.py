"""Cooperative cancellation passed through every backend call."""

from admin_dashboard.domain.exceptions import OperationCancelledError


class CancellationToken:
    """Set once a screen no longer wants the results of its pending requests."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason = ""

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str:
        return self._reason

    def cancel(self, reason: str = "Operation cancelled") -> None:
        self._cancelled = True
        self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelledError(self._reason)


def is_cancelled(token: CancellationToken | None) -> bool:
    return token is not None and token.cancelled
