"""Turn backend failures into the one-line messages shown in a screen's error banner."""

from admin_dashboard.domain.exceptions import (
    ApiError,
    ApiHttpError,
    ApiTransportError,
)


def describe_error(exc: Exception, action: str) -> str:
    """e.g. ``describe_error(err, "Failed to fetch orders")``."""
    if isinstance(exc, ApiTransportError):
        return f"{action}. {exc.message}"
    if isinstance(exc, ApiHttpError):
        return f"{action}. Server returned {exc.status_code}: {exc.message}"
    if isinstance(exc, ApiError):
        return f"{action}. {exc.message}"
    return f"{action}. {exc}"
