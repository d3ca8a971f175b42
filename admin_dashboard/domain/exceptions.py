"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ApiError(Exception):
    """Base class for failures talking to the marketplace backend."""

    def __init__(self, message: str, *, method: str = "", url: str = ""):
        self.message = message
        self.method = method
        self.url = url
        super().__init__(message)


class ApiTransportError(ApiError):
    """Raised when no response was received (connection error, timeout)."""


class ApiHttpError(ApiError):
    """Raised when the backend answers with a non-2xx status.

    ``field_errors`` carries the backend's ``{errors: [{field, message}]}``
    entries verbatim when the body contained them.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        field_errors: dict[str, str] | None = None,
        method: str = "",
        url: str = "",
    ):
        self.status_code = status_code
        self.field_errors = field_errors or {}
        super().__init__(message, method=method, url=url)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class ResponseFormatError(ApiError):
    """Raised when a 2xx payload does not have a recognizable shape."""


class ValidationFailedError(Exception):
    """Raised when a form draft fails client-side validation."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(
            "Validation failed: " + ", ".join(f"{k}: {v}" for k, v in self.errors.items())
        )


class ConfirmationRequiredError(Exception):
    """Raised when a destructive action is dispatched without explicit confirmation."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"Deleting {entity_type} '{entity_id}' requires explicit confirmation"
        )


class MutationInFlightError(Exception):
    """Raised when the same mutation is already running for a record."""

    def __init__(self, record_key: str, kind: str):
        self.record_key = record_key
        self.kind = kind
        super().__init__(f"A '{kind}' request for '{record_key}' is already in progress")


class OperationCancelledError(Exception):
    """Raised when work is abandoned because its cancellation token fired."""
