"""Domain errors raised by services and rendered by the API layer."""


class ClinicError(Exception):
    """Base class for errors reported to the caller."""

    status_code: int = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ClinicError):
    """Raised when a referenced record does not exist."""

    status_code = 404


class BusinessRuleViolation(ClinicError):
    """Raised when a booking or cancellation rule rejects the request."""

    status_code = 400


class ConflictError(BusinessRuleViolation):
    """Raised when a rule fails because of competing state in the store."""

    status_code = 409
