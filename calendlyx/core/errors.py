class CalendlyxError(Exception):
    """Base error carrying the HTTP status the API reports it with."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CalendlyxError):
    status_code = 404


class DuplicateNameError(CalendlyxError):
    status_code = 409


class InvalidStatusTransition(CalendlyxError):
    status_code = 409


class ValidationFailed(CalendlyxError):
    status_code = 422


class AuthenticationError(CalendlyxError):
    status_code = 401


class StorageError(CalendlyxError):
    """A database operation failed; the caller may simply try again."""

    status_code = 503
