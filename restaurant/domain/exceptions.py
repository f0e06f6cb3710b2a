"""Application error taxonomy.

Every error a caller is allowed to see is a subclass of ``AppError``. The
API layer maps ``status_code`` straight onto the HTTP response, so services
only ever raise these and never build responses themselves.
"""

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."


class AppError(Exception):
    """Base class for caller-visible errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Client-supplied data violates a field constraint."""

    status_code = 422


class NotFoundError(AppError):
    """A referenced entity id does not exist."""

    status_code = 404


class ConflictError(AppError):
    """A business rule or a dependency between entities was violated."""

    status_code = 400


class TransitionRejected(ConflictError):
    """The requested order status change is not allowed."""


class TransientError(AppError):
    """Infrastructure failure that outlived every retry.

    The message is always the generic one; details go to the log only.
    """

    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
