"""Failure kinds raised by the todo service.

Each kind carries the Connect error code and HTTP status the transport
layer uses when rendering it.
"""


class TodoError(Exception):
    """Base class for failures surfaced by service operations."""

    code = "unknown"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Render as a Connect error envelope."""
        return {"code": self.code, "message": self.message}


class InvalidArgumentError(TodoError):
    """Malformed or out-of-policy input."""

    code = "invalid_argument"
    http_status = 400


class NotFoundError(TodoError):
    """Referenced task does not exist."""

    code = "not_found"
    http_status = 404


class InternalError(TodoError):
    """An invariant inside the service was violated."""

    code = "internal"
    http_status = 500


class DuplicateTaskError(KeyError):
    """Raised by the store when a task id is already taken."""


ERRORS_BY_CODE: dict[str, type[TodoError]] = {
    cls.code: cls for cls in (InvalidArgumentError, NotFoundError, InternalError)
}
