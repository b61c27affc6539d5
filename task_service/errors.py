"""Errors a client of the Task Service can see, and their JSON rendering."""

from fastapi.responses import JSONResponse


class TaskServiceError(Exception):
    """Base error; ``status_code`` is the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskServiceError):
    """A required field is missing, blank or malformed."""

    status_code = 400


class NotFoundError(TaskServiceError):
    """No task exists with the requested ID."""

    status_code = 404

    def __init__(self, message: str = "Task not found") -> None:
        super().__init__(message)


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build the ``{"error": message}`` body used for every failure."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)
