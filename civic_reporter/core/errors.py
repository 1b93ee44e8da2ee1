"""Issue store error taxonomy."""

from __future__ import annotations

from fastapi import HTTPException, status


class IssueError(Exception):
    """Base class for errors raised by the issue store and upload handling."""


class ValidationError(IssueError):
    """Bad or missing required input."""


class NotFoundError(IssueError):
    """No issue exists with the requested id."""

    def __init__(self, issue_id: int):
        super().__init__("Issue not found")
        self.issue_id = issue_id


class StorageError(IssueError):
    """The underlying database operation failed."""


class UploadError(IssueError):
    """Uploaded file was rejected."""

    def __init__(self, message: str, too_large: bool = False):
        super().__init__(message)
        self.too_large = too_large


def to_http_exception(exc: IssueError) -> HTTPException:
    """Map an issue store error onto the HTTP status the API reports."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, UploadError):
        code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if exc.too_large else status.HTTP_400_BAD_REQUEST
        return HTTPException(status_code=code, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    # StorageError: internal admin tool, the database message is passed through
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
