"""Domain errors."""


class DevToolboxError(Exception):
    """Base error."""

    code = "error"


class AccessDeniedError(DevToolboxError, ValueError):
    """Path escapes the workspace sandbox or targets a protected entry."""

    code = "access_denied"


class NotFoundError(DevToolboxError):
    """Operand does not exist."""

    code = "not_found"


class AlreadyExistsError(DevToolboxError):
    """Rename or move target collides with an existing entry."""

    code = "already_exists"


class MalformedDocumentError(DevToolboxError):
    """Structured text input is not well formed."""

    code = "malformed_document"


class IOFailureError(DevToolboxError):
    """Wrapped platform filesystem error."""

    code = "io_failure"
