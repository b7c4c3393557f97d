# /app/core/errors.py

"""
The error taxonomy shared by every service in the application.

Each error carries a machine-readable `kind` so that callers (and the HTTP
layer in `app.main`) can tell failures apart without parsing messages.
Services raise these and never swallow them; retrying is always the
caller's decision.
"""


class SchoolCoreError(Exception):
    """Base class for all domain errors raised by the service layer."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class NotFoundError(SchoolCoreError):
    """A referenced entity or link does not exist."""

    kind = "not_found"


class ConflictError(SchoolCoreError):
    """A uniqueness invariant would be violated."""

    kind = "conflict"


class DuplicateLinkError(ConflictError):
    """A link between the same two entities already exists, whatever its status."""

    kind = "duplicate_link"


class InvalidTransitionError(SchoolCoreError):
    """The requested status change is not allowed from the current state."""

    kind = "invalid_transition"


class OutOfRangeError(SchoolCoreError):
    """A numeric value falls outside its permitted bounds."""

    kind = "out_of_range"


class EmptySubmissionError(SchoolCoreError):
    """A submission carries neither text content nor attachments."""

    kind = "empty_submission"


class AlreadyPastDueError(SchoolCoreError):
    """The assignment is past due and does not accept late submissions."""

    kind = "past_due"


class PermissionDeniedError(SchoolCoreError):
    """The acting user's role does not allow the operation."""

    kind = "permission_denied"
