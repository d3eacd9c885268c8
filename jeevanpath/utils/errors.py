# jeevanpath/utils/errors.py
"""
Domain exceptions with a machine-readable `kind`.
main.py turns these into {"success": false, "error": ..., "kind": ...} responses.
"""

from typing import Optional


class JeevanPathError(Exception):
    """Base class for errors the API reports to clients."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class NotFoundError(JeevanPathError):
    kind = "not_found"
    status_code = 404


class InvalidReferenceError(JeevanPathError):
    """A write pointed at a row that does not exist (e.g. provider → resource)."""

    kind = "invalid_reference"
    status_code = 400


class PersistenceError(JeevanPathError):
    kind = "persistence_failed"
    status_code = 500


class ConflictError(JeevanPathError):
    """The row exists but is in a state that does not allow the change (e.g. approving a rejected form)."""

    kind = "invalid_state"
    status_code = 409
