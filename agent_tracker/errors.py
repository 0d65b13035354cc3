"""
Error taxonomy for the tracker.

Each error carries the HTTP status it is reported with; the handler in
main.py renders them as {"error": message}.
"""


class TrackerError(Exception):
    """Base class for errors reported to the caller."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Missing or malformed input, or a business rule violation."""

    status_code = 422


class AuthenticationError(TrackerError):
    """No usable caller identity."""

    status_code = 401


class AuthorizationError(TrackerError):
    """Caller is not allowed to perform the operation."""

    status_code = 403


class NotFoundError(TrackerError):
    status_code = 404


class ConflictError(TrackerError):
    """Unique constraint violated by a direct insert."""

    status_code = 409


class StoreError(TrackerError):
    """Persistence failure. The message shown to callers stays opaque."""

    status_code = 500
