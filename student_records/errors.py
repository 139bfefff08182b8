"""
Exceptions raised by the record store.
"""


class RecordError(Exception):
    """Base class for record store failures."""


class ValidationError(RecordError):
    """A field does not have the required shape."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class DuplicateKeyError(RecordError):
    """A student id or course code is already taken."""


class NotFoundError(RecordError):
    """The referenced student, course or enrollment does not exist."""


class DuplicateEnrollmentError(RecordError):
    """The student already holds an enrollment in that course."""


class StorageIOError(RecordError):
    """A collection file could not be read, written or replaced."""
