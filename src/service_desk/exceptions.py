"""
Exceptions raised while importing customer messages.

Per-message errors carry the short reason recorded in the batch result.
Only BatchDecodeError is surfaced to callers as a whole-batch failure.
"""


class MessageImportError(Exception):
    """Base class for message import failures."""

    reason = "import failed"

    def __init__(self, message: str = "", reason: str = ""):
        super().__init__(message or reason or self.reason)
        if reason:
            self.reason = reason


class EmptyDescriptionError(MessageImportError):
    """The message has no description to classify."""

    reason = "empty description"


class InvalidDateError(MessageImportError):
    """The message due date could not be parsed."""

    reason = "invalid date"


class InvalidPhoneError(MessageImportError):
    """The message phone number could not be parsed."""

    reason = "invalid phone"


class BatchDecodeError(MessageImportError):
    """The batch container itself could not be decoded."""

    reason = "malformed batch"
