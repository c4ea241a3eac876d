"""
Error taxonomy.

Input problems are caught before any request is made, transport problems
abort the action that hit them, and malformed snapshots abort a render.
None of them is fatal to a session.
"""

from typing import Optional


class ArborviewError(Exception):
    """Base class for every error arborview raises on purpose."""


class InputValidationError(ArborviewError):
    """
    Raised when an action cannot start because of what the user supplied.

    Attributes:
        message: Warning shown to the user.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NoTreeSelected(InputValidationError):
    def __init__(self):
        super().__init__("Please select a tree first")


class InvalidValue(InputValidationError):
    def __init__(self, raw: object):
        self.raw = raw
        super().__init__("Please enter a valid number")


class TransportFailure(ArborviewError):
    """
    Raised when a call to the tree service does not produce a usable answer.

    Attributes:
        message: Human-readable description of the failed call.
        status_code: HTTP status, when a response arrived at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(f"{message} (HTTP {status_code})" if status_code else message)


class MalformedSnapshot(ArborviewError):
    """
    Raised when a snapshot cannot be turned into a tree.

    Attributes:
        message: What was wrong.
        index: The offending child reference, if any.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        self.message = message
        self.index = index
        super().__init__(message)
