# mathdown/markdown/errors.py
"""Exceptions raised by the rendering pipeline."""


class MarkdownError(Exception):
    """Base class for rendering failures."""

    def __init__(self, message, location=None):
        super().__init__(message)
        self.location = location

    def __str__(self):
        message = super().__str__()
        if self.location:
            return f"{message} (at {self.location})"
        return message


class AllocationError(MarkdownError):
    """
    A buffer or parser instance could not be constructed.

    The current render is aborted and no partial output is returned.
    """
