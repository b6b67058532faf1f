"""Exceptions raised while rebuilding project structure."""


class ExtractorError(Exception):
    """Base exception for extraction failures."""

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class MalformedProjectError(ExtractorError):
    """The project description does not have the expected object layout."""


class UnbalancedScriptError(ExtractorError):
    """A scripts section never closes, or closes more scopes than it opened."""


class TreeAttachmentError(ExtractorError):
    """A node was attached under a parent that is not part of the tree."""
