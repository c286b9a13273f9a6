class AptSyncError(Exception):
    """Base class for errors raised by aptsync."""


class ParseError(AptSyncError, ValueError):
    """A sources list line could not be turned into an AptSource."""

    def __init__(self, message: str, line: str = "", lineno: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.lineno = lineno

    def __str__(self):
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}"
        return self.message


class UnsupportedOptionsError(ParseError):
    """Inline `[...]` options are present on the line."""


class MalformedLineError(ParseError):
    """The line has fewer than the four required fields."""


class UnsupportedTypeError(ParseError):
    """The repository type is something other than `deb`."""


class UnsupportedSchemeError(ParseError):
    """The repository URI is not http:// or https://."""


class ExtractionError(AptSyncError):
    """Decompressing an index file failed."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class DirectoryError(AptSyncError):
    """A directory needed for synchronization could not be created."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
