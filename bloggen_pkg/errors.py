"""
Exception types raised by the bloggen post pipeline.

File system failures carry the operation and the offending path so the
message is usable on its own. Highlighting failures never leave the
highlighter module; see ``bloggen_pkg.highlighter``.
"""


class BloggenError(Exception):
    """Base class for all bloggen errors."""


class FileSystemError(BloggenError):
    """A directory or file operation failed."""

    def __init__(self, operation, path, cause=None):
        self.operation = operation
        self.path = path
        self.cause = cause
        message = f"error {operation} {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class DirectoryNotFound(FileSystemError):
    """The directory being listed does not exist."""


class ParseError(BloggenError):
    """Markdown, front matter or HTML could not be parsed."""


class SerializeError(BloggenError):
    """A parsed HTML document could not be serialized back to text."""


class HighlightError(BloggenError):
    """A code block could not be syntax highlighted."""


class TemplateError(BloggenError):
    """A page template could not be loaded or rendered."""
