"""Exceptions raised while parsing templates and rendering filenames.

CompileError signals a configuration problem and should abort the whole
operation. RenderError and its subclasses are scoped to a single file;
callers decide whether to skip that file or stop the batch.
"""


class ExifNamerError(Exception):
    """Base exception for exifnamer errors."""

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class CompileError(ExifNamerError):
    """Raised when a filename template cannot be compiled.

    Covers unterminated placeholders (a ``{`` with no closing ``}``) and
    placeholders that name no known token.
    """

    def __init__(self, message: str, text: str, position: int) -> None:
        """Initialize compile error.

        Args:
            message: Human-readable error description.
            text: The offending template text (e.g. ``{zzz}``).
            position: 0-based offset of the offending text in the template.
        """
        self.text = text
        self.position = position
        super().__init__(f"{message} at position {position}: {text!r}")


class RenderError(ExifNamerError):
    """Base exception for per-file rendering failures."""


class MissingFieldError(RenderError):
    """Raised when a token needs a metadata field absent from the record."""

    def __init__(self, field: str | tuple[str, ...]) -> None:
        """Initialize missing field error.

        Args:
            field: Tag name, or the tag names tried in order.
        """
        if isinstance(field, str):
            field = (field,)
        self.field = field
        names = ", ".join(repr(name) for name in field)
        super().__init__(f"Metadata field not found: {names}")


class MalformedTimestampError(RenderError):
    """Raised when the capture timestamp field cannot be parsed."""

    def __init__(self, field: str, value: str) -> None:
        """Initialize malformed timestamp error.

        Args:
            field: Tag name the value was read from.
            value: The raw timestamp value.
        """
        self.field = field
        self.value = value
        super().__init__(f"Malformed timestamp in {field!r}: {value!r}")


class NoImageNumberError(RenderError):
    """Raised when the filename has no digit run after its prefix."""

    def __init__(self, filename: str) -> None:
        """Initialize no image number error.

        Args:
            filename: Base name that was scanned.
        """
        self.filename = filename
        super().__init__(f"No image number in filename: {filename!r}")
