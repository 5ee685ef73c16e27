"""Metadata parsing and filename templates.

- record: exiftool dump parsing into a MetadataRecord
- filename: prefix / image number / extension of camera filenames
- templates: template compilation and rendering
- exceptions: compile and per-file render errors
"""

from exifnamer.metadata.exceptions import (
    CompileError,
    ExifNamerError,
    MalformedTimestampError,
    MissingFieldError,
    NoImageNumberError,
    RenderError,
)
from exifnamer.metadata.filename import FilenameParts, split_filename
from exifnamer.metadata.record import (
    MetadataRecord,
    load_metadata_dump,
    parse_metadata_dump,
)
from exifnamer.metadata.templates import (
    CompiledPattern,
    Literal,
    RenderContext,
    Token,
    compile_pattern,
    render_filename,
)

__all__ = [
    "CompileError",
    "CompiledPattern",
    "ExifNamerError",
    "FilenameParts",
    "Literal",
    "MalformedTimestampError",
    "MetadataRecord",
    "MissingFieldError",
    "NoImageNumberError",
    "RenderContext",
    "RenderError",
    "Token",
    "compile_pattern",
    "load_metadata_dump",
    "parse_metadata_dump",
    "render_filename",
    "split_filename",
]
