"""Filename template compilation and rendering.

Templates mix literal text with ``{token}`` placeholders drawn from a
fixed vocabulary, for example ``{y}{m}{D}_{t}_{T2}_{r}.{e}``. A template
is compiled once into a CompiledPattern and then rendered for each file
from that file's metadata record and original filename.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from exifnamer.core.datetime_utils import (
    hour_12,
    iso_week_number,
    parse_exif_timestamp,
    weekday_abbrev,
)
from exifnamer.core.string_utils import sanitize_path_component
from exifnamer.metadata.exceptions import (
    CompileError,
    MalformedTimestampError,
    MissingFieldError,
    NoImageNumberError,
)
from exifnamer.metadata.filename import FilenameParts, split_filename

logger = logging.getLogger(__name__)


class Token(Enum):
    """Placeholders understood in filename templates.

    The value is the text written between the braces.
    """

    YEAR_4 = "Y"
    YEAR_2 = "y"
    MONTH = "m"
    DAY = "D"
    TIME_COMPACT = "t"
    HOUR_24 = "H"
    HOUR_12 = "h"
    MINUTE = "M"
    SECOND = "S"
    WEEK_NUMBER = "W"
    WEEKDAY_ABBREV = "a"
    FILENAME_PREFIX = "f"
    IMAGE_NUMBER = "r"
    EXTENSION = "e"
    CAMERA_MODEL = "T2"

    @property
    def placeholder(self) -> str:
        """Template text for this token, braces included."""
        return "{" + self.value + "}"


TOKEN_DESCRIPTIONS: dict[Token, str] = {
    Token.YEAR_4: "4-digit year",
    Token.YEAR_2: "2-digit year",
    Token.MONTH: "month (01-12)",
    Token.DAY: "day of the month (01-31)",
    Token.TIME_COMPACT: "time as HHMMSS",
    Token.HOUR_24: "hour (00-23)",
    Token.HOUR_12: "hour (01-12)",
    Token.MINUTE: "minutes (00-59)",
    Token.SECOND: "seconds (00-59)",
    Token.WEEK_NUMBER: "ISO week number (01-53)",
    Token.WEEKDAY_ABBREV: "abbreviated weekday name (Mon-Sun)",
    Token.FILENAME_PREFIX: "filename prefix (e.g. IMG_)",
    Token.IMAGE_NUMBER: "image number (e.g. 1234)",
    Token.EXTENSION: "file extension, case preserved",
    Token.CAMERA_MODEL: "camera model name",
}

TIMESTAMP_TOKENS = frozenset(
    {
        Token.YEAR_4,
        Token.YEAR_2,
        Token.MONTH,
        Token.DAY,
        Token.TIME_COMPACT,
        Token.HOUR_24,
        Token.HOUR_12,
        Token.MINUTE,
        Token.SECOND,
        Token.WEEK_NUMBER,
        Token.WEEKDAY_ABBREV,
    }
)

FILENAME_TOKENS = frozenset(
    {Token.FILENAME_PREFIX, Token.IMAGE_NUMBER, Token.EXTENSION}
)

_TOKENS_BY_TEXT: dict[str, Token] = {token.value: token for token in Token}

# Tag names looked up verbatim, first match wins. The long names come from
# exiftool's default listing, the short ones from ``exiftool -s``.
TIMESTAMP_TAGS: tuple[str, ...] = (
    "Date/Time Original",
    "DateTimeOriginal",
    "Create Date",
    "CreateDate",
)
CAMERA_MODEL_TAGS: tuple[str, ...] = ("Camera Model Name", "Model")
FILENAME_TAGS: tuple[str, ...] = ("File Name", "FileName")


@dataclass(frozen=True)
class Literal:
    """Literal template text copied to the output unchanged."""

    text: str


Segment = Literal | Token


@dataclass(frozen=True)
class RenderContext:
    """Per-file input to rendering."""

    record: Mapping[str, str]
    original_filename: str = ""

    @property
    def filename(self) -> str:
        """Filename the filename tokens are derived from.

        The record's own file name tag takes precedence over the filename
        supplied by the caller.
        """
        for tag in FILENAME_TAGS:
            value = self.record.get(tag)
            if value:
                return value
        return self.original_filename


@dataclass(frozen=True)
class CompiledPattern:
    """A template split into literal and token segments.

    Immutable and free of per-render state, so one instance can be
    rendered for many files, including from several threads.
    """

    template: str
    segments: tuple[Segment, ...]

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Tokens used by the template, in order of first use."""
        seen = dict.fromkeys(s for s in self.segments if isinstance(s, Token))
        return tuple(seen)

    @property
    def uses_timestamp(self) -> bool:
        """True if any token needs the capture timestamp."""
        return any(s in TIMESTAMP_TOKENS for s in self.segments)

    @property
    def uses_filename(self) -> bool:
        """True if any token is derived from the original filename."""
        return any(s in FILENAME_TOKENS for s in self.segments)

    def render(self, context: RenderContext) -> str:
        """Render the filename for one file.

        Args:
            context: Metadata record and original filename of the file.

        Returns:
            New filename (no directory components).

        Raises:
            MissingFieldError: A required metadata tag is absent.
            MalformedTimestampError: The capture timestamp cannot be parsed.
            NoImageNumberError: {r} is used but the filename has no number.
        """
        timestamp = _capture_timestamp(context.record) if self.uses_timestamp else None
        parts = None
        if self.uses_filename:
            if not context.filename:
                raise MissingFieldError(FILENAME_TAGS)
            parts = split_filename(context.filename)

        pieces = []
        for segment in self.segments:
            if isinstance(segment, Literal):
                pieces.append(segment.text)
            else:
                pieces.append(_render_token(segment, context, timestamp, parts))
        return "".join(pieces)


def compile_pattern(template: str) -> CompiledPattern:
    """Compile a template string.

    Args:
        template: Template with ``{token}`` placeholders.

    Returns:
        CompiledPattern for the template.

    Raises:
        CompileError: If a ``{`` is never closed or encloses unknown text.
    """
    segments: list[Segment] = []
    literal: list[str] = []
    pos = 0

    while pos < len(template):
        open_pos = template.find("{", pos)
        if open_pos == -1:
            literal.append(template[pos:])
            break

        literal.append(template[pos:open_pos])
        close_pos = template.find("}", open_pos + 1)
        if close_pos == -1:
            raise CompileError(
                "Unterminated placeholder", template[open_pos:], open_pos
            )

        name = template[open_pos + 1 : close_pos]
        token = _TOKENS_BY_TEXT.get(name)
        if token is None:
            raise CompileError(
                "Unknown placeholder", template[open_pos : close_pos + 1], open_pos
            )

        if any(literal):
            segments.append(Literal("".join(literal)))
        literal = []
        segments.append(token)
        pos = close_pos + 1

    if any(literal):
        segments.append(Literal("".join(literal)))

    logger.debug("Compiled template %r into %d segments", template, len(segments))
    return CompiledPattern(template=template, segments=tuple(segments))


def render_filename(
    template: str | CompiledPattern,
    record: Mapping[str, str],
    original_filename: str = "",
) -> str:
    """Convenience function to compile (if needed) and render a template.

    Args:
        template: Template string or an already compiled pattern.
        record: Metadata record of the file.
        original_filename: The file's current name.

    Returns:
        New filename.
    """
    if isinstance(template, str):
        template = compile_pattern(template)
    return template.render(RenderContext(record, original_filename))


def _first_field(record: Mapping[str, str], tags: tuple[str, ...]) -> tuple[str, str]:
    for tag in tags:
        if tag in record:
            return tag, record[tag]
    raise MissingFieldError(tags)


def _capture_timestamp(record: Mapping[str, str]) -> datetime:
    tag, value = _first_field(record, TIMESTAMP_TAGS)
    try:
        return parse_exif_timestamp(value)
    except ValueError as e:
        raise MalformedTimestampError(tag, value) from e


def _render_token(
    token: Token,
    context: RenderContext,
    timestamp: datetime | None,
    parts: FilenameParts | None,
) -> str:
    if token in TIMESTAMP_TOKENS:
        assert timestamp is not None
        if token is Token.YEAR_4:
            return f"{timestamp.year:04d}"
        if token is Token.YEAR_2:
            return f"{timestamp.year % 100:02d}"
        if token is Token.MONTH:
            return f"{timestamp.month:02d}"
        if token is Token.DAY:
            return f"{timestamp.day:02d}"
        if token is Token.TIME_COMPACT:
            return f"{timestamp.hour:02d}{timestamp.minute:02d}{timestamp.second:02d}"
        if token is Token.HOUR_24:
            return f"{timestamp.hour:02d}"
        if token is Token.HOUR_12:
            return f"{hour_12(timestamp.hour):02d}"
        if token is Token.MINUTE:
            return f"{timestamp.minute:02d}"
        if token is Token.SECOND:
            return f"{timestamp.second:02d}"
        if token is Token.WEEK_NUMBER:
            return f"{iso_week_number(timestamp.date()):02d}"
        if token is Token.WEEKDAY_ABBREV:
            return weekday_abbrev(timestamp.date())

    if token in FILENAME_TOKENS:
        assert parts is not None
        if token is Token.FILENAME_PREFIX:
            return parts.prefix
        if token is Token.IMAGE_NUMBER:
            if parts.number is None:
                raise NoImageNumberError(parts.base_name)
            return parts.number
        if token is Token.EXTENSION:
            return parts.extension

    if token is Token.CAMERA_MODEL:
        _, model = _first_field(context.record, CAMERA_MODEL_TAGS)
        return sanitize_path_component(model)

    raise ValueError(f"Unhandled token: {token!r}")
