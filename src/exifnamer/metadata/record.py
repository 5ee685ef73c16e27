"""Metadata dump parsing.

exiftool lists one tag per line, padding tag names to a fixed column
before the colon::

    File Name                       : IMG_1234.JPG
    Date/Time Original              : 2023:07:04 15:08:09
    Camera Model Name               : Canon EOS 5D

This module turns such a listing into an immutable MetadataRecord.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

# Optional whitespace, a colon, then at least one whitespace character.
# Values such as "2023:07:04 15:08:09" keep their inner colons because
# those are followed by digits.
SEPARATOR_PATTERN = re.compile(r"\s*:\s+")


class MetadataRecord(Mapping[str, str]):
    """Read-only mapping of tag name to tag value for one media file.

    Tag names are case-sensitive and kept exactly as the tool emitted them.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields: dict[str, str] = dict(fields or {})

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"MetadataRecord({self._fields!r})"

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_fields"):
            raise AttributeError("MetadataRecord is immutable")
        super().__setattr__(name, value)

    def __hash__(self) -> int:
        return hash(frozenset(self._fields.items()))


def split_dump_line(line: str) -> tuple[str, str] | None:
    """Split one dump line into its tag and value.

    Args:
        line: A single line of the dump.

    Returns:
        Tuple of (tag, value) with surrounding whitespace removed, or None
        if the line has no separator.
    """
    match = SEPARATOR_PATTERN.search(line)
    if match is None:
        return None
    return line[: match.start()].strip(), line[match.end() :].strip()


def parse_metadata_dump(dump: str | Iterable[str]) -> MetadataRecord:
    """Parse a metadata dump into a MetadataRecord.

    Lines without a separator (blank lines, ``======== file`` headers and
    other preambles) are skipped. When a tag repeats, the later value wins.

    Args:
        dump: The whole dump as one string, or an iterable of lines.

    Returns:
        MetadataRecord with one entry per distinct tag. Empty if the dump
        contains no tag lines.
    """
    lines = dump.splitlines() if isinstance(dump, str) else dump

    fields: dict[str, str] = {}
    skipped = 0
    for line in lines:
        parts = split_dump_line(line.rstrip("\r\n"))
        if parts is None:
            skipped += 1
            continue
        tag, value = parts
        fields[tag] = value

    logger.debug("Parsed %d metadata fields (%d lines skipped)", len(fields), skipped)
    return MetadataRecord(fields)


def load_metadata_dump(path: Path) -> MetadataRecord:
    """Read and parse a metadata dump file.

    Args:
        path: Path to a UTF-8 text dump.

    Returns:
        Parsed MetadataRecord.

    Raises:
        OSError: If the file cannot be read.
    """
    return parse_metadata_dump(path.read_text(encoding="utf-8", errors="replace"))
