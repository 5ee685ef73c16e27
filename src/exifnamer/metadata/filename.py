"""Filename-derived fields for template rendering.

Camera filenames follow a prefix/number/extension shape (``IMG_1234.JPG``,
``DSC00042.NEF``). The fields are found with a plain index scan over the
base name rather than a regular expression.
"""

from __future__ import annotations

from dataclasses import dataclass

# ASCII only; str.isdigit() also accepts superscripts and other scripts.
DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class FilenameParts:
    """Fields split out of a media file's base name."""

    base_name: str
    prefix: str  # Leading non-digit run of the stem ("IMG_")
    number: str | None  # Digit run right after the prefix ("1234")
    extension: str  # Text after the last ".", case preserved ("JPG")


def base_name(filename: str) -> str:
    """Strip any directory components from a filename.

    Both ``/`` and ``\\`` are treated as separators so that names taken
    from either platform's paths yield the same base name.

    Args:
        filename: Filename or path string.

    Returns:
        The final path component.
    """
    cut = max(filename.rfind("/"), filename.rfind("\\"))
    return filename[cut + 1 :]


def split_filename(filename: str) -> FilenameParts:
    """Split a filename into prefix, image number and extension.

    Examples:
        >>> split_filename("IMG_1234.JPG")
        FilenameParts(base_name='IMG_1234.JPG', prefix='IMG_', number='1234', extension='JPG')
        >>> split_filename("DSC00042.NEF").number
        '00042'
        >>> split_filename("20230704.jpg").prefix
        ''

    Args:
        filename: Filename or path string.

    Returns:
        FilenameParts. ``number`` is None when no digit run follows the
        prefix; ``extension`` is empty when the name has no ".".
    """
    name = base_name(filename)

    dot = name.rfind(".")
    if dot == -1:
        stem, extension = name, ""
    else:
        stem, extension = name[:dot], name[dot + 1 :]

    start = 0
    while start < len(stem) and stem[start] not in DIGITS:
        start += 1
    end = start
    while end < len(stem) and stem[end] in DIGITS:
        end += 1

    return FilenameParts(
        base_name=name,
        prefix=stem[:start],
        number=stem[start:end] or None,
        extension=extension,
    )
