"""String utilities for building filenames.

Free-text metadata such as camera model names can contain characters
that are illegal in filenames or that would let a value escape its
directory. sanitize_path_component() applies an explicit deny list so the
result is the same on every platform.
"""

from __future__ import annotations

# Characters replaced with a dash: path separators and the drive/stream
# separator ":".
REPLACED_CHARACTERS: dict[str, str] = {
    "/": "-",
    "\\": "-",
    ":": "-",
}

# Characters removed outright (reserved on Windows, plus NUL).
REMOVED_CHARACTERS = frozenset('*?"<>|\0')


def _is_control(char: str) -> bool:
    return ord(char) < 0x20 or ord(char) == 0x7F


def sanitize_path_component(value: str) -> str:
    """Make a metadata value safe to embed in a single path component.

    - ``/``, ``\\`` and ``:`` become ``-``
    - ``* ? " < > |``, NUL and other ASCII control characters are removed
    - leading/trailing whitespace and dots are stripped
    - internal spaces are kept as they are

    An empty result is returned as-is; callers decide what an empty value
    means.

    Args:
        value: Raw metadata value.

    Returns:
        Sanitized string.

    Example:
        >>> sanitize_path_component("Canon EOS 5D Mark II/III")
        'Canon EOS 5D Mark II-III'
        >>> sanitize_path_component("../etc")
        '-etc'
    """
    chars = []
    for char in value:
        if char in REPLACED_CHARACTERS:
            chars.append(REPLACED_CHARACTERS[char])
        elif char in REMOVED_CHARACTERS or _is_control(char):
            continue
        else:
            chars.append(char)
    result = "".join(chars).strip()
    while result.startswith(".") or result.endswith("."):
        result = result.strip(".").strip()
    return result
