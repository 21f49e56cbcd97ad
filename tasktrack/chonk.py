"""Length-prefixed field encoding for task-tracker.

A "chonk" is a single string field written as its character count in
decimal, a colon, and then the payload itself::

    chonkify("buy milk")  ->  "8:buy milk"

Because the reader always knows how many characters to consume, the payload
may contain anything (digits, colons, newlines) and several chonks can be
concatenated with no separator between them.
"""

from typing import Optional, Tuple

SEPARATOR = ":"


def chonkify(s: str) -> str:
    """Encode a string as a self-delimiting field.

    Args:
        s: Arbitrary text to encode

    Returns:
        The encoded field
    """
    return f"{len(s)}{SEPARATOR}{s}"


def dechonkify(s: str, start: int) -> Optional[Tuple[str, int]]:
    """Decode one field starting at ``start`` within ``s``.

    Args:
        s: Text containing one or more encoded fields
        start: Index at which the field to decode begins

    Returns:
        Tuple of (decoded payload, index just past the field), or None if
        ``start`` is out of bounds, the length prefix is malformed, or the
        declared payload runs past the end of ``s``
    """
    if start < 0 or start >= len(s):
        return None

    sep = s.find(SEPARATOR, start)
    if sep == -1:
        return None

    # str.isdigit() also accepts superscripts and other unicode digits
    prefix = s[start:sep]
    if not prefix or not (prefix.isascii() and prefix.isdigit()):
        return None

    begin = sep + 1
    end = begin + int(prefix)
    if end > len(s):
        return None

    return s[begin:end], end
