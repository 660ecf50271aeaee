"""Small string and path helpers shared across the package."""

from __future__ import annotations

import os
import secrets
import string

_ALPHANUM = string.digits + string.ascii_lowercase + string.ascii_uppercase
_WHITESPACE = " \t\n\v\f\r"
_MAX_FILENAME = 255
_FORBIDDEN = set('?<>:*|"')
_SEPARATORS = "/\\"
_SPECIAL_TERMINATORS = ".:/\\"

# Device names (and the parent-directory marker) that may not start a path
# component, keyed by the upper-cased first character.  The flag says whether
# the name must be followed by a digit 1-9.
_SPECIAL_NAMES = {
    "A": (("AUX", False),),
    "C": (("CON", False), ("COM", True)),
    "L": (("LPT", True),),
    "N": (("NUL", False),),
    "P": (("PRN", False),),
    ".": (("..", False),),
}


def _upper_ascii(char: str) -> str:
    return char.upper() if "a" <= char <= "z" else char


def _replace_special(chars: list[str], offset: int, pattern: str,
                     with_number: bool, replacement: str) -> None:
    """Collapse a special name starting at ``offset`` into ``replacement``."""
    end = offset
    for expected in pattern:
        if end >= len(chars) or _upper_ascii(chars[end]) != expected:
            return
        end += 1
    if with_number:
        if end >= len(chars) or not "1" <= chars[end] <= "9":
            return
        end += 1
    if end >= len(chars) or chars[end] in _SPECIAL_TERMINATORS:
        del chars[offset + 1:end]
        chars[offset] = replacement


def _is_forbidden(char: str) -> bool:
    code = ord(char)
    return code < 0x20 or 0x80 <= code <= 0x9F or char in _FORBIDDEN


def sanitize_filename(name: str, replacement: str = "_") -> str:
    """Return ``name`` made safe to use as a relative file name.

    The name is cut to 255 characters; control and reserved characters,
    a leading path separator, parent-directory components and reserved
    device names (CON, PRN, AUX, NUL, COM1-9, LPT1-9) are replaced.
    """
    chars = list(name[:_MAX_FILENAME])
    check_special = True
    index = 0
    while index < len(chars):
        if check_special:
            check_special = False
            for pattern, with_number in _SPECIAL_NAMES.get(_upper_ascii(chars[index]), ()):
                _replace_special(chars, index, pattern, with_number, replacement)

        char = chars[index]
        if _is_forbidden(char):
            chars[index] = replacement
        elif char in _SEPARATORS:
            if index == 0:
                chars[index] = replacement
            else:
                check_special = True
        index += 1
    return "".join(chars)


def random_alphanum(size: int) -> str:
    """Return ``size`` random characters drawn from digits and ASCII letters."""
    if size < 0:
        raise ValueError("size must not be negative")
    return "".join(secrets.choice(_ALPHANUM) for _ in range(size))


def join_path(path: str, fname: str) -> str:
    """Join a directory and a file name with the platform separator."""
    return os.path.join(path, fname)


def string_equals(left: str, right: str, case_sensitive: bool = False) -> bool:
    """Compare two strings, ignoring case unless ``case_sensitive`` is set."""
    if len(left) != len(right):
        return False
    if case_sensitive:
        return left == right
    return all(a.upper() == b.upper() for a, b in zip(left, right))


def trim(value: str) -> str:
    """Return ``value`` without leading and trailing whitespace."""
    return value.strip(_WHITESPACE)