import re
from typing import Union

Byte = Union[int, str]

# Byte-wise form of `is_ascii(b) and is_print(b)`: space through "~". NUL, CR and LF fall outside it.
PRINTABLE_RUN_RE = re.compile(rb"[\x20-\x7e]+")


def _ord(b: Byte) -> int:
    return ord(b) if isinstance(b, str) else b


def is_ascii(b: Byte) -> bool:
    return 0 <= _ord(b) <= 127


def is_print(b: Byte) -> bool:
    return 32 <= _ord(b) <= 126


def is_letter(b: Byte) -> bool:
    c = _ord(b)
    return 65 <= c <= 90 or 97 <= c <= 122


def is_letter_class(b: Byte) -> bool:
    """Letters plus underscore, the characters a letter run is made of."""
    return is_letter(b) or _ord(b) == 95
