"""istrings: a `strings` replacement that filters by letter runs."""

from .artifacts import (
    DEFAULT_MIN_SEQUENCE,
    accept_string,
    emit_strings,
    extract_candidates,
    letter_run_length,
    unique_accepted,
)
from .loader import load_file_contents

__all__ = [
    "DEFAULT_MIN_SEQUENCE",
    "accept_string",
    "emit_strings",
    "extract_candidates",
    "letter_run_length",
    "load_file_contents",
    "unique_accepted",
]
