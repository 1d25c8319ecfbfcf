from typing import Dict, Iterable, Iterator, List, TextIO

from .classify import PRINTABLE_RUN_RE, is_letter_class

DEFAULT_MIN_SEQUENCE = 4


def extract_candidates(blob: bytes) -> List[str]:
    """Split a binary blob into maximal runs of printable ASCII, in file order."""
    return [m.group(0).decode("ascii") for m in PRINTABLE_RUN_RE.finditer(blob)]


def letter_run_length(s: str) -> int:
    """Length of the longest run of letters/underscore in `s` (0 if none)."""
    longest = 0
    current = 0
    for ch in s:
        if not is_letter_class(ch):
            longest = max(longest, current)
            current = 0
            continue
        current += 1
    return max(longest, current)


def accept_string(s: str, min_sequence: int = DEFAULT_MIN_SEQUENCE) -> bool:
    return letter_run_length(s) >= min_sequence


def unique_accepted(candidates: Iterable[str], min_sequence: int = DEFAULT_MIN_SEQUENCE) -> Iterator[str]:
    """Yield accepted candidates once each, in first-occurrence order.

    The flag map is seeded with every distinct value before any acceptance
    decision is made; the second walk over the original sequence keeps file
    order while the flags stop repeats.
    """
    candidates = list(candidates)
    emitted: Dict[str, bool] = {}
    for c in candidates:
        emitted.setdefault(c, False)

    for c in candidates:
        if accept_string(c, min_sequence) and not emitted[c]:
            emitted[c] = True
            yield c


def emit_strings(candidates: Iterable[str], out: TextIO, min_sequence: int = DEFAULT_MIN_SEQUENCE) -> int:
    """Write each accepted distinct candidate as one line to `out`. Returns the line count."""
    n = 0
    for s in unique_accepted(candidates, min_sequence):
        out.write(s + "\n")
        n += 1
    return n
