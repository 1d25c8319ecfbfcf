import os
import sys
from pathlib import Path
from typing import Union


def load_file_contents(path: Union[str, Path]) -> bytes:
    """Read a whole file into memory.

    Problems are reported on stderr. An unreadable or empty file yields b"";
    a short read is only a warning and whatever was read is returned.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        print(f'Failed to open "{path}": {os.strerror(e.errno) if e.errno else e}', file=sys.stderr)
        return b""

    with f:
        try:
            length = f.seek(0, os.SEEK_END)
            f.seek(0, os.SEEK_SET)
        except OSError:
            length = -1
        if length <= 0:
            print("Error getting length or empty file!", file=sys.stderr)
            return b""

        try:
            data = f.read(length)
        except OSError as e:
            print(f'Failed to open "{path}": {os.strerror(e.errno) if e.errno else e}', file=sys.stderr)
            return b""

    if len(data) != length:
        print(f'WARNING! Failed to read whole file "{path}".', file=sys.stderr)
    return data
