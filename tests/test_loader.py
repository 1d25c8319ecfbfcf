import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest.mock import patch

from istrings.loader import load_file_contents


class ShortRead(io.BytesIO):
    def read(self, size=-1):
        return super().read(3)


class TestLoadFileContents(unittest.TestCase):
    def test_reads_whole_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            p = Path(temp_dir) / "blob.bin"
            p.write_bytes(b"\x00abc\xff")
            err = io.StringIO()
            with redirect_stderr(err):
                self.assertEqual(load_file_contents(p), b"\x00abc\xff")
            self.assertEqual(err.getvalue(), "")

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            p = Path(temp_dir) / "nope.bin"
            err = io.StringIO()
            with redirect_stderr(err):
                self.assertEqual(load_file_contents(p), b"")
            self.assertIn(f'Failed to open "{p}"', err.getvalue())
            self.assertIn("No such file or directory", err.getvalue())

    def test_empty_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            p = Path(temp_dir) / "empty.bin"
            p.write_bytes(b"")
            err = io.StringIO()
            with redirect_stderr(err):
                self.assertEqual(load_file_contents(p), b"")
            self.assertIn("Error getting length or empty file!", err.getvalue())

    def test_short_read_is_a_warning(self):
        err = io.StringIO()
        with patch("istrings.loader.open", return_value=ShortRead(b"0123456789"), create=True):
            with redirect_stderr(err):
                data = load_file_contents("fake.bin")
        self.assertEqual(data, b"012")
        self.assertIn('WARNING! Failed to read whole file "fake.bin".', err.getvalue())


if __name__ == "__main__":
    unittest.main()
