import io
import random
import unittest

from istrings.artifacts import (
    DEFAULT_MIN_SEQUENCE,
    accept_string,
    emit_strings,
    extract_candidates,
    letter_run_length,
    unique_accepted,
)
from istrings.classify import is_ascii, is_print


class TestExtractCandidates(unittest.TestCase):
    def test_splits_on_nul(self):
        self.assertEqual(extract_candidates(b"ab\x00cdefg\x00hij"), ["ab", "cdefg", "hij"])

    def test_newlines_and_high_bytes_are_separators(self):
        self.assertEqual(
            extract_candidates(b"one\ntwo\r\nthree\xffFOUR\x7ffive\tsix"),
            ["one", "two", "three", "FOUR", "five", "six"],
        )

    def test_empty_and_non_printable_input(self):
        self.assertEqual(extract_candidates(b""), [])
        self.assertEqual(extract_candidates(b"\x00\x01\x02\x80\xfe\n\r"), [])

    def test_trailing_run_is_flushed(self):
        self.assertEqual(extract_candidates(b"\x00\x00tail"), ["tail"])

    def test_no_empty_candidates_and_lossless(self):
        rng = random.Random(1234)
        for _ in range(50):
            blob = bytes(rng.choice(b"ab_ 1~\x00\n\r\x7f\x80\xff") for _ in range(rng.randint(0, 200)))
            candidates = extract_candidates(blob)
            self.assertNotIn("", candidates)

            # Put the separators back where they were.
            rebuilt = bytearray()
            it = iter(candidates)
            in_run = False
            for b in blob:
                if is_ascii(b) and is_print(b):
                    if not in_run:
                        rebuilt += next(it).encode("ascii")
                        in_run = True
                else:
                    rebuilt.append(b)
                    in_run = False
            self.assertIsNone(next(it, None))
            self.assertEqual(bytes(rebuilt), blob)


class TestAcceptance(unittest.TestCase):
    def test_letter_run_length(self):
        self.assertEqual(letter_run_length(""), 0)
        self.assertEqual(letter_run_length("12345"), 0)
        self.assertEqual(letter_run_length("ab"), 2)
        self.assertEqual(letter_run_length("cdefg"), 5)
        self.assertEqual(letter_run_length("foo_bar"), 7)
        self.assertEqual(letter_run_length("ab1abcd2abc"), 4)
        self.assertEqual(letter_run_length("  __  "), 2)

    def test_default_threshold(self):
        self.assertEqual(DEFAULT_MIN_SEQUENCE, 4)
        self.assertTrue(accept_string("%s: libc.so"))
        self.assertFalse(accept_string("abc 123 xyz"))

    def test_zero_and_negative_threshold_accept_everything(self):
        self.assertTrue(accept_string("12345", 0))
        self.assertTrue(accept_string("!!", -7))
        self.assertFalse(accept_string("12345", 4))

    def test_huge_threshold_rejects(self):
        self.assertFalse(accept_string("a" * 100, 10**9))


class TestUniqueAccepted(unittest.TestCase):
    def test_dedupes_in_first_occurrence_order(self):
        candidates = ["zeta", "alpha", "zeta", "xx", "beta", "alpha"]
        self.assertEqual(list(unique_accepted(candidates, 4)), ["zeta", "alpha", "beta"])

    def test_duplicate_lines(self):
        self.assertEqual(list(unique_accepted(["foo_bar", "foo_bar", "baz"], 4)), ["foo_bar"])

    def test_rejected_values_never_emitted(self):
        self.assertEqual(list(unique_accepted(["abc", "abc", "12"], 4)), [])

    def test_idempotent(self):
        candidates = extract_candidates(b"Hello\x00World\x00Hello\x0012\x00under_score")
        first = list(unique_accepted(candidates, 3))
        self.assertEqual(first, list(unique_accepted(candidates, 3)))
        self.assertEqual(first, ["Hello", "World", "under_score"])

    def test_accepts_generator_input(self):
        self.assertEqual(list(unique_accepted(iter(["word", "word"]), 4)), ["word"])


class TestEmitStrings(unittest.TestCase):
    def test_writes_one_line_per_value(self):
        out = io.StringIO()
        n = emit_strings(extract_candidates(b"ab\x00cdefg\x00hij"), out)
        self.assertEqual(n, 1)
        self.assertEqual(out.getvalue(), "cdefg\n")

    def test_threshold_zero_keeps_digits(self):
        out = io.StringIO()
        emit_strings(["12345", "12345", "ab"], out, 0)
        self.assertEqual(out.getvalue(), "12345\nab\n")

    def test_nothing_to_emit(self):
        out = io.StringIO()
        self.assertEqual(emit_strings([], out), 0)
        self.assertEqual(out.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
