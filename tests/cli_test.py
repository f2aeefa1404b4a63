#!/usr/bin/env python
import io
import logging
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock
from wildcards.cli import build_parser, cards_from_args, filter_matches, main
from wildcards.cards import Cards, DEFAULT_CARDS

class CliTest(unittest.TestCase):
    def run_main(self, argv, stdin=None):
        out = io.StringIO()
        with redirect_stdout(out):
            if stdin is None:
                status = main(argv)
            else:
                with mock.patch("sys.stdin", io.StringIO(stdin)):
                    status = main(argv)
        return status, out.getvalue().splitlines()

    def test_prints_matching_texts(self):
        status, lines = self.run_main(["H?llo,*W*!", "Hello, World!", "Hi", "Hallo, World!"])
        self.assertEqual(status, 0)
        self.assertEqual(lines, ["Hello, World!", "Hallo, World!"])

    def test_no_match_exit_status(self):
        status, lines = self.run_main(["*.txt", "a.md", "b.py"])
        self.assertEqual(status, 1)
        self.assertEqual(lines, [])

    def test_reads_stdin(self):
        status, lines = self.run_main(["*.txt"], stdin="a.txt\r\nb.md\nc.txt\n")
        self.assertEqual(status, 0)
        self.assertEqual(lines, ["a.txt", "c.txt"])

    def test_casefold(self):
        self.assertEqual(self.run_main(["*.TXT", "a.txt"])[0], 1)
        self.assertEqual(self.run_main(["--casefold", "*.TXT", "a.txt"]), (0, ["a.txt"]))

    def test_no_sets(self):
        status, lines = self.run_main(["--no-sets", "[ab]", "[ab]", "a"])
        self.assertEqual(lines, ["[ab]"])

    def test_custom_cards(self):
        status, lines = self.run_main(["--anything", "%", "--single", "_", "a%_", "abc", "a*", "a"])
        self.assertEqual(lines, ["abc", "a*"])

    def test_card_must_be_one_character(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main(["--single", "ab", "a?c", "abc"])
        self.assertEqual(cm.exception.code, 2)

    def test_shared_symbol_warns(self):
        with self.assertLogs(level="WARNING") as cm:
            status, lines = self.run_main(["--single", "*", "a*", "ab"])
        self.assertEqual(lines, ["ab"])
        self.assertIn("share the same symbol", cm.output[0])

    def test_disabled_set_symbols_do_not_warn(self):
        with mock.patch("logging.warning") as warning:
            status, lines = self.run_main(["--no-sets", "--set-open", "?", "a?", "ab"])
        warning.assert_not_called()
        self.assertEqual(lines, ["ab"])

    def test_verbose_logs_debug(self):
        with mock.patch("logging.basicConfig") as basic_config:
            self.run_main(["--verbose", "a", "a"])
        basic_config.assert_called_once_with(level=logging.DEBUG)
        with mock.patch("logging.basicConfig") as basic_config:
            self.run_main(["a", "a"])
        basic_config.assert_called_once_with(level=logging.WARNING)

    def test_cards_from_args(self):
        args = build_parser().parse_args(["x"])
        self.assertEqual(cards_from_args(args), DEFAULT_CARDS)
        args = build_parser().parse_args(["--set-open", "<", "--set-close", ">", "--no-sets", "x"])
        self.assertEqual(cards_from_args(args), Cards(set_open="<", set_close=">", set_enabled=False))

    def test_filter_matches(self):
        self.assertEqual(filter_matches(["a", "B", "c"], "[ab]", DEFAULT_CARDS), ["a"])
        self.assertEqual(filter_matches(["a", "B", "c"], "[ab]", DEFAULT_CARDS, casefold=True), ["a", "B"])

if __name__ == "__main__":
    unittest.main()
