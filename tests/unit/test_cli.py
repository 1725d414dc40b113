import os
import unittest
from unittest.mock import patch

from detectmtu.cli import build_parser


class TestCli(unittest.TestCase):
    def test_no_arguments_gives_plain_run(self) -> None:
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("DETECTMTU_PING", None)
            args = build_parser().parse_args([])

        self.assertEqual(args.ping_bin, "ping")
        self.assertFalse(args.verbose)
        self.assertFalse(args.print_json)

    def test_build_parser_accepts_known_args(self) -> None:
        args = build_parser().parse_args(
            ["--ping-bin", "/usr/bin/ping", "--verbose", "--print-json"]
        )

        self.assertEqual(args.ping_bin, "/usr/bin/ping")
        self.assertTrue(args.verbose)
        self.assertTrue(args.print_json)

    def test_ping_bin_default_from_env(self) -> None:
        with patch.dict(os.environ, {"DETECTMTU_PING": "/opt/iputils/ping"}):
            args = build_parser().parse_args([])
        self.assertEqual(args.ping_bin, "/opt/iputils/ping")


if __name__ == "__main__":
    unittest.main(verbosity=2)
