import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from intrusion_sim.cli import build_parser, main, make_config
from intrusion_sim.intrusion import Config


def run_cli(*argv: str) -> tuple[int, str, str]:
    stdout, stderr = io.StringIO(), io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        try:
            status = main(list(argv))
        except SystemExit as e:
            status = e.code  # type: ignore[assignment]
    return status, stdout.getvalue(), stderr.getvalue()


class CommandLineTests(unittest.TestCase):
    def test_wrong_argument_count(self) -> None:
        for argv in (), ("4",), ("4", "100"), ("4", "100", "0", "9"):
            status, _, stderr = run_cli(*argv)
            self.assertEqual(status, 1)
            self.assertIn("usage: simulator", stderr)

    def test_not_a_number(self) -> None:
        status, _, stderr = run_cli("four", "100", "0")
        self.assertEqual(status, 1)
        self.assertIn("usage:", stderr)

    def test_invalid_configuration(self) -> None:
        status, stdout, stderr = run_cli("1", "100", "0")
        self.assertEqual(status, 1)
        self.assertEqual(stdout, "")
        self.assertIn("at least 2 computers", stderr)

    def test_attacker_wins(self) -> None:
        status, stdout, _ = run_cli("4", "100", "0", "--seed", "42")
        self.assertEqual(status, 0)
        lines = stdout.splitlines()
        self.assertEqual(lines[0], "STARTING SIMULATION")
        self.assertRegex(lines[1], r"^Deploy_Attack\(1000, -1, \d\)$")
        self.assertEqual(lines[-1], "Attacker wins")

    def test_draw(self) -> None:
        status, stdout, _ = run_cli("4", "0", "0", "--seed", "1", "--max-t", "10s")
        self.assertEqual(status, 0)
        self.assertEqual(stdout.splitlines()[-1], "Draw")

    def test_make_config(self) -> None:
        args = build_parser().parse_args(["6", "40", "20", "--seed", "3", "--max-t", "1 day"])
        self.assertEqual(make_config(args), Config(6, 40, 20, 86_400_000, 3))
        args = build_parser().parse_args(["6", "40", "20"])
        self.assertEqual(make_config(args), Config(6, 40, 20))


if __name__ == "__main__":
    unittest.main()
