#!/usr/bin/env python

import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import NoReturn

from .config import load_config, parse_max_time
from .intrusion import Config, InvalidConfiguration, Simulator


class UsageParser(ArgumentParser):
    """Argument parser that exits with status 1 (rather than 2) on bad usage."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> UsageParser:
    parser: UsageParser = UsageParser(
        prog="simulator",
        description="Simulate an attacker spreading through a network while a sysadmin repairs it.",
    )
    parser.add_argument("num_computers", type=int)
    parser.add_argument("percent_success", type=int, help="probability that an attack succeeds (%%)")
    parser.add_argument("percent_detect", type=int, help="probability that the IDS detects an attack (%%)")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--max-t", help="simulated time limit, e.g. '100 days' (default: 100 days)")
    parser.add_argument("--config", help="INI file providing defaults for the seed and time limit")
    parser.add_argument("--verbose", action="store_true")
    return parser


def make_config(args: Namespace) -> Config:
    max_time: int | None = parse_max_time(args.max_t) if args.max_t is not None else None
    if args.config is not None:
        return load_config(
            args.config,
            num_computers=args.num_computers,
            attack_success_probability=args.percent_success,
            detect_probability=args.percent_detect,
            max_time=max_time,
            seed=args.seed,
        )
    if max_time is None:
        return Config(args.num_computers, args.percent_success, args.percent_detect, seed=args.seed)
    return Config(args.num_computers, args.percent_success, args.percent_detect, max_time, args.seed)


def main(argv: list[str] | None = None) -> int:
    args: Namespace = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            format="{levelname}:{message}", level=logging.INFO, style="{"
        )  # output info on stderr

    try:
        config: Config = make_config(args)
    except InvalidConfiguration as e:
        print(f"simulator: error: {e}", file=sys.stderr)
        return 1

    Simulator(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
