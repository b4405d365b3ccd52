"""Reading simulation parameters from INI files.

A configuration file looks like this; every value is optional as long as the missing ones are given as overrides
(e.g., from the command line):

    [simulation]
    computers = 10
    attack_success = 50
    detect = 30
    max_time = 100 days
    seed = 42

    [sweep]
    attack_success = 25, 50, 75
    detect = 0, 25, 50, 75, 100
    runs = 100
"""

from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass
from typing import Any, Callable

from humanfriendly import InvalidTimespan, parse_timespan

from .intrusion import Config, InvalidConfiguration


def parse_max_time(text: str) -> int:
    """Parse a human-friendly timespan ("100 days", "2h") into milliseconds."""

    try:
        return int(parse_timespan(text) * 1000)
    except InvalidTimespan as e:
        raise InvalidConfiguration(f"invalid timespan: {text!r}") from e


def parse_int_list(text: str) -> list[int]:
    return [int(item) for item in text.split(",") if item.strip()]


# config file key -> (Config field, parsing function)
SIMULATION_KEYS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "computers": ("num_computers", int),
    "attack_success": ("attack_success_probability", int),
    "detect": ("detect_probability", int),
    "max_time": ("max_time", parse_max_time),
    "seed": ("seed", int),
}

REQUIRED_FIELDS: tuple[str, ...] = ("num_computers", "attack_success_probability", "detect_probability")


@dataclass(frozen=True)
class Sweep:
    """The grid of parameters explored by a sweep, and how many runs to do for each point."""

    attack_success: list[int]
    detect: list[int]
    runs: int = 100


def read_parser(path: str) -> ConfigParser:
    config: ConfigParser = ConfigParser()
    if not config.read(path):
        raise InvalidConfiguration(f"cannot read configuration file {path!r}")
    return config


def parse_section(section: SectionProxy, keys: dict[str, tuple[str, Callable[[str], Any]]]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, (name, parse) in keys.items():
        if key not in section:
            continue
        try:
            values[name] = parse(section[key])
        except ValueError as e:
            raise InvalidConfiguration(f"[{section.name}] {key}: invalid value {section[key]!r}") from e
    return values


def load_config(path: str, **overrides: Any) -> Config:
    """Build a `Config` from the [simulation] section of `path`.

    Keyword arguments named after `Config` fields take precedence over the file, unless they are None.
    """

    parser: ConfigParser = read_parser(path)
    values: dict[str, Any] = {}
    if parser.has_section("simulation"):
        values = parse_section(parser["simulation"], SIMULATION_KEYS)
    values.update({name: value for name, value in overrides.items() if value is not None})

    missing: list[str] = [name for name in REQUIRED_FIELDS if name not in values]
    if missing:
        raise InvalidConfiguration(f"{path}: missing {', '.join(missing)}")
    try:
        return Config(**values)
    except TypeError as e:  # unknown override name
        raise InvalidConfiguration(str(e)) from e


def load_sweep(path: str) -> Sweep:
    """Read the [sweep] section of `path`."""

    parser: ConfigParser = read_parser(path)
    if not parser.has_section("sweep"):
        raise InvalidConfiguration(f"{path}: no [sweep] section")
    values: dict[str, Any] = parse_section(
        parser["sweep"],
        {
            "attack_success": ("attack_success", parse_int_list),
            "detect": ("detect", parse_int_list),
            "runs": ("runs", int),
        },
    )
    for name in "attack_success", "detect":
        if not values.get(name):
            raise InvalidConfiguration(f"{path}: [sweep] {name} must list at least one value")
    return Sweep(**values)
