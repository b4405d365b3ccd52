"""Attack/repair simulation on a network of computers.

An attacker starts outside the network and keeps attacking random computers; every compromised computer becomes a
new attacker. An IDS watching the boundary between the two halves of the network may notice an attack and notify the
sysadmin, who repairs machines one request at a time (slowly). The simulation ends when the attacker holds the
majority of the network, when the sysadmin has cleaned everything up, or when time runs out.
"""

import enum
import logging
import random
import sys
from dataclasses import dataclass, fields
from typing import Any

from .discrete_event_sim import Simulation
from .events import DeployAttack, ExecuteAttack, NetworkEvent, action_tiebreak

DEFAULT_MAX_TIME: int = 8_640_000_000  # 100 days, in milliseconds

STDOUT: Any = object()  # default output: whatever sys.stdout is when a simulator is built

SYSADMIN_BANNER: str = (
    "\n-------------------------------------------------------------------\n\n"
    "****, we're dealing with a sysadmin (https://xkcd.com/705/)\n"
    "\n-------------------------------------------------------------------\n"
)


class InvalidConfiguration(ValueError):
    """The simulation parameters can't produce a meaningful (or terminating) run."""


class EndCondition(enum.Enum):
    """How a simulation ended."""

    QUEUE_EMPTY = 0
    NETWORK_CONQUERED = 1
    NETWORK_DEFENDED = 2
    TIMED_OUT = 3


OUTCOME_MESSAGES: dict[EndCondition, str] = {
    EndCondition.NETWORK_CONQUERED: "Attacker wins",
    EndCondition.NETWORK_DEFENDED: f"Sysadmin wins\n{SYSADMIN_BANNER}",
    EndCondition.TIMED_OUT: "Draw",
}


@dataclass(frozen=True)
class Config:
    """Simulation parameters. Probabilities are percentages, times are milliseconds."""

    num_computers: int
    attack_success_probability: int
    detect_probability: int
    max_time: int = DEFAULT_MAX_TIME
    seed: int | None = None  # None: seed from the OS

    def __post_init__(self) -> None:
        # with a single computer there is nobody else to attack, and choosing a target would never end
        if self.num_computers < 2:
            raise InvalidConfiguration(f"at least 2 computers are needed, got {self.num_computers}")
        for name in "attack_success_probability", "detect_probability":
            value: int = getattr(self, name)
            if not 0 <= value <= 100:
                raise InvalidConfiguration(f"{name} must be between 0 and 100, got {value}")
        if self.max_time < 0:
            raise InvalidConfiguration(f"max_time must not be negative, got {self.max_time}")


class Simulator(Simulation):
    """The state of the simulation and its fetch-execute cycle.

    computers[i] is True if computer i is compromised. admin_next_fix_time is the time at which the sysadmin will
    start the last repair requested so far. has_ever_infected stays False until an attack succeeds, so that a network
    that has never been touched does not count as defended.
    """

    def __init__(self, config: Config, out: Any = STDOUT) -> None:
        super().__init__(action_tiebreak, sys.stdout if out is STDOUT else out)
        self.config: Config = config
        self.computers: list[bool] = [False] * config.num_computers
        self.admin_next_fix_time: int = 0
        self.has_ever_infected: bool = False
        self.rng: random.Random = random.Random(config.seed)
        self.steps: int = 0  # events processed

    def copy(self) -> "Simulator":
        """An independent simulator in the same state; only the output stream is shared."""

        other: Simulator = Simulator.__new__(Simulator)
        other.__dict__.update(self.__dict__)
        other.events = self.events.copy()
        other.computers = list(self.computers)
        other.rng = random.Random()
        other.rng.setstate(self.rng.getstate())
        return other

    def __copy__(self) -> "Simulator":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Simulator":
        return self.copy()

    def run(self) -> EndCondition:
        """Run the simulation to completion and announce the winner.

        An empty event queue means the simulation logic is broken: in that case the process exits with status 1.
        """

        print("STARTING SIMULATION")
        outcome: EndCondition = self.simulate()
        if outcome is EndCondition.QUEUE_EMPTY:
            logging.critical(f"event queue empty after {self.steps} events")
            print("The queue is empty. This is not intended. Simulation terminating.", file=sys.stderr)
            sys.exit(1)
        print(OUTCOME_MESSAGES[outcome])
        return outcome

    def simulate(self) -> EndCondition:
        """Schedule the first attack and run the fetch-execute cycle until an end condition is met."""

        self.schedule_deploy_attack(None, 1000)
        while True:
            fetched: NetworkEvent | EndCondition = self.fetch()
            if isinstance(fetched, EndCondition):
                self.log_info(f"simulation over: {fetched.name} after {self.steps} events")
                return fetched
            self.process(fetched)
            self.steps += 1

    def fetch(self) -> NetworkEvent | EndCondition:
        """Return the next event to process, or the end condition that has been reached."""

        if self.events.is_empty():
            return EndCondition.QUEUE_EMPTY
        infected: int = self.infected_count()
        if infected > (self.config.num_computers + 1) // 2:
            return EndCondition.NETWORK_CONQUERED
        if infected == 0 and self.has_ever_infected:
            return EndCondition.NETWORK_DEFENDED

        next_event = self.events.pop()
        self.t = int(next_event.priority)
        if self.t > self.config.max_time:
            return EndCondition.TIMED_OUT
        return next_event.content

    def process(self, event: NetworkEvent) -> None:
        event.process(self)

    def schedule_at(self, time: int, event: NetworkEvent) -> None:  # type: ignore[override]
        """Check the computer ids carried by the event, then queue it."""

        for field in fields(event):
            value: int | None = getattr(event, field.name)
            if value is None:
                # only the attacker coming from outside the network has no source computer
                if isinstance(event, (DeployAttack, ExecuteAttack)) and field.name == "source":
                    continue
                raise ValueError(f"{event!r}: {field.name} must be a computer id")
            if not 0 <= value < self.config.num_computers:
                raise ValueError(f"{event!r}: no computer {value} in a network of {self.config.num_computers}")
        super().schedule_at(time, event)

    def schedule_deploy_attack(self, source: int | None, delay: int) -> None:
        """Schedule an attack from `source` against a random other computer."""

        self.schedule(delay, DeployAttack(source, self.random_computer(source)))

    def infected_count(self) -> int:
        return sum(self.computers)

    def infect(self, computer: int) -> None:
        self.log_info(f"{computer} compromised")
        self.computers[computer] = True

    def repair(self, computer: int) -> None:
        self.log_info(f"{computer} repaired")
        self.computers[computer] = False

    def attempt(self, probability: int) -> bool:
        """True with the given probability, expressed as a percentage."""

        return self.rng.randrange(100) < probability

    def random_computer(self, excluding: int | None) -> int:
        """A computer chosen uniformly at random among those different from `excluding`."""

        while True:
            computer: int = self.rng.randrange(self.config.num_computers)
            if computer != excluding:
                return computer

    def detected_by_ids(self, source: int | None, target: int) -> bool:
        """Whether the IDS notices an attack from `source` to `target`.

        The IDS sits between the two halves of the network: it only sees attacks coming from outside or crossing from
        one half to the other.
        """

        if source is None:
            return self.attempt(self.config.detect_probability)
        half: int = self.config.num_computers // 2
        crosses_ids: bool = (source >= half) != (target >= half)
        return crosses_ids and self.attempt(self.config.detect_probability)
