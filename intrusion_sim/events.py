"""The five events of the attack/repair simulation.

Each event is a frozen dataclass carrying only the fields its action needs; `process()` is the handler run when the
event is fetched from the queue, `record()` is how the event is reported when it is scheduled.
"""

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .discrete_event_sim import Event

if TYPE_CHECKING:
    from .intrusion import Simulator


class Action(enum.IntEnum):
    """Event tags. At equal times, events with a higher value are processed first."""

    NOTIFY = 0
    DEPLOY_REPAIR = 1
    EXECUTE_REPAIR = 2
    DEPLOY_ATTACK = 3
    EXECUTE_ATTACK = 4

    @property
    def label(self) -> str:
        # DEPLOY_ATTACK -> Deploy_Attack
        return "_".join(word.capitalize() for word in self.name.split("_"))


def action_tiebreak(a: "NetworkEvent", prio_a: float, b: "NetworkEvent", prio_b: float) -> bool:
    """Tie-break rule for the event queue: the event with the higher action goes first."""

    return a.action > b.action


def format_source(source: int | None) -> str:
    return "-1" if source is None else str(source)


@dataclass(frozen=True)
class NetworkEvent(Event):
    action: ClassVar[Action]


@dataclass(frozen=True)
class DeployAttack(NetworkEvent):
    """The attacker sitting on `source` (None: outside the network) prepares an attack against `target`."""

    action = Action.DEPLOY_ATTACK
    source: int | None
    target: int

    def process(self, sim: "Simulator") -> None:
        if self.source is not None and not sim.computers[self.source]:
            return  # the machine was repaired, this attacker retires
        sim.schedule(100, ExecuteAttack(self.source, self.target))
        sim.schedule_deploy_attack(self.source, 1000)

    def record(self, time: int) -> str:
        return f"{self.action.label}({time}, {format_source(self.source)}, {self.target})"


@dataclass(frozen=True)
class ExecuteAttack(NetworkEvent):
    """The attack from `source` hits `target`."""

    action = Action.EXECUTE_ATTACK
    source: int | None
    target: int

    def process(self, sim: "Simulator") -> None:
        if not sim.attempt(sim.config.attack_success_probability):
            return
        sim.has_ever_infected = True
        if sim.computers[self.target]:
            return
        sim.infect(self.target)
        sim.schedule_deploy_attack(self.target, 0)
        if sim.detected_by_ids(self.source, self.target):
            sim.log_info(f"IDS detected the attack from {format_source(self.source)} to {self.target}")
            if self.source is not None:
                sim.schedule(100, Notify(self.source))
            sim.schedule(100, Notify(self.target))

    def record(self, time: int) -> str:
        return f"{self.action.label}({time}, {format_source(self.source)}, {self.target})"


@dataclass(frozen=True)
class DeployRepair(NetworkEvent):
    """The sysadmin gets around to looking at `target`."""

    action = Action.DEPLOY_REPAIR
    target: int

    def process(self, sim: "Simulator") -> None:
        sim.schedule(100, ExecuteRepair(self.target))

    def record(self, time: int) -> str:
        return f"{self.action.label}({time}, {self.target})"


@dataclass(frozen=True)
class ExecuteRepair(NetworkEvent):
    action = Action.EXECUTE_REPAIR
    target: int

    def process(self, sim: "Simulator") -> None:
        sim.repair(self.target)

    def record(self, time: int) -> str:
        return f"{self.action.label}({time}, {self.target})"


@dataclass(frozen=True)
class Notify(NetworkEvent):
    """The IDS tells the sysadmin that `source` is involved in an attack."""

    action = Action.NOTIFY
    source: int

    def process(self, sim: "Simulator") -> None:
        # the sysadmin handles one repair request at a time
        sim.admin_next_fix_time += 10000
        sim.schedule_at(sim.admin_next_fix_time, DeployRepair(self.source))

    def record(self, time: int) -> str:
        return f"{self.action.label}({time}, {self.source})"
