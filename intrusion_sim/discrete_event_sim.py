import logging
from typing import Any, TextIO

from humanfriendly import format_timespan

from .heap import Tiebreak
from .pqueue import PriorityQueue


class Simulation:
    """Subclass this to represent the simulation state.

    Here, self.t is the simulated time in milliseconds and self.events is the event queue, a min-heap on time whose
    equal-time entries are ordered by `tiebreak`. Every scheduled event is written to `out` (if not None) as it is
    queued.
    """

    def __init__(self, tiebreak: Tiebreak, out: TextIO | None = None) -> None:
        """Extend this method with the needed initialization.

        You can call super().__init__() there to call the code here.
        """

        self.t: int = 0  # simulated time
        self.events: PriorityQueue[Event] = PriorityQueue(tiebreak, min_heap=True)
        self.out: TextIO | None = out

    def schedule(self, delay: int, event: "Event") -> None:
        """Add an event to the event queue after the required delay."""

        self.schedule_at(self.t + delay, event)

    def schedule_at(self, time: int, event: "Event") -> None:
        """Add an event to the event queue at an absolute time."""

        if self.out is not None:
            print(event.record(time), file=self.out)
        self.events.push(event, time)

    def log_info(self, msg: str) -> None:
        logging.info(f"{format_timespan(self.t / 1000)}: {msg}")


class Event:
    """
    Subclass this to represent your events.

    You may need to define __init__ to set up all the necessary information.
    """

    def process(self, sim: Any) -> None:
        raise NotImplementedError

    def record(self, time: int) -> str:
        """How the event is reported when scheduled at `time`."""

        return f"{self.__class__.__name__}({time})"
