"""A simulation of a concurrent cake shop with bakers, icers and an inscriber."""

from __future__ import annotations

import queue
import random
import threading
import time
from dataclasses import dataclass, field
from typing import Any

_CLOSED = object()


class _Channel:
    """A channel of the given capacity; a capacity of 0 hands items over directly."""

    def __init__(self, capacity: int) -> None:
        self._queue: queue.Queue = queue.Queue(maxsize=max(0, capacity))
        self._synchronous = capacity <= 0

    def send(self, item: Any) -> None:
        self._queue.put(item)
        if self._synchronous:
            self._queue.join()

    def receive(self) -> Any:
        item = self._queue.get()
        self._queue.task_done()
        return item


@dataclass
class Shop:
    """Parameters of the cake shop; all times are in seconds."""

    verbose: bool = False
    cakes: int = 0  # number of cakes to bake
    bake_time: float = 0.0  # time to bake one cake
    bake_stddev: float = 0.0  # standard deviation of baking time
    bake_buf: int = 0  # buffer slots between baking and icing
    num_icers: int = 0  # number of cooks doing icing
    ice_time: float = 0.0  # time to ice one cake
    ice_stddev: float = 0.0  # standard deviation of icing time
    ice_buf: int = 0  # buffer slots between icing and inscribing
    inscribe_time: float = 0.0  # time to inscribe one cake
    inscribe_stddev: float = 0.0  # standard deviation of inscribing time
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._print_lock = threading.Lock()

    def _say(self, action: str, cake: int) -> None:
        if self.verbose:
            with self._print_lock:
                print(action, cake, flush=True)

    def _work(self, duration: float, stddev: float) -> None:
        delay = duration + (self.rng.gauss(0.0, stddev) if stddev else 0.0)
        if delay > 0:
            time.sleep(delay)

    def _baker(self, baked: _Channel) -> None:
        for cake in range(self.cakes):
            self._say("baking", cake)
            self._work(self.bake_time, self.bake_stddev)
            baked.send(cake)
        for _ in range(self.num_icers):
            baked.send(_CLOSED)

    def _icer(self, iced: _Channel, baked: _Channel) -> None:
        while (cake := baked.receive()) is not _CLOSED:
            self._say("icing", cake)
            self._work(self.ice_time, self.ice_stddev)
            iced.send(cake)

    def _inscriber(self, iced: _Channel) -> int:
        for _ in range(self.cakes):
            cake = iced.receive()
            self._say("inscribing", cake)
            self._work(self.inscribe_time, self.inscribe_stddev)
            self._say("finished", cake)
        return self.cakes

    def work(self, runs: int) -> int:
        """Run the simulation runs times; return the number of cakes finished."""
        if self.cakes > 0 and self.num_icers < 1:
            raise ValueError("no icers: the shop would never finish a cake")
        finished = 0
        for _ in range(runs):
            baked = _Channel(self.bake_buf)
            iced = _Channel(self.ice_buf)
            workers = [threading.Thread(target=self._baker, args=(baked,), daemon=True)]
            workers.extend(
                threading.Thread(target=self._icer, args=(iced, baked), daemon=True)
                for _ in range(self.num_icers)
            )
            for worker in workers:
                worker.start()
            finished += self._inscriber(iced)
            for worker in workers:
                worker.join()
        return finished