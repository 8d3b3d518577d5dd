"""Concurrency-safe single-account banks."""

from __future__ import annotations

import queue
import threading
from typing import Any

_CLOSE = object()


class Bank:
    """A single-account bank whose balance is guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._balance = 0

    def deposit(self, amount: int) -> None:
        """Add amount to the balance."""
        with self._lock:
            self._balance += amount

    def balance(self) -> int:
        """Return the current balance."""
        with self._lock:
            return self._balance


class TellerBank:
    """A single-account bank whose balance is confined to a teller thread.

    Deposits and balance enquiries are sent to the teller as messages and
    are handled in the order they arrive. Call close when done.
    """

    def __init__(self) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._teller = threading.Thread(target=self._serve, daemon=True)
        self._teller.start()

    def _serve(self) -> None:
        balance = 0  # confined to this thread
        while (request := self._requests.get()) is not _CLOSE:
            kind, payload = request
            if kind == "deposit":
                balance += payload
            else:
                payload.put(balance)

    def _send(self, message: Any) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("bank is closed")
            self._requests.put(message)

    def deposit(self, amount: int) -> None:
        """Send amount to the teller to be added to the balance."""
        self._send(("deposit", amount))

    def balance(self) -> int:
        """Ask the teller for the current balance."""
        reply: queue.Queue = queue.Queue(maxsize=1)
        self._send(("balance", reply))
        return reply.get()

    def close(self) -> None:
        """Stop the teller; later requests raise RuntimeError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(_CLOSE)
        self._teller.join()

    def __enter__(self) -> TellerBank:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()