"""Monotonic request tickets for discarding superseded responses."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Any


@dataclass(frozen=True)
class Ticket:
    """Tag attached to an outstanding read."""
    seq: int
    payload: Any = None


class RequestSequence:
    """Issue tickets and tell whether a ticket still belongs to the latest request."""

    def __init__(self) -> None:
        self._counter = count(1)
        self._current: int | None = None

    def issue(self, payload: Any = None) -> Ticket:
        ticket = Ticket(seq=next(self._counter), payload=payload)
        self._current = ticket.seq
        return ticket

    def invalidate(self) -> None:
        """Make every outstanding ticket stale."""
        self._current = None

    def is_current(self, ticket: Ticket) -> bool:
        return self._current is not None and ticket.seq == self._current

    def settle(self, ticket: Ticket) -> bool:
        """Consume a current ticket; return False for a stale one."""
        if not self.is_current(ticket):
            return False
        self._current = None
        return True
