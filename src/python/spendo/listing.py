"""List synchronization between the displayed rows and the ledger service."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Callable

from spendo.exceptions import NetworkError, NotFoundError, ValidationError
from spendo.models import EntryRecord
from spendo.persistence import LedgerBackend
from spendo.sequence import RequestSequence, Ticket

logger = logging.getLogger(__name__)

READ_FAILED_MESSAGE = "Could not load ledger entries."
DELETE_FAILED_MESSAGE = "Could not delete the entry."


class ListState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    ERROR = "error"


class ListSyncController:
    """Own the displayed result set for the active query.

    Reads are split into ``set_query``/``refresh`` (issue a ticket) and
    ``execute`` or ``deliver``/``fail`` (settle it), so a caller may run the
    round-trip elsewhere and hand the outcome back later. Only the ticket of
    the most recent request can change the displayed rows. A failed read keeps
    the previous rows and raises a dismissible notice instead.
    """

    def __init__(self, backend: LedgerBackend) -> None:
        self.backend = backend
        self.state = ListState.IDLE
        self.query: dict[str, str] | None = None
        self.rows: list[EntryRecord] = []
        self.notice: str | None = None
        self._sequence = RequestSequence()

    @property
    def is_empty(self) -> bool:
        """True when the last completed read succeeded with no rows."""
        return self.state is ListState.READY and not self.rows

    def set_query(self, query: dict[str, str]) -> Ticket:
        """Replace the active query and issue a read for it."""
        self.query = dict(query)
        return self._issue()

    def refresh(self) -> Ticket:
        """Issue a read for the active query without changing it."""
        if self.query is None:
            raise RuntimeError("No active query to refresh")
        return self._issue()

    def _issue(self) -> Ticket:
        self.state = ListState.FETCHING
        return self._sequence.issue(dict(self.query))

    def execute(self, ticket: Ticket) -> bool:
        """Run the read for a ticket and settle it."""
        try:
            rows = self.backend.fetch_by_query(ticket.payload)
        except (NetworkError, NotFoundError, ValidationError) as exc:
            return self.fail(ticket, exc)
        return self.deliver(ticket, rows)

    def deliver(self, ticket: Ticket, rows: list[EntryRecord]) -> bool:
        """Apply rows for a ticket; return False if the ticket was superseded."""
        if not self._sequence.settle(ticket):
            logger.debug("Discarding stale list response for request %s", ticket.seq)
            return False
        self.rows = list(rows)
        self.state = ListState.READY
        self.notice = None
        return True

    def fail(self, ticket: Ticket, error: Exception) -> bool:
        """Record a read failure; existing rows stay visible."""
        if not self._sequence.settle(ticket):
            logger.debug("Discarding stale list failure for request %s: %s", ticket.seq, error)
            return False
        logger.warning("List read failed for %s: %s", ticket.payload, error)
        self.state = ListState.ERROR
        self.notice = READ_FAILED_MESSAGE
        return True

    def search(self, query: dict[str, str]) -> list[EntryRecord]:
        """Set the query and read it in one step."""
        self.execute(self.set_query(query))
        return self.rows

    def reload(self) -> list[EntryRecord]:
        """Refresh the active query in one step."""
        self.execute(self.refresh())
        return self.rows

    def dismiss_notice(self) -> None:
        self.notice = None

    def delete_entry(self, key: int, confirm: Callable[[], bool]) -> bool:
        """Delete an entry after an explicit yes/no gate, then re-read.

        An entry that is already gone counts as deleted. A transport failure
        leaves the rows untouched and raises a notice.
        """
        if not confirm():
            logger.debug("Delete of entry %s cancelled", key)
            return False
        try:
            self.backend.delete(key)
        except NotFoundError:
            logger.info("Entry %s was already deleted", key)
        except (NetworkError, ValidationError) as exc:
            logger.warning("Delete of entry %s failed: %s", key, exc)
            self.notice = DELETE_FAILED_MESSAGE
            return False
        if self.query is not None:
            self.reload()
        return True
