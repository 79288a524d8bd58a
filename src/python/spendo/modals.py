"""Detail, edit and creation modal lifecycles for a single entry."""

from __future__ import annotations

from abc import ABC, abstractmethod
import datetime as dt
from enum import Enum
import logging
from typing import Any

from spendo.codes import CodeCatalog
from spendo.exceptions import NetworkError, NotFoundError, ValidationError
from spendo.listing import ListSyncController
from spendo.models import EntryDraft, EntryDTO, EntryRecord
from spendo.persistence import LedgerBackend
from spendo.sequence import RequestSequence, Ticket

logger = logging.getLogger(__name__)

RECORD_UNAVAILABLE_MESSAGE = "This record is no longer available."
DETAIL_FAILED_MESSAGE = "Could not load the entry details."
SAVE_FAILED_MESSAGE = "Could not save the entry."

BACKEND_ERRORS = (NetworkError, NotFoundError, ValidationError)


class ModalState(Enum):
    CLOSED = "closed"
    LOADING = "loading"
    SHOWN = "shown"
    EDITING = "editing"
    SAVING = "saving"


def _open_failure_message(error: Exception) -> str:
    if isinstance(error, NotFoundError):
        return RECORD_UNAVAILABLE_MESSAGE
    return DETAIL_FAILED_MESSAGE


class DetailModal:
    """Read-only view of one entry, fetched by identifier on open."""

    def __init__(self, backend: LedgerBackend) -> None:
        self.backend = backend
        self.state = ModalState.CLOSED
        self.record: EntryRecord | None = None
        self.error: str | None = None
        self._sequence = RequestSequence()

    def open(self, key: int) -> Ticket:
        self.state = ModalState.LOADING
        self.record = None
        self.error = None
        return self._sequence.issue(key)

    def execute(self, ticket: Ticket) -> bool:
        try:
            record = self.backend.fetch_by_id(ticket.payload)
        except BACKEND_ERRORS as exc:
            return self.fail(ticket, exc)
        return self.deliver(ticket, record)

    def deliver(self, ticket: Ticket, record: EntryRecord) -> bool:
        if not self._sequence.settle(ticket):
            logger.debug("Discarding detail response for closed request %s", ticket.seq)
            return False
        self.record = record
        self.state = ModalState.SHOWN
        return True

    def fail(self, ticket: Ticket, error: Exception) -> bool:
        if not self._sequence.settle(ticket):
            return False
        logger.warning("Detail read for entry %s failed: %s", ticket.payload, error)
        self.state = ModalState.CLOSED
        self.record = None
        self.error = _open_failure_message(error)
        return True

    def show(self, key: int) -> EntryRecord:
        """Open and load in one step, raising the read failure after closing."""
        ticket = self.open(key)
        try:
            record = self.backend.fetch_by_id(key)
        except BACKEND_ERRORS as exc:
            self.fail(ticket, exc)
            raise
        self.deliver(ticket, record)
        return record

    def close(self) -> None:
        self.state = ModalState.CLOSED
        self.record = None
        self._sequence.invalidate()


class _DraftForm(ABC):
    """Shared staging, validation and submit behavior for entry forms."""

    def __init__(
        self,
        backend: LedgerBackend,
        codes: CodeCatalog,
        entries: ListSyncController | None = None,
    ) -> None:
        self.backend = backend
        self.codes = codes
        self.entries = entries
        self.state = ModalState.CLOSED
        self.draft: EntryDraft | None = None
        self.error: str | None = None
        self._sequence = RequestSequence()

    def _require_editing(self) -> EntryDraft:
        if self.state is not ModalState.EDITING or self.draft is None:
            raise RuntimeError("No draft is being edited")
        return self.draft

    def update_field(self, name: str, value: Any) -> None:
        self._require_editing().set_field(name, value)

    def cancel(self) -> None:
        """Discard the draft without any network call."""
        self.state = ModalState.CLOSED
        self.draft = None
        self.error = None
        self._sequence.invalidate()

    def validate(self) -> EntryDTO:
        """Check the draft locally and return the payload to submit.

        Raises:
            ValidationError: the first failing field, also recorded on the draft
        """
        draft = self._require_editing()
        try:
            entry = draft.to_dto()
            self.codes.require_known(entry.transaction_type, entry.payment_type)
        except ValidationError as exc:
            draft.errors[exc.field or "form"] = str(exc)
            self.error = str(exc)
            raise
        return entry

    def save(self) -> None:
        """Validate, submit, then close and refresh the entry list.

        On a submit failure the form returns to editing with the draft intact
        and the error is re-raised.
        """
        entry = self.validate()
        self.state = ModalState.SAVING
        self.error = None
        try:
            self._submit(entry)
        except BACKEND_ERRORS as exc:
            logger.warning("Saving entry failed: %s", exc)
            self.state = ModalState.EDITING
            self.error = SAVE_FAILED_MESSAGE
            raise
        self.state = ModalState.CLOSED
        self.draft = None
        if self.entries is not None and self.entries.query is not None:
            self.entries.reload()

    @abstractmethod
    def _submit(self, entry: EntryDTO) -> None:
        """Send the validated entry to the backend."""


class EditModal(_DraftForm):
    """Edit one existing entry through a draft copied from a fresh detail read."""

    def open(self, key: int) -> Ticket:
        self.state = ModalState.LOADING
        self.draft = None
        self.error = None
        return self._sequence.issue(key)

    def execute(self, ticket: Ticket) -> bool:
        try:
            record = self.backend.fetch_by_id(ticket.payload)
        except BACKEND_ERRORS as exc:
            return self.fail(ticket, exc)
        return self.deliver(ticket, record)

    def deliver(self, ticket: Ticket, record: EntryRecord) -> bool:
        if not self._sequence.settle(ticket):
            logger.debug("Discarding edit response for cancelled request %s", ticket.seq)
            return False
        self.draft = EntryDraft.from_record(record)
        self.state = ModalState.EDITING
        return True

    def fail(self, ticket: Ticket, error: Exception) -> bool:
        if not self._sequence.settle(ticket):
            return False
        logger.warning("Edit read for entry %s failed: %s", ticket.payload, error)
        self.state = ModalState.CLOSED
        self.draft = None
        self.error = _open_failure_message(error)
        return True

    def begin(self, key: int) -> EntryDraft:
        """Open and load in one step, raising the read failure after closing."""
        ticket = self.open(key)
        try:
            record = self.backend.fetch_by_id(key)
        except BACKEND_ERRORS as exc:
            self.fail(ticket, exc)
            raise
        self.deliver(ticket, record)
        return self.draft

    def _submit(self, entry: EntryDTO) -> None:
        self.backend.update(self.draft.key, entry)


class CreateModal(_DraftForm):
    """Creation form opened for a calendar date."""

    created_key: int | None = None

    def reset(self, date: dt.date | None = None) -> EntryDraft:
        """Clear the form and select the first code of each collection."""
        if date is None and self.draft is not None:
            date = self.draft.date
        self.draft = EntryDraft(
            date=date,
            transaction_type=self.codes.default_type_code(),
            payment_type=self.codes.default_payment_code(),
        )
        self.error = None
        return self.draft

    def open_for(self, date: dt.date) -> EntryDraft:
        draft = self.reset(date)
        self.state = ModalState.EDITING
        return draft

    def _submit(self, entry: EntryDTO) -> None:
        self.created_key = self.backend.create(entry)
