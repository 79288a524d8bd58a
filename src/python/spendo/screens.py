"""Screen-level wiring of codes, list, gesture and modal components.

A presentation layer drives these objects with user events and renders their
state; nothing here draws anything.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import time
from typing import Any, Callable

from spendo.codes import ReferenceCodeCache
from spendo.config import DEFAULT_DOUBLE_TAP_MS
from spendo.gesture import DateTapTracker, TapAction, TapOutcome
from spendo.listing import ListSyncController
from spendo.modals import CreateModal, DetailModal, EditModal
from spendo.models import EntryRecord, FilterCriteria
from spendo.persistence import LedgerBackend
from spendo.query import build_query


def _now_ms() -> float:
    return time.monotonic() * 1000


class CalendarScreen:
    """Calendar with a day list; a same-date double tap opens the creation form."""

    def __init__(
        self,
        backend: LedgerBackend,
        today: dt.date | None = None,
        window_ms: int = DEFAULT_DOUBLE_TAP_MS,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self.codes = ReferenceCodeCache(backend)
        self.entries = ListSyncController(backend)
        self.tracker = DateTapTracker(selected_date=today or dt.date.today(), window_ms=window_ms)
        self.create_form = CreateModal(backend, self.codes, self.entries)
        self.clock = clock

    @property
    def selected_date(self) -> dt.date:
        return self.tracker.selected_date

    def mount(self) -> None:
        self.codes.load()
        self.create_form.reset(self.selected_date)
        self._load_day(self.selected_date)

    def _load_day(self, day: dt.date) -> None:
        self.entries.search(build_query(FilterCriteria.for_day(day)))

    def tap_date(self, day: dt.date, timestamp_ms: float | None = None) -> TapOutcome:
        previous = self.tracker.selected_date
        outcome = self.tracker.tap(day, self.clock() if timestamp_ms is None else timestamp_ms)
        if outcome.action is TapAction.CONFIRM:
            self.create_form.open_for(day)
        elif day != previous or self.entries.query is None:
            self._load_day(day)
        return outcome


class SearchScreen:
    """Filterable entry list with detail, edit and delete actions."""

    def __init__(self, backend: LedgerBackend, criteria: FilterCriteria | None = None) -> None:
        self.codes = ReferenceCodeCache(backend)
        self.entries = ListSyncController(backend)
        self.detail = DetailModal(backend)
        self.editor = EditModal(backend, self.codes, self.entries)
        self.criteria = criteria or FilterCriteria.today()

    def mount(self) -> list[EntryRecord]:
        self.codes.load()
        return self.search()

    def update_criteria(self, **changes: Any) -> FilterCriteria:
        self.criteria = dataclasses.replace(self.criteria, **changes)
        return self.criteria

    def search(self) -> list[EntryRecord]:
        return self.entries.search(build_query(self.criteria))

    def delete(self, key: int, confirm: Callable[[], bool]) -> bool:
        return self.entries.delete_entry(key, confirm)
