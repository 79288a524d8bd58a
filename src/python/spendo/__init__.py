"""Public Spendo package exports."""

from __future__ import annotations

from spendo.__version__ import __version__
from spendo.client import SpendoClient
from spendo.codes import CacheState, CodeCatalog, ReferenceCodeCache
from spendo.exceptions import NetworkError, NotFoundError, ValidationError
from spendo.gateway import HttpLedgerGateway
from spendo.gesture import DateTapTracker, TapAction, TapOutcome
from spendo.listing import ListState, ListSyncController
from spendo.modals import CreateModal, DetailModal, EditModal, ModalState
from spendo.models import (
    ALL,
    EntryDraft,
    EntryDTO,
    EntryRecord,
    ExpenditureRecord,
    FilterCriteria,
    ReferenceCode,
)
from spendo.persistence import LedgerBackend
from spendo.query import build_query
from spendo.screens import CalendarScreen, SearchScreen

__all__ = [
    "__version__",
    "ALL",
    "CacheState",
    "CalendarScreen",
    "CodeCatalog",
    "CreateModal",
    "DateTapTracker",
    "DetailModal",
    "EditModal",
    "EntryDraft",
    "EntryDTO",
    "EntryRecord",
    "ExpenditureRecord",
    "FilterCriteria",
    "HttpLedgerGateway",
    "LedgerBackend",
    "ListState",
    "ListSyncController",
    "ModalState",
    "NetworkError",
    "NotFoundError",
    "ReferenceCode",
    "ReferenceCodeCache",
    "SearchScreen",
    "SpendoClient",
    "TapAction",
    "TapOutcome",
    "ValidationError",
    "build_query",
]
