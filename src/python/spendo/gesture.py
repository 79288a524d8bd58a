"""Double-tap recognition for calendar date taps."""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from enum import Enum

from spendo.config import DEFAULT_DOUBLE_TAP_MS


class TapAction(Enum):
    SELECT = "select"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class TapOutcome:
    action: TapAction
    date: dt.date


class DateTapTracker:
    """Tell a plain date selection apart from a same-date double tap.

    A tap confirms only when the previous tap hit the same date less than
    ``window_ms`` earlier. The very first tap always selects. A confirm keeps
    the previous tap record, so the window is measured from the selecting tap.
    """

    def __init__(self, selected_date: dt.date | None = None, window_ms: int = DEFAULT_DOUBLE_TAP_MS) -> None:
        self.selected_date = selected_date
        self.window_ms = window_ms
        self.last_tap_ms: float | None = None
        self.last_tap_date: dt.date | None = None

    def tap(self, date: dt.date, timestamp_ms: float) -> TapOutcome:
        if (
            self.last_tap_ms is not None
            and timestamp_ms - self.last_tap_ms < self.window_ms
            and date == self.last_tap_date
        ):
            return TapOutcome(TapAction.CONFIRM, date)
        self.selected_date = date
        self.last_tap_ms = timestamp_ms
        self.last_tap_date = date
        return TapOutcome(TapAction.SELECT, date)
