"""Carousel navigation over the URL store.

The carousel keeps no position of its own: the current index is always the
position of the store's active record, and moving means activating another
record.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from .models import UrlRecord
from .urls import UrlStore

logger = logging.getLogger(__name__)

MIN_SWIPE_DISTANCE = 50

Direction = Literal["next", "previous"]


class Carousel:
    """Wraparound next/previous/jump navigation driven by a :class:`UrlStore`."""

    def __init__(self, store: UrlStore) -> None:
        self.store = store

    def current_index(self) -> int:
        return self.store.active_index()

    def has_multiple(self) -> bool:
        return len(self.store) >= 2

    def next(self) -> Optional[UrlRecord]:
        """Activate the following record, wrapping from last to first."""
        if not self.has_multiple():
            return None
        return self._activate((self.current_index() + 1) % len(self.store))

    def previous(self) -> Optional[UrlRecord]:
        """Activate the preceding record, wrapping from first to last."""
        if not self.has_multiple():
            return None
        index = self.current_index()
        target = len(self.store) - 1 if index == 0 else index - 1
        return self._activate(target)

    def go_to(self, index: int) -> Optional[UrlRecord]:
        """Activate the record at *index*; out-of-range targets are ignored."""
        if not 0 <= index < len(self.store):
            return None
        return self._activate(index)

    def _activate(self, index: int) -> UrlRecord:
        record = self.store.urls[index]
        return self.store.set_active(record.id)


class SwipeTracker:
    """Turns one horizontal drag into at most one carousel step.

    Call :meth:`start` on pointer/touch down, :meth:`move` while dragging and
    :meth:`end` on release. A leftward drag longer than *threshold* goes to the
    next record, a rightward one to the previous record. Tracking state is
    cleared once the gesture resolves.
    """

    def __init__(self, carousel: Carousel, threshold: int = MIN_SWIPE_DISTANCE) -> None:
        self.carousel = carousel
        self.threshold = threshold
        self._start_x: Optional[float] = None
        self._end_x: Optional[float] = None

    @property
    def tracking(self) -> bool:
        return self._start_x is not None

    def start(self, x: float) -> None:
        self._start_x = x
        self._end_x = None

    def move(self, x: float) -> None:
        if self._start_x is not None:
            self._end_x = x

    def cancel(self) -> None:
        self._start_x = None
        self._end_x = None

    def end(self, x: Optional[float] = None) -> Optional[Direction]:
        """Resolve the gesture; returns the direction taken, if any."""
        if self._start_x is None:
            return None
        if x is not None:
            self._end_x = x
        start, finish = self._start_x, self._end_x
        self.cancel()

        if finish is None:
            return None
        distance = start - finish
        if distance > self.threshold:
            direction: Direction = "next"
        elif distance < -self.threshold:
            direction = "previous"
        else:
            return None

        if not self.carousel.has_multiple():
            return None
        logger.debug("Swipe %s (%.0f px)", direction, abs(distance))
        if direction == "next":
            self.carousel.next()
        else:
            self.carousel.previous()
        return direction
