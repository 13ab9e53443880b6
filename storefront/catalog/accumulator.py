"""Pagination accumulator for "load more" product lists."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..models import PageResult, Pagination, Product

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Accumulator state."""
    IDLE = "idle"
    LOADING = "loading"
    LOADING_MORE = "loading_more"


class Slot(str, Enum):
    """Where a query result goes."""
    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class Ticket:
    """Handle for one in-flight query."""

    slot: Slot
    generation: int
    page: int


def append_page(existing: Sequence[Product], new_page: Sequence[Product]) -> list[Product]:
    """Merge a freshly loaded page after the already accumulated items."""
    return [*existing, *new_page]


class PaginationAccumulator:
    """
    Accumulates successive result pages into one list.

    Idle -> Loading(page 1) -> Idle on a new or changed query, and
    Idle -> LoadingMore(page n+1) -> Idle on "load more". Each begin call
    hands out a ticket stamped with a generation number; only the ticket of
    the latest generation may complete, so a superseded query (including a
    load-more overtaken by a new query) is dropped when it resolves.
    """

    def __init__(self):
        self.items: list[Product] = []
        self.page = 1
        self.total = 0
        self.has_next = False
        self.state = LoadState.IDLE
        self._generation = 0

    @property
    def is_loading(self) -> bool:
        return self.state == LoadState.LOADING

    @property
    def is_loading_more(self) -> bool:
        return self.state == LoadState.LOADING_MORE

    @property
    def generation(self) -> int:
        return self._generation

    def pagination(self) -> Pagination:
        return Pagination(
            page=self.page,
            has_next=self.has_next,
            is_loading_more=self.is_loading_more,
            total=self.total,
        )

    def reset(self) -> list[Product]:
        """Drop everything, including any in-flight query."""
        self._generation += 1
        self.items = []
        self.page = 1
        self.total = 0
        self.has_next = False
        self.state = LoadState.IDLE
        return self.items

    def begin_load(self) -> Ticket:
        """Start a first-page query, superseding anything in flight."""
        self._generation += 1
        self.state = LoadState.LOADING
        return Ticket(Slot.REPLACE, self._generation, 1)

    def begin_load_more(self) -> Optional[Ticket]:
        """Start loading the next page; None when not idle or nothing is left."""
        if self.state != LoadState.IDLE or not self.has_next:
            return None
        self._generation += 1
        self.state = LoadState.LOADING_MORE
        return Ticket(Slot.APPEND, self._generation, self.page + 1)

    def is_current(self, ticket: Ticket) -> bool:
        return ticket.generation == self._generation

    def complete(self, ticket: Ticket, result: PageResult) -> bool:
        """Apply a result. Returns False when the ticket was superseded."""
        if not self.is_current(ticket):
            logger.debug(
                "Discarding stale %s result for page %d (generation %d, current %d)",
                ticket.slot.value, ticket.page, ticket.generation, self._generation,
            )
            return False

        if ticket.slot == Slot.REPLACE:
            self.items = list(result.items)
        else:
            self.items = append_page(self.items, result.items)

        self.page = result.page
        self.total = result.total
        self.has_next = result.has_next
        self.state = LoadState.IDLE
        return True

    def fail(self, ticket: Ticket) -> bool:
        """Return to idle after a failed query, keeping what was loaded.

        A failed first-page query leaves items from an older query on
        display, so "load more" is closed until a reload succeeds.
        """
        if not self.is_current(ticket):
            return False
        if ticket.slot == Slot.REPLACE:
            self.has_next = False
        self.state = LoadState.IDLE
        return True
