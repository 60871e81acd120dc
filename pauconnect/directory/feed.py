from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable

from pauconnect.directory.member_directory import FilterState, MemberDirectory
from pauconnect.directory.models import MemberSummary

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load profiles"


class DirectoryFeed:
    """
    Fetch-then-render state for one wall view.

    Each activation gets an id from a generation counter. Results are only
    applied while that id is still the current activation, so a fetch that
    resolves after the view was torn down or re-triggered is dropped.
    """

    def __init__(self) -> None:
        self.directory = MemberDirectory()
        self.loading = False
        self.load_error: str | None = None
        self._generation = 0
        self._active: int | None = None

    @property
    def generation(self) -> int:
        return self._generation

    def activate(self) -> int:
        self._generation += 1
        self._active = self._generation
        self.loading = True
        self.load_error = None
        return self._generation

    def deactivate(self) -> None:
        self._active = None
        self.loading = False

    def is_current(self, activation: int) -> bool:
        return self._active is not None and activation == self._active

    def resolve(self, activation: int, members: Iterable[MemberSummary]) -> bool:
        if not self.is_current(activation):
            logger.debug("Dropping stale directory result for activation %s", activation)
            return False
        self.directory.replace_members(members)
        self.load_error = None
        self.loading = False
        return True

    def fail(self, activation: int, message: str | None) -> bool:
        if not self.is_current(activation):
            logger.debug("Dropping stale directory failure for activation %s", activation)
            return False
        self.directory.replace_members(())
        self.load_error = message or LOAD_FAILED
        self.loading = False
        return True

    async def load(self, fetch: Callable[[], list[MemberSummary]]) -> bool:
        """Run a blocking fetch off the event loop and apply it if still current."""
        activation = self.activate()
        try:
            members = await asyncio.to_thread(fetch)
        except Exception as e:
            logger.error(f"Directory fetch failed: {e}")
            return self.fail(activation, str(e))
        return self.resolve(activation, members)

    def visible(self, filters: FilterState | None = None) -> list[MemberSummary]:
        return self.directory.filter_members(filters)
