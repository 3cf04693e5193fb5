"""Presenter for generic collection list pages.

Coordinates paginated loading (find then count), debounced quick search,
selection, and confirmed single/bulk deletion for one mounted list page.

Call context:
    The view creates one ``ListPresenter`` per mounted page, awaits
    ``initialize(collection)`` on mount and on collection route changes, and
    calls ``dispose()`` on unmount.
"""

from __future__ import annotations


import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set

from schemadmin.domain.entities import CollectionQuery, SchemaRegistry
from schemadmin.domain.ports import Condition, ObjectId, Severity, UseCaseError
from schemadmin.domain.search import build_where
from schemadmin.usecases.count_objects import CountObjects
from schemadmin.usecases.delete_object import DeleteObject
from schemadmin.usecases.find_objects import FindObjects
from schemadmin.viewmodels.list_state import ListState

from .base_page import BasePage
from .debounce_scheduler import DebounceScheduler

SEARCH_TIMER = "search"
DELETE_KEY = "delete"


class ListPresenter:
    """Owns ``ListState`` and its find/count/delete collaborator calls."""

    def __init__(
        self,
        *,
        page: BasePage,
        schemas: SchemaRegistry,
        find_objects: FindObjects,
        count_objects: CountObjects,
        delete_object: DeleteObject,
        limit: int = 20,
        default_sort: Optional[Mapping[str, int]] = None,
        search_debounce_ms: int = 500,
        scheduler: Optional[DebounceScheduler] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.page = page
        self.schemas = schemas
        self.find_objects = find_objects
        self.count_objects = count_objects
        self.delete_object = delete_object
        self.limit = limit
        self.default_sort: Dict[str, int] = dict(default_sort or {"createdAt": -1})
        self.search_debounce_ms = search_debounce_ms
        self._scheduler = scheduler or DebounceScheduler()

        self.collection: str = ""
        self.state = self._new_state()
        # Owner token: bumped on initialize/dispose. Generation: also on reset.
        self._owner = 0
        self._generation = 0
        self._disposed = False
        self._tasks: Set[asyncio.Task] = set()

    def _new_state(self) -> ListState:
        return ListState(limit=self.limit, sort=dict(self.default_sort))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def initialize(self, collection: str) -> None:
        """Recreate state for ``collection`` and load its first page."""
        self._scheduler.cancel(SEARCH_TIMER)
        self._owner += 1
        self._generation += 1
        self._disposed = False
        self.collection = collection
        self.state = self._new_state()
        self._log.debug("List page initialized for %s", collection)
        await self.load_data()

    def dispose(self) -> None:
        """Unmount: drop pending timers and ignore results still in flight."""
        self._scheduler.cancel_all()
        self._owner += 1
        self._generation += 1
        self._disposed = True

    async def drain(self) -> None:
        """Wait for reloads started by debounce timers."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def build_where(self) -> Condition:
        return build_where(self.state.search, self.state.filters, self.schemas.get(self.collection))

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    @contextmanager
    def _loading(self, state: ListState) -> Iterator[None]:
        state.in_flight += 1
        state.loading = True
        self.page.set_loading(self.state.loading)
        try:
            yield
        finally:
            state.in_flight -= 1
            state.loading = state.in_flight > 0
            self.page.set_loading(self.state.loading)

    async def load_data(self, page_number: Optional[int] = None) -> None:
        """Fetch a page (default: the current one), then the total.

        Page 1 replaces the rows, later pages append. ``state.current`` moves to
        ``page_number`` only once its rows have arrived.
        """
        owner, generation = self._owner, self._generation
        state, collection = self.state, self.collection
        if page_number is None:
            page_number = state.current
        error: Optional[UseCaseError] = None

        with self._loading(state):
            where = self.build_where()
            query = CollectionQuery.for_page(page_number, state.limit, where=where, sort=state.sort)
            try:
                objects = await self.find_objects.execute(collection, query)
                if generation != self._generation:
                    self._log.debug("Discarding stale page %s of %s", page_number, collection)
                    return
                state.current = page_number
                if page_number == 1:
                    state.objects = list(objects)
                else:
                    state.objects.extend(objects)

                count = await self.count_objects.execute(collection, where)
                if generation != self._generation:
                    self._log.debug("Discarding stale count of %s", collection)
                    return
                state.count = count
            except UseCaseError as exc:
                error = exc

        if error is not None and owner == self._owner:
            self._log.warning("Loading %s failed: %s", collection, error.message)
            await self.page.show_error(error)

    async def load_more(self) -> None:
        """Request the next page unless a load is already in flight."""
        if self.state.loading:
            return
        await self.load_data(self.state.current + 1)

    def reset(self) -> None:
        """Back to page 1 with no rows and no selection; query inputs stay."""
        self._generation += 1
        self.state.current = 1
        self.state.objects = []
        self.state.selected = []

    async def reload(self) -> None:
        self.reset()
        await self.load_data()

    # ------------------------------------------------------------------
    # Search, filters, sort
    # ------------------------------------------------------------------
    def handle_search_change(self, value: str) -> None:
        """Update the term now; reload once input has been quiet long enough."""
        self.state.search = value
        self._scheduler.schedule(SEARCH_TIMER, self.search_debounce_ms, self._on_search_timer)

    def _on_search_timer(self) -> None:
        if self._disposed:
            return
        task = asyncio.get_running_loop().create_task(self.reload())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def apply_filters(self, filters: Mapping[str, Any]) -> None:
        self.state.filters = dict(filters)
        await self.reload()

    async def apply_sort(self, sort: Mapping[str, int]) -> None:
        self.state.sort = dict(sort)
        await self.reload()

    # ------------------------------------------------------------------
    # Selection (materialized rows only)
    # ------------------------------------------------------------------
    def toggle_selection(self, object_id: ObjectId) -> None:
        if object_id in self.state.selected:
            self.state.selected = [i for i in self.state.selected if i != object_id]
        elif object_id in self.state.loaded_ids():
            self.state.selected = [*self.state.selected, object_id]

    def select_all(self) -> None:
        self.state.selected = list(dict.fromkeys(self.state.loaded_ids()))

    def deselect_all(self) -> None:
        self.state.selected = []

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    async def handle_delete(self, object_id: ObjectId) -> None:
        confirmed = await self.page.show_confirm_dialog(
            "Are you sure you want to delete this item?",
            "Confirm Delete",
            "Delete",
            "Cancel",
            Severity.DANGER,
        )
        if not confirmed:
            return
        if await self._delete_all([object_id]):
            self.page.show_toast("Item deleted successfully", Severity.SUCCESS)
            self.state.selected = [i for i in self.state.selected if i != object_id]
            await self.reload()

    async def delete_selected(self) -> None:
        selected = list(self.state.selected)
        if not selected:
            self.page.show_toast("No items selected", Severity.WARNING)
            return
        confirmed = await self.page.show_confirm_dialog(
            f"Are you sure you want to delete {len(selected)} selected items?",
            "Confirm Bulk Delete",
            "Delete All",
            "Cancel",
            Severity.DANGER,
        )
        if not confirmed:
            return
        if await self._delete_all(selected):
            self.page.show_toast(f"{len(selected)} items deleted successfully", Severity.SUCCESS)
            self.state.selected = []
            await self.reload()

    async def _delete_all(self, ids: List[ObjectId]) -> bool:
        """Delete one id after another; stop at the first failure.

        Returns True when every delete succeeded and the page is still mounted.
        Earlier deletions stay committed when a later one fails.
        """
        owner, collection = self._owner, self.collection
        error: Optional[UseCaseError] = None
        self.page.show_inline_loading(DELETE_KEY)
        try:
            for object_id in ids:
                await self.delete_object.execute(collection, object_id)
        except UseCaseError as exc:
            error = exc
        finally:
            self.page.hide_inline_loading(DELETE_KEY)

        if owner != self._owner:
            return False
        if error is not None:
            self._log.warning("Deleting from %s failed: %s", collection, error.message)
            await self.page.show_error(error)
            return False
        return True


__all__ = ["DELETE_KEY", "ListPresenter", "SEARCH_TIMER"]
