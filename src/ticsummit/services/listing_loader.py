"""Incremental loading of a filtered, paginated listing.

State changes go through ``reduce``: the loader dispatches one action per
step (query started, page requested, page loaded, page failed) and every
action carries the epoch it belongs to. An epoch is one (search term,
category) filter; starting a new query opens a new epoch, and actions tagged
with an older epoch are dropped, so a slow response for an abandoned filter
can never be appended to the current items.
"""

from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Optional, Union

from loguru import logger

from ticsummit.constants import PROJECT_PAGE_SIZE, SCROLL_LOAD_THRESHOLD
from ticsummit.exceptions import FetchFailure
from ticsummit.models import ALL_CATEGORIES, Project, ProjectPage


@dataclass(frozen=True)
class ListQuery:
    search_term: str = ""
    category: str = ALL_CATEGORIES
    page: int = 1
    page_size: int = PROJECT_PAGE_SIZE

    @property
    def signature(self) -> tuple[str, str]:
        return self.search_term, self.category


@dataclass(frozen=True)
class ListState:
    query: ListQuery = ListQuery()
    items: tuple[Project, ...] = ()
    has_more: bool = True
    is_initial_loading: bool = False
    is_loading_more: bool = False
    total_count: int = 0
    epoch: int = 0
    pages_loaded: int = 0

    @property
    def is_loading(self) -> bool:
        return self.is_initial_loading or self.is_loading_more


# Actions


@dataclass(frozen=True)
class QueryStarted:
    epoch: int
    query: ListQuery


@dataclass(frozen=True)
class PageRequested:
    epoch: int
    page: int


@dataclass(frozen=True)
class PageLoaded:
    epoch: int
    page: int
    items: tuple[Project, ...]
    has_more: bool
    total_count: int


@dataclass(frozen=True)
class PageFailed:
    epoch: int
    page: int


Action = Union[QueryStarted, PageRequested, PageLoaded, PageFailed]


def reduce(state: ListState, action: Action) -> ListState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, QueryStarted):
        return ListState(
            query=replace(action.query, page=1),
            epoch=action.epoch,
            is_initial_loading=True,
        )

    if action.epoch != state.epoch:
        logger.debug(f"Ignoring {type(action).__name__} for stale epoch {action.epoch} (current {state.epoch})")
        return state

    if isinstance(action, PageRequested):
        return replace(state, is_loading_more=True)

    if isinstance(action, PageLoaded):
        # Pages apply strictly in order; anything else is a duplicate or out-of-order response
        if action.page != state.pages_loaded + 1:
            logger.debug(f"Ignoring out-of-order page {action.page} (loaded {state.pages_loaded})")
            return state
        return replace(
            state,
            query=replace(state.query, page=action.page),
            items=state.items + tuple(action.items),
            has_more=action.has_more,
            total_count=action.total_count,
            pages_loaded=action.page,
            is_initial_loading=False,
            is_loading_more=False,
        )

    if isinstance(action, PageFailed):
        return replace(state, is_initial_loading=False, is_loading_more=False)

    raise TypeError(f"Unknown action: {action!r}")


def scroll_percentage(scroll_top: float, viewport_height: float, document_height: float) -> float:
    """Fraction of the scrollable distance already scrolled; 0 when nothing can scroll."""
    scrollable = document_height - viewport_height
    if scrollable <= 0:
        return 0.0
    return scroll_top / scrollable


class IncrementalListingLoader:
    """Owns the ListState of one listing and drives it from fetch results."""

    def __init__(
        self,
        fetch_page: Callable[[ListQuery], Awaitable[ProjectPage]],
        page_size: int = PROJECT_PAGE_SIZE,
        on_change: Optional[Callable[[ListState], None]] = None,
    ):
        """Initialize the loader.

        Args:
            fetch_page: Coroutine function returning the page a query points at.
                Raises FetchFailure when the page cannot be fetched.
            page_size: Number of records requested per page.
            on_change: Called with the new state after every transition.
        """
        self._fetch_page = fetch_page
        self._on_change = on_change
        self._epoch = 0
        self.page_size = page_size
        self.state = ListState(query=ListQuery(page_size=page_size))

    def dispatch(self, action: Action) -> ListState:
        new_state = reduce(self.state, action)
        if new_state is not self.state:
            self.state = new_state
            if self._on_change:
                self._on_change(new_state)
        return self.state

    async def start_new_query(self, search_term: str = "", category: str = ALL_CATEGORIES) -> None:
        """Restart the listing for a new filter and load its first page."""
        self._epoch += 1
        query = ListQuery(
            search_term=(search_term or "").strip(),
            category=category or ALL_CATEGORIES,
            page=1,
            page_size=self.page_size,
        )
        self.dispatch(QueryStarted(self._epoch, query))
        await self._fetch(self._epoch, query)

    async def load_next_page(self) -> bool:
        """Append the next page. Returns False when there was nothing to do."""
        state = self.state
        if state.is_loading or not state.has_more or state.epoch == 0:
            return False

        # Marks the listing busy before the first await so a second call is a no-op
        query = replace(state.query, page=state.pages_loaded + 1)
        self.dispatch(PageRequested(state.epoch, query.page))
        await self._fetch(state.epoch, query)
        return True

    async def on_scroll(self, scroll_top: float, viewport_height: float, document_height: float) -> bool:
        if scroll_percentage(scroll_top, viewport_height, document_height) >= SCROLL_LOAD_THRESHOLD:
            return await self.load_next_page()
        return False

    async def _fetch(self, epoch: int, query: ListQuery) -> None:
        try:
            page = await self._fetch_page(query)
        except FetchFailure as e:
            logger.warning(f"Failed to load page {query.page} of {query.signature}: {e}")
            self.dispatch(PageFailed(epoch, query.page))
            return

        self.dispatch(PageLoaded(epoch, query.page, page.items, page.has_more, page.total_count))
