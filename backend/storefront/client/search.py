"""Debounced Search — search-as-you-type state machine for the storefront header.

Invariants:
    - Only the trailing term of a burst is looked up: every keystroke cancels
      and restarts the quiet-period timer
    - At most one lookup per quiet period regardless of typing speed
    - Every lookup carries a sequence number; every keystroke and every new
      lookup advance it, so a response that arrives after the user typed again
      is discarded: a slow stale response never overwrites a newer term
    - Overlay visibility is independent of the term: dismiss() hides it without
      clearing the term or cancelling the lookup
    - Clearing the term returns to IDLE immediately and invalidates in-flight lookups

Design Decisions:
    - Out-of-order responses are discarded, not cancelled: the backend request
      is cheap and cancellation would not reach the server anyway
    - Lookup failures stay silent in the overlay (state EMPTY, no message) but
      are logged and kept in last_error for hosts that want to show them
"""

import asyncio
import logging

from storefront.core.domain_types import SearchState
from storefront.core.repository_protocols import SearchBackend
from storefront.core.search_terms import details_url, normalize_term, results_url

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class DebouncedSearch:
    """One search widget instance. Must be driven from a running event loop."""

    def __init__(
        self,
        backend: SearchBackend,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self.backend = backend
        self.debounce_seconds = debounce_seconds

        self.term = ""
        self.debounced_term = ""
        self.recommendations: list[dict] = []
        self.state = SearchState.IDLE
        self.overlay_visible = False
        self.last_error: Exception | None = None

        self._timer: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()
        self._request_seq = 0

    @property
    def is_loading(self) -> bool:
        return self.state == SearchState.LOADING

    # ─── User events ──────────────────────────────────────────────

    def on_input(self, term: str) -> None:
        """Keystroke: record the term and restart the quiet period."""
        self.term = term
        self._cancel_timer()
        self._request_seq += 1

        if not normalize_term(term):
            self.debounced_term = ""
            self.recommendations = []
            self.state = SearchState.IDLE
            self.overlay_visible = False
            return

        self.state = SearchState.PENDING
        self._timer = asyncio.get_running_loop().create_task(
            self._debounce(term),
        )

    def dismiss(self) -> None:
        """Interaction outside the widget: hide the overlay only."""
        self.overlay_visible = False

    def focus(self) -> None:
        """Back in the widget: show the overlay again if there is something to show."""
        if self.debounced_term:
            self.overlay_visible = True

    def submit(self) -> str | None:
        """Enter / search button: URL of the full results page, or None.

        Navigation needs a non-blank term or at least one loaded recommendation.
        """
        term = normalize_term(self.term)
        if not term and not self.recommendations:
            return None
        return results_url(term or self.debounced_term)

    @staticmethod
    def product_url(product: dict) -> str:
        return details_url(product["code"])

    # ─── Lifecycle ────────────────────────────────────────────────

    async def settle(self) -> None:
        """Wait until no timer is pending and no lookup is in flight."""
        while self._timer is not None or self._inflight:
            pending = [*self._inflight]
            if self._timer is not None:
                pending.append(self._timer)
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel the timer and every in-flight lookup."""
        self._cancel_timer()
        tasks = list(self._inflight)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # ─── Internals ────────────────────────────────────────────────

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _debounce(self, term: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._timer = None
        self._fire(normalize_term(term))

    def _fire(self, term: str) -> None:
        self._request_seq += 1
        self.debounced_term = term
        self.state = SearchState.LOADING
        self.overlay_visible = True

        task = asyncio.get_running_loop().create_task(
            self._lookup(self._request_seq, term),
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _lookup(self, seq: int, term: str) -> None:
        try:
            products = await self.backend.search_products(term)
        except Exception as e:
            if seq != self._request_seq:
                return
            logger.error(f"Product lookup for {term!r} failed: {e}")
            self.last_error = e
            self.recommendations = []
            self.state = SearchState.EMPTY
            return

        if seq != self._request_seq:
            logger.debug(f"Discarding stale results for {term!r}")
            return
        self.last_error = None
        self.recommendations = list(products)
        self.state = SearchState.RESULTS if products else SearchState.EMPTY
