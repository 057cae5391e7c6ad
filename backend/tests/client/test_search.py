"""Debounced Search — tests for the search-as-you-type state machine.

Tests cover:
    - A typing burst produces exactly one lookup, for the trailing term
    - A slow stale response never overwrites a newer one, even while the newer
      term is still waiting out its quiet period
    - Clearing the term returns to IDLE and invalidates in-flight lookups
    - Lookup failures end in EMPTY with last_error recorded
    - dismiss/focus toggle the overlay only
    - submit() navigation rules and URL encoding
"""

import asyncio

import pytest

from storefront.client.search import DebouncedSearch
from storefront.core.domain_types import SearchState
from storefront.core.errors import ClientRequestError

DEBOUNCE = 0.02


class RecordingBackend:
    """Answers immediately from a fixed table; records every term asked."""

    def __init__(self, results: dict[str, list[dict]] | None = None):
        self.results = results or {}
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def search_products(self, term: str) -> list[dict]:
        self.calls.append(term)
        if self.error:
            raise self.error
        return self.results.get(term, [])


class GatedBackend:
    """Each term's response is held until its gate is opened."""

    def __init__(self, results: dict[str, list[dict]]):
        self.results = results
        self.calls: list[str] = []
        self.gates = {term: asyncio.Event() for term in results}

    async def search_products(self, term: str) -> list[dict]:
        self.calls.append(term)
        await self.gates[term].wait()
        return self.results[term]


async def _until(predicate, attempts: int = 200):
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0.005)
    raise AssertionError("condition not reached")


LIP = [{"name": "Red Lipstick", "code": "LIP-001"}]
LIPSTICK = [{"name": "Red Lipstick", "code": "LIP-001"}, {"name": "Lipstick Pro", "code": "LIP-900"}]


# ─── Debounce ────────────────────────────────────────────────────

async def test_burst_issues_single_lookup_for_last_term():
    backend = RecordingBackend({"lip": LIP})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    for term in ("l", "li", "lip"):
        search.on_input(term)
        await asyncio.sleep(DEBOUNCE / 4)
    await search.settle()

    assert backend.calls == ["lip"]
    assert search.debounced_term == "lip"
    assert search.recommendations == LIP
    assert search.state == SearchState.RESULTS
    assert search.overlay_visible is True


async def test_state_is_pending_until_quiet_period_ends():
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)

    search.on_input("lip")

    assert search.state == SearchState.PENDING
    assert search.overlay_visible is False
    await search.aclose()


async def test_term_is_trimmed_before_lookup():
    backend = RecordingBackend({"lip": LIP})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("  lip ")
    await search.settle()

    assert backend.calls == ["lip"]


async def test_no_match_ends_empty_with_overlay_visible():
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)

    search.on_input("шапка")
    await search.settle()

    assert search.state == SearchState.EMPTY
    assert search.recommendations == []
    assert search.overlay_visible is True


# ─── Out-of-order responses ──────────────────────────────────────

async def test_stale_response_does_not_overwrite_newer_one():
    backend = GatedBackend({"lip": LIP, "lipstick": LIPSTICK})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("lip")
    await _until(lambda: backend.calls == ["lip"])
    assert search.is_loading

    search.on_input("lipstick")
    await _until(lambda: backend.calls == ["lip", "lipstick"])

    backend.gates["lipstick"].set()
    await _until(lambda: search.state == SearchState.RESULTS)
    backend.gates["lip"].set()
    await search.settle()

    assert search.recommendations == LIPSTICK
    assert search.debounced_term == "lipstick"


async def test_response_arriving_during_next_quiet_period_is_discarded():
    backend = GatedBackend({"lip": LIP})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("lip")
    await _until(lambda: backend.calls == ["lip"])
    search.debounce_seconds = 5.0
    search.on_input("lipstick")

    backend.gates["lip"].set()
    await _until(lambda: not search._inflight)

    assert search.state == SearchState.PENDING
    assert search.recommendations == []
    assert search.term == "lipstick"
    assert backend.calls == ["lip"]
    await search.aclose()


# ─── Clearing the term ───────────────────────────────────────────

async def test_clearing_before_quiet_period_skips_lookup():
    backend = RecordingBackend({"lip": LIP})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("lip")
    search.on_input("   ")
    await search.settle()

    assert backend.calls == []
    assert search.state == SearchState.IDLE
    assert search.overlay_visible is False


async def test_clearing_discards_in_flight_lookup():
    backend = GatedBackend({"lip": LIP})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("lip")
    await _until(lambda: backend.calls == ["lip"])
    search.on_input("")
    backend.gates["lip"].set()
    await search.settle()

    assert search.state == SearchState.IDLE
    assert search.recommendations == []
    assert search.overlay_visible is False


# ─── Failures ────────────────────────────────────────────────────

async def test_lookup_failure_ends_empty_and_records_error():
    backend = RecordingBackend()
    backend.error = ClientRequestError("search returned 500")
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("lip")
    await search.settle()

    assert search.state == SearchState.EMPTY
    assert search.recommendations == []
    assert search.last_error is backend.error


async def test_successful_lookup_clears_previous_error():
    backend = RecordingBackend({"lip": LIP})
    backend.error = ClientRequestError("search returned 500")
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("li")
    await search.settle()
    backend.error = None
    search.on_input("lip")
    await search.settle()

    assert search.last_error is None
    assert search.state == SearchState.RESULTS


# ─── Overlay ─────────────────────────────────────────────────────

async def test_dismiss_hides_overlay_but_keeps_state():
    search = DebouncedSearch(RecordingBackend({"lip": LIP}), debounce_seconds=DEBOUNCE)
    search.on_input("lip")
    await search.settle()

    search.dismiss()

    assert search.overlay_visible is False
    assert search.term == "lip"
    assert search.recommendations == LIP

    search.focus()
    assert search.overlay_visible is True


async def test_focus_without_lookup_keeps_overlay_hidden():
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)
    search.focus()
    assert search.overlay_visible is False


# ─── Navigation ──────────────────────────────────────────────────

async def test_submit_blank_without_recommendations_returns_none():
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)
    search.on_input("  ")
    assert search.submit() is None


async def test_submit_uses_current_term_encoded():
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)
    search.on_input("red lip")

    assert search.submit() == "/product-catalog/results?query=red+lip"
    await search.aclose()


async def test_submit_falls_back_to_looked_up_term():
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)
    search.term = ""
    search.debounced_term = "lip"
    search.recommendations = LIP

    assert search.submit() == "/product-catalog/results?query=lip"


def test_product_url_points_at_details_page():
    assert DebouncedSearch.product_url({"code": "LIP-001"}) == (
        "/product-catalog/details/LIP-001"
    )


# ─── Lifecycle ───────────────────────────────────────────────────

async def test_aclose_cancels_in_flight_lookup():
    backend = GatedBackend({"lip": LIP})
    search = DebouncedSearch(backend, debounce_seconds=DEBOUNCE)

    search.on_input("lip")
    await _until(lambda: backend.calls == ["lip"])
    await search.aclose()
    await _until(lambda: not search._inflight)

    assert search.state == SearchState.LOADING
    assert search.recommendations == []


@pytest.mark.parametrize("term", ["", "   "])
async def test_blank_input_from_idle_stays_idle(term):
    search = DebouncedSearch(RecordingBackend(), debounce_seconds=DEBOUNCE)
    search.on_input(term)
    assert search.state == SearchState.IDLE
