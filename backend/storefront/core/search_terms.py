"""Search Terms — normalisation and URL building for product search.

Invariants:
    - All functions are pure
    - A blank term never reaches the data store
    - LIKE wildcards typed by the user match literally
"""

from urllib.parse import quote, urlencode

RESULTS_PATH = "/product-catalog/results"
DETAILS_PATH = "/product-catalog/details"

LIKE_ESCAPE = "\\"


def normalize_term(term: str | None) -> str:
    return (term or "").strip()


def like_pattern(term: str) -> str:
    """Substring pattern with %, _ and the escape char escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def results_url(term: str) -> str:
    """Full results page for a term, query string encoded."""
    return f"{RESULTS_PATH}?{urlencode({'query': term})}"


def details_url(code: str) -> str:
    return f"{DETAILS_PATH}/{quote(code, safe='')}"
