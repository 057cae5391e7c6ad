"""Search Terms — tests for term normalisation, LIKE escaping and URL building."""

from storefront.core.search_terms import (
    normalize_term, like_pattern, results_url, details_url,
)


def test_normalize_term_strips_and_handles_none():
    assert normalize_term("  червило ") == "червило"
    assert normalize_term(None) == ""
    assert normalize_term("   ") == ""


def test_like_pattern_wraps_plain_term():
    assert like_pattern("lip") == "%lip%"


def test_like_pattern_escapes_wildcards():
    assert like_pattern("100%") == "%100\\%%"
    assert like_pattern("a_b") == "%a\\_b%"


def test_like_pattern_escapes_escape_char_first():
    assert like_pattern("a\\%") == "%a\\\\\\%%"


def test_results_url_encodes_query():
    assert results_url("red lip") == "/product-catalog/results?query=red+lip"
    assert results_url("a&b=c") == "/product-catalog/results?query=a%26b%3Dc"


def test_results_url_encodes_cyrillic():
    assert results_url("шапка") == (
        "/product-catalog/results?query=%D1%88%D0%B0%D0%BF%D0%BA%D0%B0"
    )


def test_details_url_quotes_code():
    assert details_url("LIP-001") == "/product-catalog/details/LIP-001"
    assert details_url("A/B 1") == "/product-catalog/details/A%2FB%201"
