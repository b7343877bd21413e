"""
tests/test_price_extractor.py

Unit tests for heuristic price extraction.

Coverage
--------
- class/id candidate detection (case-insensitive)
- first match in document order wins
- non-numeric candidates skipped
- not-found sentinel
- idempotency
- domain override selectors, decimal separator normalisation, fallback
- capability interface without BeautifulSoup
"""

from __future__ import annotations

import pytest

from app.scraping.config.models import DomainOverride
from app.scraping.parsing.price_extractor import (
    PriceExtractor,
    is_price_candidate,
    normalize_decimal,
    scan_for_price,
)


@pytest.fixture()
def extractor() -> PriceExtractor:
    return PriceExtractor()


class TestGenericScan:
    def test_first_candidate_in_document_order_wins(self, extractor: PriceExtractor) -> None:
        html = '<div><span class="price">$10</span><span class="price">$5</span></div>'
        assert extractor.extract(html, "shop.example") == "10"

    def test_matches_id_attribute(self, extractor: PriceExtractor) -> None:
        html = '<p id="ProductPrice">Now only 24.99 EUR</p>'
        assert extractor.extract(html, "shop.example") == "24.99"

    def test_class_match_is_case_insensitive(self, extractor: PriceExtractor) -> None:
        html = '<strong class="Sale-PRICE-Tag">USD 7.5</strong>'
        assert extractor.extract(html, "shop.example") == "7.5"

    def test_fraction_limited_to_two_digits(self, extractor: PriceExtractor) -> None:
        html = '<span class="price">3.14159</span>'
        assert extractor.extract(html, "shop.example") == "3.14"

    def test_non_numeric_candidate_is_skipped(self, extractor: PriceExtractor) -> None:
        html = '<span class="price">Free</span><span class="price-now">$12.00</span>'
        assert extractor.extract(html, "shop.example") == "12.00"

    def test_elements_without_price_marker_are_ignored(self, extractor: PriceExtractor) -> None:
        html = '<span class="amount">$99</span><span class="cost">$5</span>'
        assert extractor.extract(html, "shop.example") == "0"

    def test_empty_document_returns_not_found(self, extractor: PriceExtractor) -> None:
        assert extractor.extract("", "shop.example") == "0"

    def test_outer_candidate_sees_descendant_text(self, extractor: PriceExtractor) -> None:
        html = '<div class="price-box"><em>from</em> <b>42</b></div><span class="price">7</span>'
        assert extractor.extract(html, "shop.example") == "42"

    def test_extraction_is_idempotent(self, extractor: PriceExtractor) -> None:
        html = '<ul><li class="old-price">$30</li><li class="price">$25</li></ul>'
        first = extractor.extract(html, "shop.example")
        assert first == "30"
        assert extractor.extract(html, "shop.example") == first


class TestDomainOverrides:
    def test_override_selector_takes_priority(self) -> None:
        extractor = PriceExtractor(
            [DomainOverride(domain="shop.example", selector="#buy-box .amount")]
        )
        html = (
            '<span class="price">$99</span>'
            '<div id="buy-box"><span class="amount">$45.50</span></div>'
        )
        assert extractor.extract(html, "shop.example") == "45.50"

    def test_override_ignored_for_other_domains(self) -> None:
        extractor = PriceExtractor(
            [DomainOverride(domain="shop.example", selector="#buy-box .amount")]
        )
        html = '<span class="price">$99</span><div id="buy-box"><span class="amount">$45</span></div>'
        assert extractor.extract(html, "other.example") == "99"

    def test_decimal_separator_is_normalised(self) -> None:
        extractor = PriceExtractor(
            [DomainOverride(domain="shop.de", selector="span.betrag", decimal_separator=",")]
        )
        html = '<span class="betrag">1.234,56 €</span><span class="price">9</span>'
        assert extractor.extract(html, "shop.de") == "1234.56"

    def test_normalisation_failure_falls_back_to_generic_scan(self) -> None:
        extractor = PriceExtractor(
            [DomainOverride(domain="shop.de", selector="span.betrag", decimal_separator=",")]
        )
        html = '<span class="betrag">auf Anfrage</span><span class="price">19,90</span>'
        assert extractor.extract(html, "shop.de") == "19"

    def test_missing_selector_falls_back_to_generic_scan(self) -> None:
        extractor = PriceExtractor([DomainOverride(domain="shop.example", selector=".nothing")])
        assert extractor.extract('<span class="price">8</span>', "shop.example") == "8"

    def test_invalid_selector_falls_back_to_generic_scan(self) -> None:
        extractor = PriceExtractor([DomainOverride(domain="shop.example", selector="span[")])
        assert extractor.extract('<span class="price">8</span>', "shop.example") == "8"

    def test_custom_strategies_run_before_overrides(self) -> None:
        extractor = PriceExtractor(
            [DomainOverride(domain="shop.example", selector=".amount")],
            strategies=[(lambda domain: domain.endswith(".example"), lambda document: "1.00")],
        )
        assert extractor.extract('<span class="amount">5</span>', "shop.example") == "1.00"


class TestNormalizeDecimal:
    @pytest.mark.parametrize(
        "text, separator, expected",
        [
            ("12,50", ",", "12.50"),
            ("EUR 1.299,00", ",", "1299.00"),
            ("$ 19.99", ".", "19.99"),
        ],
    )
    def test_parses(self, text: str, separator: str, expected: str) -> None:
        assert normalize_decimal(text, separator) == expected

    def test_rejects_text_without_digits(self) -> None:
        with pytest.raises(ValueError):
            normalize_decimal("sold out", ",")


class _Element:
    def __init__(self, text: str, **attributes: str) -> None:
        self._text = text
        self._attributes = attributes

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name)

    def text_content(self) -> str:
        return self._text


class TestCapabilityInterface:
    def test_scan_works_without_html_parser(self) -> None:
        elements = [
            _Element("Widget", **{"class": "title"}),
            _Element("Free shipping", id="shipping-price"),
            _Element("£15", id="main-price"),
        ]
        assert scan_for_price(iter(elements)) == "15"

    def test_candidate_requires_class_or_id(self) -> None:
        assert is_price_candidate(_Element("1", **{"data-price": "1"})) is False
        assert is_price_candidate(_Element("1", id="PRICE")) is True
