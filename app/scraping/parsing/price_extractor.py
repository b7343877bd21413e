"""
Heuristic price extraction from product page HTML.

The generic path walks every element once in document order and takes the
first element whose ``class`` or ``id`` mentions "price" and whose text
contains a number. Per-domain overrides are tried first as a
priority-ordered list of (predicate, strategy) pairs.

Only ``SoupDocument`` knows about BeautifulSoup; the scan itself works on
anything exposing ``get_attribute`` and ``text_content``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Sequence
from decimal import Decimal, InvalidOperation
from typing import Protocol

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from app.domain.price_scraping import NOT_FOUND_PRICE
from app.scraping.config.models import DomainOverride

logger = logging.getLogger(__name__)

PRICE_PATTERN = re.compile(r"\d+(?:\.\d{1,2})?")
PRICE_MARKER = "price"
_NON_DECIMAL_CHARS = re.compile(r"[^0-9.]")


class PriceElement(Protocol):
    def get_attribute(self, name: str) -> str | None: ...

    def text_content(self) -> str: ...


class PriceDocument(Protocol):
    def elements(self) -> Iterator[PriceElement]: ...

    def select(self, selector: str) -> list[PriceElement]: ...


DomainPredicate = Callable[[str], bool]
ExtractionStrategy = Callable[[PriceDocument], str | None]


class SoupElement:
    """
    PriceElement adapter over a BeautifulSoup tag.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 exposes multi-valued attributes such as class as lists.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def text_content(self) -> str:
        return self._tag.get_text()


class SoupDocument:
    """
    PriceDocument adapter over a parsed BeautifulSoup tree.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_html(cls, html_content: str) -> "SoupDocument":
        return cls(BeautifulSoup(html_content, "html.parser"))

    def elements(self) -> Iterator[PriceElement]:
        for tag in self._soup.find_all(True):
            yield SoupElement(tag)

    def select(self, selector: str) -> list[PriceElement]:
        return [SoupElement(tag) for tag in self._soup.select(selector)]


def is_price_candidate(element: PriceElement) -> bool:
    for attribute in ("class", "id"):
        value = element.get_attribute(attribute)
        if value and PRICE_MARKER in value.lower():
            return True
    return False


def match_price(text: str) -> str | None:
    match = PRICE_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0)


def scan_for_price(elements: Iterator[PriceElement]) -> str:
    """
    Return the first price found among candidate elements, or "0".
    """

    for element in elements:
        if not is_price_candidate(element):
            continue
        price = match_price(element.text_content())
        if price is not None:
            return price
    return NOT_FOUND_PRICE


def normalize_decimal(text: str, decimal_separator: str) -> str:
    """
    Parse ``text`` as a decimal written with ``decimal_separator``.

    Raises ValueError when nothing parseable remains.
    """

    cleaned = text
    if decimal_separator != ".":
        # With a non-dot separator, dots are grouping marks.
        cleaned = cleaned.replace(".", "").replace(decimal_separator, ".")
    cleaned = _NON_DECIMAL_CHARS.sub("", cleaned)
    if not cleaned:
        raise ValueError(f"No digits in {text!r}")
    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal: {text!r}") from exc
    return format(value, "f")


def selector_strategy(override: DomainOverride) -> ExtractionStrategy:
    """
    Build a strategy that reads the price from the override's selector.
    """

    def _extract(document: PriceDocument) -> str | None:
        for element in document.select(override.selector):
            text = element.text_content()
            if override.decimal_separator is None:
                price = match_price(text)
            else:
                try:
                    price = normalize_decimal(text, override.decimal_separator)
                except ValueError:
                    logger.debug(
                        "Override normalization failed domain=%s selector=%s text=%r",
                        override.domain,
                        override.selector,
                        text,
                    )
                    price = None
            if price is not None:
                return price
        return None

    return _extract


def domain_predicate(domain: str) -> DomainPredicate:
    expected = domain.lower()
    return lambda candidate: candidate.lower() == expected


class PriceExtractor:
    """
    Extract a best-guess price string from HTML content.
    """

    def __init__(
        self,
        overrides: Sequence[DomainOverride] = (),
        *,
        strategies: Sequence[tuple[DomainPredicate, ExtractionStrategy]] = (),
    ) -> None:
        self._strategies: list[tuple[DomainPredicate, ExtractionStrategy]] = list(strategies)
        for override in overrides:
            self._strategies.append((domain_predicate(override.domain), selector_strategy(override)))

    def extract(self, html_content: str, domain: str) -> str:
        document = SoupDocument.from_html(html_content)
        return self.extract_from_document(document, domain)

    def extract_from_document(self, document: PriceDocument, domain: str) -> str:
        for predicate, strategy in self._strategies:
            if not predicate(domain):
                continue
            try:
                price = strategy(document)
            except (ValueError, SelectorSyntaxError):
                logger.debug("Override strategy failed for domain=%s", domain, exc_info=True)
                continue
            if price is not None:
                return price
        return scan_for_price(document.elements())
