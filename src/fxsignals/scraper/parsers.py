"""HTML parsing for investing.com pages.

Pure functions over rendered page HTML so the extraction rules can be tested
without a browser. Only 3-star (high impact) calendar rows are kept.
"""

import re

from bs4 import BeautifulSoup, Tag

from fxsignals.scraper.models import ForexQuote, ScrapedEvent

HIGH_IMPACT_STARS = 3

CALENDAR_ROW_SELECTOR = "#economicCalendarData tr.js-event-item"
HISTORY_ROW_SELECTOR = ".economicCalendarTable tbody tr, #economicCalendarData tr"
HISTORY_READY_SELECTOR = ".economicCalendarTable, #economicCalendarData"
CALENDAR_READY_SELECTOR = "#economicCalendarData"
IMPACT_ICON_SELECTOR = ".grayFullBullishIcon"

QUOTE_PRICE_SELECTOR = '[data-test="instrument-price-last"]'
QUOTE_CHANGE_SELECTOR = '[data-test="instrument-price-change"]'
QUOTE_CHANGE_PERCENT_SELECTOR = '[data-test="instrument-price-change-percent"]'

#: Magnitude suffixes used in investing.com release values.
_SUFFIXES = {"K": 1_000.0, "M": 1_000_000.0, "B": 1_000_000_000.0, "T": 1_000_000_000_000.0}
_NUMERIC_RE = re.compile(r"^([+-]?\d+(?:\.\d+)?)([KMBT])?%?$")


def _text(node: Tag | None) -> str:
    if node is None:
        return ""
    return node.get_text(strip=True)


def _impact_stars(row: Tag) -> int:
    impact_cell = row.select_one(".sentiment")
    if impact_cell is None:
        return 0
    return len(impact_cell.select(IMPACT_ICON_SELECTOR))


def parse_calendar(html: str) -> list[ScrapedEvent]:
    """Extract today's high-impact events from the economic calendar page."""
    soup = BeautifulSoup(html, "html.parser")
    events: list[ScrapedEvent] = []

    for row in soup.select(CALENDAR_ROW_SELECTOR):
        stars = _impact_stars(row)
        if stars != HIGH_IMPACT_STARS:
            continue
        events.append(
            ScrapedEvent(
                date=_text(row.select_one(".date")),
                time=_text(row.select_one(".time")),
                currency=_text(row.select_one(".flagCur")),
                event=_text(row.select_one(".event a")),
                actual=_text(row.select_one(".act")),
                forecast=_text(row.select_one(".fore")),
                previous=_text(row.select_one(".prev")),
                impact=stars,
            )
        )

    return events


def parse_indicator_history(html: str, limit: int = 12) -> list[ScrapedEvent]:
    """Extract past releases from an indicator's calendar page (newest first).

    Only the first ``limit`` table rows are inspected; rows with fewer than
    seven cells or below 3-star impact are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    events: list[ScrapedEvent] = []

    for row in soup.select(HISTORY_ROW_SELECTOR)[:limit]:
        cells = row.find_all("td")
        if len(cells) < 7:
            continue
        stars = _impact_stars(row)
        if stars != HIGH_IMPACT_STARS:
            continue
        date, time, currency, event, actual, forecast, previous = (
            _text(c) for c in cells[:7]
        )
        events.append(
            ScrapedEvent(
                date=date,
                time=time,
                currency=currency,
                event=event,
                actual=actual,
                forecast=forecast,
                previous=previous,
                impact=stars,
            )
        )

    return events


def parse_forex_quote(html: str, pair: str) -> ForexQuote | None:
    """Extract last price, change and change percent from a currency page.

    Returns None when the page has no price element.
    """
    soup = BeautifulSoup(html, "html.parser")
    price = _text(soup.select_one(QUOTE_PRICE_SELECTOR))
    if not price:
        return None
    return ForexQuote(
        pair=pair,
        price=price,
        change=_text(soup.select_one(QUOTE_CHANGE_SELECTOR)),
        change_percent=_text(soup.select_one(QUOTE_CHANGE_PERCENT_SELECTOR)),
    )


def parse_numeric(text: str | None) -> float | None:
    """Parse release text such as "256K", "3.8%", "1.45M" or "-2.1B".

    Thousands separators are ignored. Returns None for blank or unparseable
    values.
    """
    if not text:
        return None
    cleaned = text.strip().replace(",", "").upper()
    match = _NUMERIC_RE.match(cleaned)
    if match is None:
        return None
    value = float(match.group(1))
    suffix = match.group(2)
    if suffix:
        value *= _SUFFIXES[suffix]
    return value
