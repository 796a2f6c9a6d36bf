"""Static reference tables: supported indicators, pairs, baselines and slugs.

Baselines are the plausible central values used to synthesize
current/forecast/previous readings. Base prices are fixed mid prices that
get a small jitter per request to emulate a live tick.
"""

from decimal import Decimal

from fxsignals.exceptions import UnknownIndicatorError, UnknownPairError

#: Indicator id -> baseline value (units of the indicator's own release).
INDICATOR_BASELINES: dict[str, float] = {
    "NFP": 200_000.0,
    "UNEMPLOYMENT": 3.8,
    "PMI_MANUFACTURING": 52.5,
    "PMI_SERVICES": 54.2,
    "FOMC": 5.25,
    "HOUSING_STARTS": 1_450_000.0,
    "BUILDING_PERMITS": 1_480_000.0,
    "HOUSING_SALES": 4_200_000.0,
    "CPI": 3.1,
    "CRUDE_OIL": 1.5,  # Weekly inventory change, millions of barrels
    "GDP": 2.5,
}

INDICATORS: tuple[str, ...] = tuple(INDICATOR_BASELINES)

#: Human-readable labels for the indicator selector.
INDICATOR_LABELS: dict[str, str] = {
    "NFP": "Payroll (NFP)",
    "UNEMPLOYMENT": "Taxa de Desemprego",
    "PMI_MANUFACTURING": "PMI Industrial",
    "PMI_SERVICES": "PMI Serviços",
    "FOMC": "FOMC",
    "HOUSING_STARTS": "Housing Starts",
    "BUILDING_PERMITS": "Building Permits",
    "HOUSING_SALES": "Housing Sales",
    "CPI": "CPI",
    "CRUDE_OIL": "Estoques de Petróleo",
    "GDP": "PIB Anual",
}

#: Investing.com economic-calendar slugs.
INVESTING_INDICATOR_SLUGS: dict[str, str] = {
    "NFP": "non-farm-payrolls-227",
    "UNEMPLOYMENT": "unemployment-rate-300",
    "PMI_MANUFACTURING": "ism-manufacturing-pmi-176",
    "PMI_SERVICES": "ism-services-pmi-177",
    "FOMC": "fomc-interest-rate-decision-168",
    "HOUSING_STARTS": "housing-starts-153",
    "BUILDING_PERMITS": "building-permits-154",
    "HOUSING_SALES": "existing-home-sales-155",
    "CPI": "cpi-733",
    "CRUDE_OIL": "eia-crude-oil-inventories-75",
    "GDP": "gdp-annual-growth-rate-374",
}

BASE_PAIRS: tuple[str, ...] = (
    "EUR/USD",
    "USD/JPY",
    "USD/CHF",
    "USD/CAD",
    "EUR/JPY",
    "CHF/JPY",
)

EXTENDED_PAIRS: tuple[str, ...] = BASE_PAIRS + (
    "GBP/USD",
    "AUD/USD",
    "NZD/USD",
    "EUR/GBP",
)

#: Pair id -> fixed base mid price.
PAIR_BASE_PRICES: dict[str, Decimal] = {
    "EUR/USD": Decimal("1.0850"),
    "USD/JPY": Decimal("149.50"),
    "USD/CHF": Decimal("0.8750"),
    "USD/CAD": Decimal("1.3550"),
    "EUR/JPY": Decimal("162.30"),
    "CHF/JPY": Decimal("170.80"),
    "GBP/USD": Decimal("1.2650"),
    "AUD/USD": Decimal("0.6550"),
    "NZD/USD": Decimal("0.6050"),
    "EUR/GBP": Decimal("0.8580"),
}


def get_baseline(indicator: str) -> float:
    """Return the baseline value for an indicator.

    Raises:
        UnknownIndicatorError: If the indicator is not supported.
    """
    try:
        return INDICATOR_BASELINES[indicator]
    except KeyError:
        raise UnknownIndicatorError(indicator) from None


def get_base_price(pair: str) -> Decimal:
    """Return the fixed base price for a pair.

    Raises:
        UnknownPairError: If the pair is not supported.
    """
    try:
        return PAIR_BASE_PRICES[pair]
    except KeyError:
        raise UnknownPairError(pair) from None


def split_pair(pair: str) -> tuple[str, str]:
    """Split "EUR/USD" into ("EUR", "USD").

    Raises:
        UnknownPairError: If the id is not two 3-letter codes joined by "/".
    """
    parts = pair.split("/")
    if len(parts) != 2 or not all(len(p) == 3 and p.isalpha() for p in parts):
        raise UnknownPairError(pair)
    return parts[0].upper(), parts[1].upper()


def pair_set(extended: bool = False) -> tuple[str, ...]:
    """Return the default pair set analyzed per request."""
    return EXTENDED_PAIRS if extended else BASE_PAIRS


def forex_slug(pair: str) -> str:
    """Convert "EUR/USD" to the investing.com currency slug "eur-usd"."""
    base, quote = split_pair(pair)
    return f"{base}-{quote}".lower()
