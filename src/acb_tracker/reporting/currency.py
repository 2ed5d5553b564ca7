from decimal import Decimal, ROUND_HALF_UP
from typing import Union

# en-CA display symbols; anything else is shown with its ISO code
CURRENCY_SYMBOLS = {
    "CAD": "$",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
}


def cents_to_dollars(cents: float) -> float:
    return cents / 100


def dollars_to_cents(dollars: Union[float, str, Decimal]) -> int:
    """
    Convert a major-unit amount to whole cents, rounding half away from zero.

    So -0.005 gives -1, where a round-half-toward-positive-infinity rule
    would give 0.
    """
    amount = Decimal(str(dollars)) * 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(cents: float, currency: str = "CAD") -> str:
    dollars = Decimal(str(cents_to_dollars(cents))).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol is None:
        return f"{sign}{currency.upper()} {abs(dollars):,.2f}"
    return f"{sign}{symbol}{abs(dollars):,.2f}"
