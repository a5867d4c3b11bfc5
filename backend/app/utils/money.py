"""Money helpers.

All monetary outputs are rounded with ROUND_HALF_UP (half away from zero)
on the decimal representation, so 0.125 → 0.13 and -0.125 → -0.13, and
rounding an already-rounded value is a no-op.

`format_currency` is for the HTTP boundary only; the core works with plain
numbers.
"""

from decimal import ROUND_HALF_UP, Decimal

from app.config import settings

CENT = Decimal("0.01")


def to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: float | int | Decimal) -> float:
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def format_currency(amount: float | int | Decimal, symbol: str | None = None) -> str:
    """Turkish formatting: ₺1.234.567,89"""
    symbol = settings.currency_symbol if symbol is None else symbol
    rounded = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    whole, frac = f"{abs(rounded):,.2f}".split(".")
    return f"{sign}{symbol}{whole.replace(',', '.')},{frac}"


def format_number(value: float | int, unit: str = "") -> str:
    """Thousands with dots, as the dashboard shows them: 12.500 km"""
    if float(value).is_integer():
        text = f"{int(value):,}".replace(",", ".")
    else:
        whole, frac = f"{value:,.2f}".split(".")
        text = f"{whole.replace(',', '.')},{frac}"
    return f"{text} {unit}".strip()
