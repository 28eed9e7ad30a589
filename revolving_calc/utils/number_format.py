"""Locale-aware number and EUR currency formatting for the supported languages"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

NBSP = "\u00a0"
NNBSP = "\u202f"


@dataclass(frozen=True)
class NumberLocale:
    """Separators and currency placement for one language"""

    decimal_sep: str
    group_sep: str
    currency_pattern: str  # "{}" is replaced by the formatted number


LOCALES: Dict[str, NumberLocale] = {
    "fr": NumberLocale(decimal_sep=",", group_sep=NNBSP, currency_pattern="{}" + NBSP + "€"),
    "en": NumberLocale(decimal_sep=".", group_sep=",", currency_pattern="€{}"),
    "nl": NumberLocale(decimal_sep=",", group_sep=".", currency_pattern="€" + NBSP + "{}"),
    "de": NumberLocale(decimal_sep=",", group_sep=".", currency_pattern="{}" + NBSP + "€"),
}


def get_locale(language: str) -> NumberLocale:
    return LOCALES.get(language, LOCALES["fr"])


def to_decimal(value) -> Decimal:
    """Convert JSON numbers to Decimal through their string form (0.1 stays 0.1)"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_number(value, language: str, digits: int = 2) -> str:
    """
    Format a number with a fixed count of fractional digits.

    Example:
        format_number(1234.5, "fr") -> "1 234,50" (narrow no-break space)
        format_number(1234.5, "en") -> "1,234.50"
    """
    locale = get_locale(language)
    quantum = Decimal(1).scaleb(-digits)
    rounded = to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    # Python renders "," groups and "." decimals; swap both in a single pass
    raw = format(rounded, f",.{digits}f")
    return raw.translate({ord(","): locale.group_sep, ord("."): locale.decimal_sep})


def format_percent(fraction, language: str, digits: int = 2) -> str:
    """Turn a fraction (0.1349) into a percent string ("13.49"); None counts as 0"""
    value = to_decimal(fraction) if fraction is not None else Decimal(0)
    return format_number(value * 100, language, digits)


def format_int_currency(amount, language: str) -> str:
    """EUR amount without decimals, e.g. "1 250 €" (fr) or "€1,250" (en)"""
    return get_locale(language).currency_pattern.format(format_number(amount, language, digits=0))
