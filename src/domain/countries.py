"""
Country registry - Stable numeric identifiers for country codes.

The numeric id is what gets persisted, so existing values must never change.
Lookups by id return None for unknown values because stored rows may still
reference retired codes.
"""

from enum import Enum


class CountryCode(int, Enum):
    """Country abbreviation with its persisted numeric id."""

    AT = 10
    BE = 20
    HR = 30
    BG = 40
    CY = 50
    CZ = 60
    DK = 70
    EE = 80
    FI = 90
    FR = 100
    DE = 110
    GR = 120
    HU = 130
    IE = 140
    IT = 150
    LV = 160
    LT = 170
    LU = 180
    MT = 190
    NL = 200
    PL = 210
    PT = 220
    RO = 230
    SK = 240
    SI = 250
    ES = 260
    SE = 270
    GB = 280


def from_id(country_id: int) -> CountryCode | None:
    """Return the country for a persisted id, or None if the id is unknown."""
    try:
        return CountryCode(country_id)
    except ValueError:
        return None


def to_id(code: CountryCode) -> int:
    return code.value


def from_symbol(symbol: str) -> CountryCode | None:
    """Case-insensitive lookup by abbreviation ("fr" -> CountryCode.FR)."""
    return CountryCode.__members__.get(symbol.strip().upper())
