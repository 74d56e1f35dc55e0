"""Enumeration types for restaurants."""

from enum import Enum, IntEnum


class CuisineType(str, Enum):
    ITALIAN = "italian"
    MEXICAN = "mexican"
    THAI = "thai"
    FRENCH = "french"
    AMERICAN = "american"
    JAPANESE = "japanese"
    CHINESE = "chinese"
    INDIAN = "indian"
    MEDITERRANEAN = "mediterranean"
    OTHER = "other"


class PriceRange(IntEnum):
    BUDGET = 1
    MODERATE = 2
    UPSCALE = 3
