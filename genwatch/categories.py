"""
Generator category constants.
"""

from enum import StrEnum


class GeneratorCategory(StrEnum):
    """
    Closed set of generator categories found in generation reports.

    Wind generators are split by location; gas and coal are fixed by the
    element they are reported under.

    Usage:
        >>> GeneratorCategory("Gas")  # GeneratorCategory.GAS
        >>> GeneratorCategory.COAL.is_fossil  # True
    """

    OFFSHORE_WIND = "OffshoreWind"
    ONSHORE_WIND = "OnshoreWind"
    GAS = "Gas"
    COAL = "Coal"

    @property
    def is_fossil(self) -> bool:
        return self in (GeneratorCategory.GAS, GeneratorCategory.COAL)
