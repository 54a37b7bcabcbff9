"""
Value and emissions factors, keyed by generator category.

Factors are loaded once at startup and never mutated afterwards, so the
same instance can be shared by every poll cycle.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from .categories import GeneratorCategory
from .errors import MissingFactor, ReferenceLoadError

logger = logging.getLogger(__name__)

DEFAULT_VALUE_FACTORS = {
    GeneratorCategory.OFFSHORE_WIND: Decimal("0.265"),
    GeneratorCategory.ONSHORE_WIND: Decimal("0.946"),
    GeneratorCategory.GAS: Decimal("0.696"),
    GeneratorCategory.COAL: Decimal("0.696"),
}

DEFAULT_EMISSIONS_FACTORS = {
    GeneratorCategory.GAS: Decimal("0.562"),
    GeneratorCategory.COAL: Decimal("0.812"),
}

# Category -> level element under <Factors>/<ValueFactor> and <EmissionsFactor>
VALUE_FACTOR_LEVELS = {
    GeneratorCategory.OFFSHORE_WIND: "Low",
    GeneratorCategory.ONSHORE_WIND: "High",
    GeneratorCategory.GAS: "Medium",
    GeneratorCategory.COAL: "Medium",
}

EMISSIONS_FACTOR_LEVELS = {
    GeneratorCategory.GAS: "Medium",
    GeneratorCategory.COAL: "High",
}


class ReferenceData:
    """Read-only lookup of the factors used by the metrics calculations."""

    def __init__(
        self,
        value_factors: Mapping[GeneratorCategory, Decimal],
        emissions_factors: Mapping[GeneratorCategory, Decimal],
    ) -> None:
        self._value_factors = MappingProxyType(dict(value_factors))
        self._emissions_factors = MappingProxyType(dict(emissions_factors))

    @classmethod
    def defaults(cls) -> ReferenceData:
        return cls(DEFAULT_VALUE_FACTORS, DEFAULT_EMISSIONS_FACTORS)

    @classmethod
    def load(cls, path: Path | str) -> ReferenceData:
        """
        Load factors from a reference data document.

        Levels missing from the document keep their default value.

        Raises:
            ReferenceLoadError: If the file cannot be read, is not well-formed
                XML, or holds a non-numeric factor
        """
        path = Path(path)
        try:
            root = ET.parse(path).getroot()
        except (OSError, ET.ParseError) as e:
            raise ReferenceLoadError(f"Cannot load reference data from {path}: {e}") from e

        factors = root.find("Factors")
        value_factors = _read_levels(
            factors, "ValueFactor", VALUE_FACTOR_LEVELS, DEFAULT_VALUE_FACTORS, path
        )
        emissions_factors = _read_levels(
            factors, "EmissionsFactor", EMISSIONS_FACTOR_LEVELS, DEFAULT_EMISSIONS_FACTORS, path
        )
        logger.info(f"Loaded reference data from {path}")
        return cls(value_factors, emissions_factors)

    @property
    def value_factors(self) -> Mapping[GeneratorCategory, Decimal]:
        return self._value_factors

    @property
    def emissions_factors(self) -> Mapping[GeneratorCategory, Decimal]:
        return self._emissions_factors

    def value_factor(self, category: GeneratorCategory) -> Decimal:
        try:
            return self._value_factors[category]
        except KeyError:
            raise MissingFactor(f"No value factor for category {category}") from None

    def emissions_factor(self, category: GeneratorCategory) -> Decimal:
        """
        Raises:
            MissingFactor: If the category is not gas or coal
        """
        try:
            return self._emissions_factors[category]
        except KeyError:
            raise MissingFactor(f"No emissions factor for category {category}") from None


def _read_levels(
    factors: Optional[ET.Element],
    group_tag: str,
    levels: Mapping[GeneratorCategory, str],
    defaults: Mapping[GeneratorCategory, Decimal],
    path: Path,
) -> dict[GeneratorCategory, Decimal]:
    result = dict(defaults)
    group = factors.find(group_tag) if factors is not None else None
    if group is None:
        logger.warning(f"No <{group_tag}> in {path}, using default factors")
        return result

    for category, level in levels.items():
        text = group.findtext(level)
        if text is None:
            continue
        try:
            value = Decimal(text.strip())
        except InvalidOperation as e:
            raise ReferenceLoadError(
                f"Invalid {group_tag}/{level} value '{text}' in {path}"
            ) from e
        if not value.is_finite():
            raise ReferenceLoadError(f"Invalid {group_tag}/{level} value '{text}' in {path}")
        result[category] = value
    return result
