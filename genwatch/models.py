"""
Data models for generator reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .categories import GeneratorCategory


@dataclass
class GenerationRecord:
    """Represents a single day of generation for one generator."""

    date: date
    energy: Decimal
    price: Decimal


@dataclass
class Generator:
    """
    A physical generation unit as reported in an input file.

    Emissions and heat fields stay at zero for categories that do not report
    them (emissions for wind, heat input and net generation for all but coal).
    """

    name: str
    category: GeneratorCategory
    daily_records: list[GenerationRecord] = field(default_factory=list)
    emissions_rating: Decimal = Decimal(0)
    total_heat_input: Decimal = Decimal(0)
    actual_net_generation: Decimal = Decimal(0)

    @property
    def is_fossil(self) -> bool:
        return self.category.is_fossil
