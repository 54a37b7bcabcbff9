"""
Metrics over parsed generator data.

These helpers operate on already-parsed generators and do not handle
file discovery or output concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, DivisionByZero, InvalidOperation, localcontext
from typing import Dict, Iterable, Optional

from .categories import GeneratorCategory
from .models import Generator
from .reference import ReferenceData


@dataclass
class TotalRow:
    """Total generation value of one generator."""

    name: str
    total: Decimal


@dataclass
class PeakEmissionRow:
    """The generator with the highest emission on a given day."""

    date: date
    name: str
    emission: Optional[Decimal]


@dataclass
class HeatRateRow:
    """Actual heat rate of one coal generator."""

    name: str
    heat_rate: Decimal


@dataclass
class GenerationMetrics:
    """All results computed for a single report."""

    totals: list[TotalRow] = field(default_factory=list)
    peak_emissions: list[PeakEmissionRow] = field(default_factory=list)
    heat_rates: list[HeatRateRow] = field(default_factory=list)


class GenerationStats:
    """Encapsulates the metric calculations over one report's generators."""

    def __init__(self, generators: Iterable[Generator], reference: ReferenceData):
        """
        Args:
            generators: Generators in parse order (wind, gas, coal).
            reference: Factor lookup used for value and emissions calculations.
        """
        self.generators: list[Generator] = list(generators or [])
        self.reference = reference

    def total_generation_values(self) -> list[TotalRow]:
        """
        Compute energy x price x value factor summed over each generator's days.

        Returns:
            One TotalRow per generator, in parse order.
        """
        results = []
        for generator in self.generators:
            factor = self.reference.value_factor(generator.category)
            revenue = sum((d.energy * d.price for d in generator.daily_records), Decimal(0))
            results.append(TotalRow(name=generator.name, total=revenue * factor))
        return results

    def daily_peak_emissions(self) -> list[PeakEmissionRow]:
        """
        Find the gas or coal generator with the highest emission on each day.

        Emission for a day is energy x emissions rating x emissions factor.
        On equal emissions the first generator encountered keeps the day.

        Returns:
            One PeakEmissionRow per date, in order of first appearance.
        """
        peak_by_date: Dict[date, PeakEmissionRow] = {}

        for generator in self.generators:
            if not generator.is_fossil:
                continue

            factor = self.reference.emissions_factor(generator.category)
            for day in generator.daily_records:
                emission = day.energy * generator.emissions_rating * factor
                current_peak = peak_by_date.get(day.date)
                if current_peak is None or emission > current_peak.emission:
                    peak_by_date[day.date] = PeakEmissionRow(
                        date=day.date, name=generator.name, emission=emission
                    )

        return list(peak_by_date.values())

    def actual_heat_rates(self) -> list[HeatRateRow]:
        """
        Compute total heat input / actual net generation for each coal generator.

        A zero net generation yields Infinity (or NaN when the heat input is
        also zero) instead of raising.
        """
        results = []
        with localcontext() as ctx:
            ctx.traps[DivisionByZero] = False
            ctx.traps[InvalidOperation] = False
            for generator in self.generators:
                if generator.category != GeneratorCategory.COAL:
                    continue
                heat_rate = generator.total_heat_input / generator.actual_net_generation
                results.append(HeatRateRow(name=generator.name, heat_rate=heat_rate))
        return results

    def calculate(self) -> GenerationMetrics:
        return GenerationMetrics(
            totals=self.total_generation_values(),
            peak_emissions=self.daily_peak_emissions(),
            heat_rates=self.actual_heat_rates(),
        )
