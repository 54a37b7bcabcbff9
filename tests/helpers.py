"""
Shared fixtures for the test suite.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

from genwatch.categories import GeneratorCategory
from genwatch.models import GenerationRecord, Generator

DATA_DIR = Path(__file__).parent / "data"
REFERENCE_DATA_FILE = DATA_DIR / "ReferenceData.xml"
SAMPLE_REPORT = DATA_DIR / "GenerationReport.xml"
MISSING_ENERGY_REPORT = DATA_DIR / "MissingEnergy.xml"


def day(iso_date: str, energy: str, price: str = "1") -> GenerationRecord:
    return GenerationRecord(date=date.fromisoformat(iso_date), energy=Decimal(energy), price=Decimal(price))


def wind(name: str, offshore: bool, *days: GenerationRecord) -> Generator:
    category = GeneratorCategory.OFFSHORE_WIND if offshore else GeneratorCategory.ONSHORE_WIND
    return Generator(name=name, category=category, daily_records=list(days))


def gas(name: str, rating: str, *days: GenerationRecord) -> Generator:
    return Generator(
        name=name,
        category=GeneratorCategory.GAS,
        emissions_rating=Decimal(rating),
        daily_records=list(days),
    )


def coal(name: str, rating: str, heat_input: str, net_generation: str, *days: GenerationRecord) -> Generator:
    return Generator(
        name=name,
        category=GeneratorCategory.COAL,
        emissions_rating=Decimal(rating),
        total_heat_input=Decimal(heat_input),
        actual_net_generation=Decimal(net_generation),
        daily_records=list(days),
    )
