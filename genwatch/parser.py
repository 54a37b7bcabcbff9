"""
Extracts generator records from generation report XML documents.

Parsing is all-or-nothing: a single missing or unparsable required field
fails the whole document, since partial generator records cannot be
aggregated safely.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from .categories import GeneratorCategory
from .errors import MalformedInput
from .models import GenerationRecord, Generator


class GeneratorParser:
    """Builds Generator objects from a report document."""

    def parse_file(self, path: Path | str) -> list[Generator]:
        path = Path(path)
        try:
            tree = ET.parse(path)
        except ET.ParseError as e:
            raise MalformedInput(f"Not a well-formed XML document: {e}", path) from e
        try:
            return self.parse(tree)
        except MalformedInput as e:
            raise MalformedInput(str(e), path) from e

    def parse(self, document: ET.ElementTree | ET.Element | Path | str) -> list[Generator]:
        """
        Extract every generator from the document.

        Args:
            document: Parsed report (tree or root element), or a path which is
                read through parse_file. Generator elements may be nested at
                any depth.

        Returns:
            Wind generators, then gas, then coal, each group in document order.

        Raises:
            MalformedInput: If a required field is missing or unparsable
        """
        if isinstance(document, (str, Path)):
            return self.parse_file(document)

        root = document.getroot() if isinstance(document, ET.ElementTree) else document

        generators = [self._parse_wind(e) for e in root.iter("WindGenerator")]
        generators.extend(self._parse_gas(e) for e in root.iter("GasGenerator"))
        generators.extend(self._parse_coal(e) for e in root.iter("CoalGenerator"))
        return generators

    def _parse_wind(self, element: ET.Element) -> Generator:
        name = _required_text(element, "Name", "WindGenerator")
        location = _required_text(element, "Location", name)
        category = (
            GeneratorCategory.OFFSHORE_WIND if "Offshore" in location else GeneratorCategory.ONSHORE_WIND
        )
        return Generator(
            name=name,
            category=category,
            daily_records=_parse_generation(element, name),
        )

    def _parse_gas(self, element: ET.Element) -> Generator:
        name = _required_text(element, "Name", "GasGenerator")
        return Generator(
            name=name,
            category=GeneratorCategory.GAS,
            emissions_rating=_required_decimal(element, "EmissionsRating", name),
            daily_records=_parse_generation(element, name),
        )

    def _parse_coal(self, element: ET.Element) -> Generator:
        name = _required_text(element, "Name", "CoalGenerator")
        return Generator(
            name=name,
            category=GeneratorCategory.COAL,
            emissions_rating=_required_decimal(element, "EmissionsRating", name),
            total_heat_input=_required_decimal(element, "TotalHeatInput", name),
            actual_net_generation=_required_decimal(element, "ActualNetGeneration", name),
            daily_records=_parse_generation(element, name),
        )


def _parse_generation(element: ET.Element, owner: str) -> list[GenerationRecord]:
    # No <Generation> element means no days, not an error
    generation = element.find("Generation")
    if generation is None:
        return []
    return [
        GenerationRecord(
            date=_required_date(day, "Date", owner),
            energy=_required_decimal(day, "Energy", owner),
            price=_required_decimal(day, "Price", owner),
        )
        for day in generation.findall("Day")
    ]


def _required_text(element: ET.Element, tag: str, owner: str) -> str:
    text: Optional[str] = element.findtext(tag)
    if text is None:
        raise MalformedInput(f"Missing required <{tag}> in {owner}")
    return text.strip()


def _required_decimal(element: ET.Element, tag: str, owner: str) -> Decimal:
    text = _required_text(element, tag, owner)
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise MalformedInput(f"Invalid number '{text}' in <{tag}> of {owner}") from e
    if not value.is_finite():
        raise MalformedInput(f"Invalid number '{text}' in <{tag}> of {owner}")
    return value


def _required_date(element: ET.Element, tag: str, owner: str) -> date:
    text = _required_text(element, tag, owner)
    try:
        # Accepts plain dates and date-times with or without an offset
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise MalformedInput(f"Invalid date '{text}' in <{tag}> of {owner}") from e
