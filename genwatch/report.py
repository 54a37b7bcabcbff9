"""
Serializes computed metrics into a result XML document on disk.
"""

from __future__ import annotations

import logging
import os
import tempfile
import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

from .analysis import GenerationMetrics

logger = logging.getLogger(__name__)

RESULT_SUFFIX = "-Result"


class ResultWriter:
    """Writes one GenerationOutput document per processed report."""

    def __init__(self, output_dir: Path | str) -> None:
        self.output_dir = Path(output_dir)

    def output_path_for(self, input_path: Path | str) -> Path:
        input_path = Path(input_path)
        return self.output_dir / f"{input_path.stem}{RESULT_SUFFIX}{input_path.suffix}"

    @staticmethod
    def build_document(metrics: GenerationMetrics) -> ET.ElementTree:
        root = ET.Element("GenerationOutput")

        totals = ET.SubElement(root, "Totals")
        for row in metrics.totals:
            generator = ET.SubElement(totals, "Generator")
            _text_element(generator, "Name", row.name)
            _text_element(generator, "Total", _format_decimal(row.total))

        max_emissions = ET.SubElement(root, "MaxEmissionGenerators")
        for row in metrics.peak_emissions:
            day = ET.SubElement(max_emissions, "Day")
            _text_element(day, "Name", row.name)
            _text_element(day, "Date", _format_date(row.date))
            _text_element(day, "Emission", _format_decimal(row.emission))

        heat_rates = ET.SubElement(root, "ActualHeatRates")
        for row in metrics.heat_rates:
            heat_rate = ET.SubElement(heat_rates, "ActualHeatRate")
            _text_element(heat_rate, "Name", row.name)
            _text_element(heat_rate, "HeatRate", _format_decimal(row.heat_rate))

        ET.indent(root)
        return ET.ElementTree(root)

    def write(self, metrics: GenerationMetrics, input_path: Path | str) -> Path:
        """
        Write the result document for input_path into the output directory.

        The document is written to a temporary file first and renamed into
        place, so a failed write never leaves a partial result behind.

        Raises:
            OSError: If the output directory or file cannot be written
        """
        output_path = self.output_path_for(input_path)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        tree = self.build_document(metrics)

        fd, tmp_name = tempfile.mkstemp(dir=self.output_dir, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                tree.write(f, encoding="utf-8", xml_declaration=True)
            # mkstemp creates owner-only files; results get the usual umask-based mode
            os.chmod(tmp_name, 0o666 & ~_current_umask())
            os.replace(tmp_name, output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Output generated: {output_path}")
        return output_path


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _text_element(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def _format_decimal(value: Optional[Decimal]) -> str:
    return str(value if value is not None else Decimal(0))


def _format_date(value: date) -> str:
    return f"{value.isoformat()}T00:00:00"
