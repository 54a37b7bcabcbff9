"""
Unit tests for ResultWriter output layout and file handling.
"""

import os
import stat
import tempfile
import unittest
import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal
from pathlib import Path

from genwatch.analysis import GenerationMetrics, GenerationStats, HeatRateRow, PeakEmissionRow, TotalRow
from genwatch.parser import GeneratorParser
from genwatch.reference import ReferenceData
from genwatch.report import ResultWriter
from tests.helpers import SAMPLE_REPORT, wind, day


class TestResultWriter(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self._tmp.name) / "out"
        self.writer = ResultWriter(self.output_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def sample_metrics(self) -> GenerationMetrics:
        generators = GeneratorParser().parse_file(SAMPLE_REPORT)
        return GenerationStats(generators, ReferenceData.defaults()).calculate()

    def test_output_path(self):
        path = self.writer.output_path_for(Path("/in/01-Basic.xml"))
        self.assertEqual(path, self.output_dir / "01-Basic-Result.xml")

    def test_sections_in_order(self):
        root = ResultWriter.build_document(self.sample_metrics()).getroot()
        self.assertEqual(root.tag, "GenerationOutput")
        self.assertEqual([child.tag for child in root], ["Totals", "MaxEmissionGenerators", "ActualHeatRates"])

        names = [g.findtext("Name") for g in root.find("Totals")]
        self.assertEqual(names, ["Wind[Offshore]", "Wind[Onshore]", "Gas[1]", "Coal[1]"])

        first_day = root.find("MaxEmissionGenerators/Day")
        self.assertEqual(first_day.findtext("Name"), "Coal[1]")
        self.assertEqual(first_day.findtext("Date"), "2017-01-01T00:00:00")

        heat_rate = root.find("ActualHeatRates/ActualHeatRate")
        self.assertEqual(heat_rate.findtext("Name"), "Coal[1]")
        self.assertEqual(heat_rate.findtext("HeatRate"), "1")

    def test_values_written_exactly(self):
        metrics = GenerationMetrics(
            totals=[TotalRow(name="W", total=Decimal("946.000"))],
            peak_emissions=[PeakEmissionRow(date=date(2017, 1, 1), name="C", emission=Decimal("81.2000"))],
            heat_rates=[HeatRateRow(name="C", heat_rate=Decimal("Infinity"))],
        )
        root = ResultWriter.build_document(metrics).getroot()
        self.assertEqual(root.findtext("Totals/Generator/Total"), "946.000")
        self.assertEqual(root.findtext("MaxEmissionGenerators/Day/Emission"), "81.2000")
        self.assertEqual(root.findtext("ActualHeatRates/ActualHeatRate/HeatRate"), "Infinity")

    def test_missing_emission_written_as_zero(self):
        metrics = GenerationMetrics(
            peak_emissions=[PeakEmissionRow(date=date(2017, 1, 1), name="C", emission=None)]
        )
        root = ResultWriter.build_document(metrics).getroot()
        self.assertEqual(root.findtext("MaxEmissionGenerators/Day/Emission"), "0")

    def test_empty_sections_have_no_rows(self):
        metrics = GenerationStats([wind("W", False, day("2017-01-01", "1"))], ReferenceData.defaults()).calculate()
        root = ResultWriter.build_document(metrics).getroot()
        self.assertEqual(len(root.find("Totals")), 1)
        self.assertEqual(len(root.find("MaxEmissionGenerators")), 0)
        self.assertEqual(len(root.find("ActualHeatRates")), 0)

    def test_write_creates_file(self):
        output_path = self.writer.write(self.sample_metrics(), Path("/in/report.xml"))
        self.assertEqual(output_path, self.output_dir / "report-Result.xml")
        self.assertTrue(output_path.exists())
        self.assertEqual(ET.parse(output_path).getroot().tag, "GenerationOutput")
        # Only the result remains, no temporary files
        self.assertEqual([p.name for p in self.output_dir.iterdir()], ["report-Result.xml"])

    def test_write_is_reproducible(self):
        first = self.writer.write(self.sample_metrics(), Path("/in/report.xml")).read_bytes()
        second = self.writer.write(self.sample_metrics(), Path("/in/report.xml")).read_bytes()
        self.assertEqual(first, second)

    def test_written_file_follows_umask(self):
        old_umask = os.umask(0o022)
        try:
            output_path = self.writer.write(GenerationMetrics(), Path("/in/r.xml"))
        finally:
            os.umask(old_umask)
        self.assertEqual(stat.S_IMODE(output_path.stat().st_mode), 0o644)

    def test_write_failure_raises_os_error(self):
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("not a directory")
        writer = ResultWriter(blocker / "out")
        with self.assertRaises(OSError):
            writer.write(self.sample_metrics(), Path("/in/report.xml"))


if __name__ == "__main__":
    unittest.main()
