"""
Polls the input folder and runs each new report through the pipeline.

One file is processed per cycle. A file is deleted only after its result
has been written; on failure it stays in place and is picked up again on
a later cycle.
"""

from __future__ import annotations

import logging
import threading
from enum import StrEnum
from pathlib import Path
from typing import Optional

from .analysis import GenerationStats
from .errors import MalformedInput
from .parser import GeneratorParser
from .reference import ReferenceData
from .report import RESULT_SUFFIX, ResultWriter

logger = logging.getLogger(__name__)

FILE_PATTERN = "*.xml"


class PollerState(StrEnum):
    IDLE = "Idle"
    SCANNING = "Scanning"
    PROCESSING = "Processing"


class Poller:
    """Runs scan -> parse -> calculate -> write -> delete cycles on a fixed interval."""

    def __init__(
        self,
        input_dir: Path | str,
        output_dir: Path | str,
        reference: ReferenceData,
        poll_interval_sec: float = 5.0,
        file_pattern: str = FILE_PATTERN,
    ) -> None:
        self.input_dir = Path(input_dir)
        self.reference = reference
        self.poll_interval_sec = poll_interval_sec
        self.file_pattern = file_pattern
        self.parser = GeneratorParser()
        self.writer = ResultWriter(output_dir)
        self.state = PollerState.IDLE
        self.last_error: Optional[Exception] = None
        self._stop_event = threading.Event()

    def find_next_file(self) -> Optional[Path]:
        """
        Pick the most recently created matching file in the input folder.

        Files with the same creation time are ordered by name, the greatest
        name winning. Result files are skipped when results are written back
        into the input folder.
        """
        candidates = [p for p in self.input_dir.glob(self.file_pattern) if p.is_file()]
        if self.writer.output_dir.resolve() == self.input_dir.resolve():
            candidates = [p for p in candidates if not p.stem.endswith(RESULT_SUFFIX)]
        if not candidates:
            logger.info("No file found in input folder...")
            return None
        return max(candidates, key=lambda p: (_creation_time(p), p.name))

    def process_file(self, path: Path) -> Path:
        """
        Parse, calculate and write the result for one report, then delete it.

        Raises:
            MalformedInput: If the report cannot be parsed
            OSError: If reading, writing or deleting fails
        """
        logger.info(f"New file detected: {path}")
        generators = self.parser.parse_file(path)
        metrics = GenerationStats(generators, self.reference).calculate()
        output_path = self.writer.write(metrics, path)
        path.unlink()
        return output_path

    def poll_once(self) -> Optional[Path]:
        """
        Run a single poll cycle.

        Returns:
            Path of the written result, or None if nothing was processed.
        """
        self.state = PollerState.SCANNING
        self.last_error = None
        path = None
        try:
            path = self.find_next_file()
            if path is None:
                return None

            self.state = PollerState.PROCESSING
            return self.process_file(path)
        except MalformedInput as e:
            self.last_error = e
            logger.error(f"Error processing file {path} (parse): {e}")
        except OSError as e:
            self.last_error = e
            stage = "scan" if path is None else "io"
            logger.error(f"Error processing file {path} ({stage}): {e}")
        except Exception as e:
            self.last_error = e
            logger.exception(f"Unexpected error processing file {path}")
        finally:
            self.state = PollerState.IDLE
        return None

    def run(self, max_cycles: Optional[int] = None) -> None:
        """
        Poll until stop() is called (or max_cycles cycles have run).

        Each cycle completes before the interval wait starts, so two files
        are never processed at the same time.
        """
        logger.info(f"Monitoring {self.input_dir} for new XML files...")
        cycles = 0
        while not self._stop_event.is_set():
            self.poll_once()
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            self._stop_event.wait(self.poll_interval_sec)
        logger.info("Stopped monitoring")

    def stop(self) -> None:
        self._stop_event.set()


def _creation_time(path: Path) -> float:
    stat = path.stat()
    return getattr(stat, "st_birthtime", stat.st_ctime)
