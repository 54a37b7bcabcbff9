import logging
import signal
import sys
from pathlib import Path
from typing import Optional


from .config import Settings
from .errors import ConfigError, ReferenceLoadError
from .poller import Poller
from .reference import ReferenceData

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main(env_file: Optional[Path | str] = None, once: bool = False) -> int:
    """
    Main entrypoint that loads settings and reference data, then watches the input folder.

    Args:
        env_file: Optional .env file with GENWATCH_* settings
        once: Run a single poll cycle instead of polling until interrupted

    Returns:
        Process exit code.
    """
    configure_logging()
    try:
        settings = Settings.from_env(env_file)
        logging.getLogger().setLevel(settings.log_level)
        reference = ReferenceData.load(settings.reference_data_file)
    except (ConfigError, ReferenceLoadError) as e:
        logger.error(f"Error loading configuration: {e}")
        return 1

    poller = Poller(
        input_dir=settings.input_dir,
        output_dir=settings.output_dir,
        reference=reference,
        poll_interval_sec=settings.poll_interval_sec,
    )

    if once:
        poller.poll_once()
        return 1 if poller.last_error is not None else 0

    # Shutdown requests take effect once the current cycle has finished
    def request_stop(signum, frame):
        logger.info("Shutdown requested, stopping after the current cycle")
        poller.stop()

    signal.signal(signal.SIGINT, request_stop)
    signal.signal(signal.SIGTERM, request_stop)
    poller.run()
    return 0


def cli() -> None:
    args = sys.argv[1:]
    once = "--once" in args
    args = [a for a in args if a != "--once"]
    if len(args) > 1:
        print("Usage: python -m genwatch [ENV_FILE] [--once]")
        sys.exit(2)
    sys.exit(main(args[0] if args else None, once=once))


if __name__ == "__main__":
    cli()
