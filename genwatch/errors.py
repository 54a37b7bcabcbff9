"""
Exception types raised while configuring the watcher and processing reports.

Configuration and reference data failures are fatal to the process; the
others are scoped to a single input file, which is left in place for the
next poll cycle.
"""


class GenwatchError(Exception):
    """Base class for all watcher errors."""


class ConfigError(GenwatchError):
    """Required settings are missing or invalid."""


class ReferenceLoadError(GenwatchError):
    """The reference data document could not be read."""


class MissingFactor(GenwatchError, KeyError):
    """No factor is defined for the requested generator category."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class MalformedInput(GenwatchError):
    """An input report is missing a required field or holds an unparsable value."""

    def __init__(self, message: str, path=None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
