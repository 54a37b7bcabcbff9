"""
Generator metrics watcher
=========================

Watches an input folder for generator XML reports, computes total
generation value, daily peak emissions and actual heat rates, and writes
a result XML file per report.

Usage:
    python -m genwatch [ENV_FILE] [--once]
"""

__version__ = "0.1.0"
