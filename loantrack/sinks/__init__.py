"""Output sinks for reports and exports."""

from loantrack.sinks.console import ConsoleSink
from loantrack.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
