"""Sources – where flag tables come from."""
from goforit.sources.csv_file import CsvSource
from goforit.sources.memory import InMemorySource
from goforit.sources.notifier import SourceListener, SourceNotifier
from goforit.sources.source import Lookup, Snapshot, Source

__all__ = [
    "CsvSource",
    "InMemorySource",
    "Lookup",
    "Snapshot",
    "Source",
    "SourceListener",
    "SourceNotifier",
]
