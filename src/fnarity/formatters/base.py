"""Base formatter interface for fnarity output rendering."""

from abc import ABC, abstractmethod

from ..models import ScanReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    def render(self, report: ScanReport) -> None:
        """Write the formatted report to stdout."""
        print(self.format(report))

    @abstractmethod
    def format(self, report: ScanReport) -> str:
        """Return formatted string representation of the report."""
