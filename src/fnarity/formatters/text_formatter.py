"""Plain text formatter: one line per function, then a summary."""

from ..models import ScanReport
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Render records least severe first so the worst end up nearest the prompt."""

    def format(self, report: ScanReport) -> str:
        lines = [str(record) for record in report.records]
        lines.append("")
        lines.append(summary_line(report))
        return "\n".join(lines)


def summary_line(report: ScanReport) -> str:
    summary = f"Found {report.total} functions with more than {report.min_args} arguments"
    if report.partial:
        summary += f" (partial: {len(report.skipped_files)} files could not be parsed)"
    return summary
