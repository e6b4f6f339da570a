"""JSON formatter for fnarity."""

import json
from dataclasses import asdict

from ..models import ScanReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as a single JSON object."""

    def format(self, report: ScanReport) -> str:
        data = {
            "root": report.root,
            "min_args": report.min_args,
            "total": report.total,
            "files_scanned": report.files_scanned,
            "partial": report.partial,
            "skipped_files": list(report.skipped_files),
            "functions": [asdict(r) for r in report.records],
        }
        return json.dumps(data, indent=2)
