"""Scan driver: traversal -> extraction -> counting -> ordered report.

Usage:
    config = load_config(Path("src"), 4)
    report = scan(config)
    for record in report.records:
        print(record)
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import ScanConfig
from .counting import count_parameters
from .exceptions import FileAccessError, ParsingError
from .file_ops import read_source, relative_posix, walk_source_files
from .logging_config import get_logger
from .models import ResultRecord, ScanReport
from .scanning import DeclarationExtractor

logger = get_logger(__name__)


@dataclass(frozen=True)
class _FileOutcome:
    records: tuple[ResultRecord, ...] = ()
    parsed: bool = False
    skipped_path: Optional[str] = None


class ArityScanner:
    """Flags functions whose parameter count exceeds ``config.min_args``."""

    def __init__(self, config: ScanConfig, extractor: Optional[DeclarationExtractor] = None):
        self.config = config
        self.extractor = extractor or DeclarationExtractor()

    def process_file(self, path: Path) -> _FileOutcome:
        """Extract and count the declarations of one file.

        Unreadable files are skipped. A parse failure propagates unless the
        config allows partial reports.
        """
        root = self.config.root
        rel_path = relative_posix(path, root)

        try:
            source = read_source(path)
        except FileAccessError as e:
            logger.debug(f"Skipping {rel_path}: {e.reason}")
            return _FileOutcome()

        try:
            declarations = list(self.extractor.extract(source, Path(rel_path)))
        except ParsingError as e:
            if not self.config.partial_allowed:
                raise
            logger.warning(f"Skipping unparseable file {rel_path}: {e.reason}")
            return _FileOutcome(skipped_path=rel_path)

        records = []
        for decl in declarations:
            arity = count_parameters(decl.params)
            if arity > self.config.min_args:
                records.append(
                    ResultRecord(
                        relative_path=rel_path,
                        name=decl.name,
                        parameter_count=arity,
                        line=decl.line,
                    )
                )
        return _FileOutcome(records=tuple(records), parsed=True)

    def run(self) -> ScanReport:
        """Scan the configured tree and return the ordered report.

        Raises:
            InvalidPathError: If the root is missing or not a directory
            ParsingError: On the first unparseable file under the abort policy
        """
        config = self.config
        paths = walk_source_files(
            config.root,
            config.extensions,
            exclude_patterns=config.exclude_patterns,
            follow_symlinks=config.follow_symlinks,
        )

        if config.workers > 1:
            with ThreadPoolExecutor(max_workers=config.workers) as executor:
                # map() yields in submission order, so the merge is deterministic
                outcomes = list(executor.map(self.process_file, paths))
        else:
            outcomes = [self.process_file(path) for path in paths]

        records: list[ResultRecord] = []
        skipped: list[str] = []
        files_scanned = 0
        for outcome in outcomes:
            records.extend(outcome.records)
            if outcome.parsed:
                files_scanned += 1
            if outcome.skipped_path is not None:
                skipped.append(outcome.skipped_path)

        # Stable sort: ties keep traversal order
        records.sort(key=lambda r: r.parameter_count)

        logger.info(
            f"Scanned {files_scanned} files, {len(records)} functions over {config.min_args} arguments"
        )
        return ScanReport(
            root=str(config.root),
            min_args=config.min_args,
            records=tuple(records),
            files_scanned=files_scanned,
            skipped_files=tuple(skipped),
        )


def scan(config: ScanConfig) -> ScanReport:
    """Run one scan with ``config``."""
    return ArityScanner(config).run()
