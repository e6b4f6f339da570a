"""Data models for fnarity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResultRecord:
    """One function whose parameter count exceeds the threshold."""

    relative_path: str
    name: str
    parameter_count: int
    line: int

    def __str__(self) -> str:
        return f"{self.relative_path}:{self.line}: fn {self.name}/{self.parameter_count}"


@dataclass(frozen=True)
class ScanReport:
    """Result of one scan run, records ordered ascending by parameter count.

    Attributes:
        root: Scan root as given on the command line
        min_args: Threshold used; every record has parameter_count > min_args
        records: Flagged functions, least severe first
        files_scanned: Source files parsed successfully
        skipped_files: Root-relative paths that failed to parse (skip policy)
    """

    root: str
    min_args: int
    records: tuple[ResultRecord, ...] = ()
    files_scanned: int = 0
    skipped_files: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def partial(self) -> bool:
        return bool(self.skipped_files)
