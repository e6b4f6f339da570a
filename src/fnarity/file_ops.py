"""
File operations for fnarity.

Directory walking with extension/glob filtering and source reading. Entries
that cannot be stat'd or read are skipped rather than aborting the scan.
"""

import fnmatch
import os
from collections.abc import Generator, Iterable
from pathlib import Path

from .exceptions import FileAccessError, InvalidPathError
from .logging_config import get_logger

logger = get_logger(__name__)


def walk_source_files(
    root_dir: Path,
    extensions: Iterable[str],
    exclude_patterns: Iterable[str] = (),
    follow_symlinks: bool = True,
) -> Generator[Path, None, None]:
    """
    Walk a directory tree and yield source files in a stable order.

    Args:
        root_dir: Directory to scan
        extensions: File suffixes to keep (e.g. ".rs")
        exclude_patterns: Globs matched against root-relative POSIX paths
        follow_symlinks: Whether to follow symbolic links

    Yields:
        Paths under root_dir, directory entries visited in lexicographic order

    Raises:
        InvalidPathError: If root_dir is missing or not a directory
    """
    root_dir = Path(root_dir)
    if not root_dir.exists():
        raise InvalidPathError(root_dir, "directory does not exist")
    if not root_dir.is_dir():
        raise InvalidPathError(root_dir, "not a directory")

    suffixes = tuple(extensions)
    patterns = list(exclude_patterns)

    def _on_error(err: OSError) -> None:
        logger.debug(f"Skipping unreadable entry {err.filename}: {err.strerror}")

    # Real paths of the directories on the current descent, for cycle detection
    ancestors: dict[str, str] = {}

    for dirpath, dirnames, filenames in os.walk(
        root_dir, onerror=_on_error, followlinks=follow_symlinks
    ):
        real = os.path.realpath(dirpath)
        # os.walk is top-down, so drop ancestors that are not a prefix of dirpath
        for seen in [d for d in ancestors if not _is_within(dirpath, d)]:
            del ancestors[seen]
        if real in ancestors.values():
            logger.debug(f"Skipping symlink cycle at {dirpath}")
            dirnames[:] = []
            continue
        ancestors[dirpath] = real

        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if not filename.endswith(suffixes):
                continue

            if path.is_symlink() and not follow_symlinks:
                continue

            try:
                if not path.is_file():
                    # Broken link or special file
                    continue
            except OSError as e:
                logger.debug(f"Skipping {path}: {e}")
                continue

            if patterns and should_skip_file(relative_posix(path, root_dir), patterns):
                logger.debug(f"Excluded {path}")
                continue

            yield path


def _is_within(path: str, directory: str) -> bool:
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)


def relative_posix(path: Path, root_dir: Path) -> str:
    """Return path relative to root_dir with forward slashes."""
    return Path(path).relative_to(root_dir).as_posix()


def read_source(filepath: Path) -> bytes:
    """
    Read a source file as raw bytes.

    Raises:
        FileAccessError: If the file cannot be read
    """
    try:
        return Path(filepath).read_bytes()
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def should_skip_file(relative_path: str, exclude_patterns: list[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        relative_path: Root-relative POSIX path of the file
        exclude_patterns: List of glob patterns to exclude

    Returns:
        True if file should be skipped
    """
    for pattern in exclude_patterns:
        if fnmatch.fnmatchcase(relative_path, pattern):
            return True
    return False
