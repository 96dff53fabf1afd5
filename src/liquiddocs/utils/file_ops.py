"""File operations utilities for liquiddocs.

This module provides utilities for finding Liquid templates and reading them
into size-bounded batches for the doc block parser.
"""

from __future__ import annotations

import glob
import re
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

import pathspec
import structlog

from liquiddocs.core.models import FileInput
from liquiddocs.utils.config import DEFAULT_MAX_BUFFER_SIZE

logger = structlog.get_logger(__name__)


class FileOperations:
    """Utilities for file discovery and batching.

    Attributes:
        encoding: Encoding used to read templates
        max_buffer_size: Maximum bytes of content per batch
    """

    def __init__(
        self,
        encoding: str = "utf-8",
        max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
    ) -> None:
        """Initialize file operations.

        Args:
            encoding: Encoding used to read templates
            max_buffer_size: Maximum bytes of content per batch
        """
        if max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be positive")
        self.encoding = encoding
        self.max_buffer_size = max_buffer_size
        self._log = logger.bind(component="file_ops")

    def find_liquid_files(
        self,
        root_path: Path,
        pattern: str = "**/*.liquid",
        exclude_patterns: list[str] | None = None,
    ) -> list[Path]:
        """Find templates matching pattern, excluding specified patterns.

        Args:
            root_path: Root directory to search
            pattern: Glob pattern for files to include
            exclude_patterns: Patterns to exclude (gitignore-style)

        Returns:
            Sorted list of matching template paths

        Raises:
            FileNotFoundError: If root_path does not exist
        """
        root_path = Path(root_path).resolve()

        if not root_path.exists():
            raise FileNotFoundError(f"Path not found: {root_path}")

        all_files = [f for f in root_path.glob(pattern) if f.is_file()]

        if exclude_patterns:
            spec = pathspec.PathSpec.from_lines("gitwildmatch", exclude_patterns)
            filtered_files = [
                f
                for f in all_files
                if not spec.match_file(str(f.relative_to(root_path)))
            ]
        else:
            filtered_files = all_files

        self._log.debug(
            "files_found",
            root=str(root_path),
            total=len(all_files),
            filtered=len(filtered_files),
            excluded=len(all_files) - len(filtered_files),
        )

        return sorted(filtered_files)

    def collect_files(
        self,
        targets: Iterable[str | Path],
        pattern: str = "**/*.liquid",
        exclude_patterns: list[str] | None = None,
    ) -> list[Path]:
        """Resolve files, directories and glob patterns to template paths.

        Files are kept as given, directories are searched with ``pattern``
        and anything else is expanded as a glob relative to the working
        directory. Globs may use ``{a,b}`` alternatives. Duplicates are
        dropped, first occurrence wins.

        Args:
            targets: Files, directories or glob patterns
            pattern: Glob pattern used inside directories
            exclude_patterns: Patterns to exclude inside directories

        Returns:
            List of template paths in discovery order
        """
        files: list[Path] = []
        seen: set[Path] = set()

        def add(path: Path) -> None:
            key = path.resolve()
            if key not in seen:
                seen.add(key)
                files.append(path)

        for target in targets:
            path = Path(target)
            if path.is_file():
                add(path)
            elif path.is_dir():
                root = path.resolve()
                for found in self.find_liquid_files(path, pattern, exclude_patterns):
                    add(path / found.relative_to(root))
            else:
                matches = sorted(
                    {
                        match
                        for expanded in expand_braces(str(target))
                        for match in glob.glob(expanded, recursive=True)
                    }
                )
                if not matches:
                    self._log.debug("no_match", target=str(target))
                for match in matches:
                    if Path(match).is_file():
                        add(Path(match))

        return files

    def read_file(self, file_path: Path) -> FileInput:
        """Read a template into a FileInput.

        Args:
            file_path: Template to read

        Returns:
            FileInput with the path as given and the decoded content

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        content = file_path.read_text(encoding=self.encoding)
        return FileInput(path=str(file_path), content=content)

    def batch_files(
        self,
        paths: Iterable[Path],
        on_error: Optional[Callable[[Path, Exception], None]] = None,
    ) -> Iterator[list[FileInput]]:
        """Read templates into batches bounded by ``max_buffer_size``.

        A file larger than the buffer is yielded on its own.

        Args:
            paths: Templates to read
            on_error: Called with the path and exception when a file cannot
                be read or decoded; the file is then skipped. Errors are
                raised when not given.

        Yields:
            Lists of FileInput whose combined size stays within the buffer
        """
        batch: list[FileInput] = []
        current_size = 0

        for path in paths:
            try:
                file = self.read_file(path)
            except (OSError, UnicodeDecodeError) as e:
                if on_error is None:
                    raise
                self._log.warning("file_read_failed", file=str(path), error=str(e))
                on_error(Path(path), e)
                continue
            file_size = file.size

            if file_size > self.max_buffer_size and not batch:
                self._log.debug("oversize_file", file=file.path, size=file_size)
                yield [file]
                continue

            if current_size + file_size > self.max_buffer_size and batch:
                yield batch
                batch = []
                current_size = 0

            batch.append(file)
            current_size += file_size

        if batch:
            yield batch


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives in a glob pattern.

    Args:
        pattern: Glob pattern, possibly with nested brace groups

    Returns:
        Patterns without brace groups, in expansion order
    """
    match = re.search(r"\{([^{}]*)\}", pattern)
    if match is None:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return list(dict.fromkeys(expanded))


def find_liquid_files(
    root_path: Path | str,
    pattern: str = "**/*.liquid",
    exclude_patterns: list[str] | None = None,
) -> list[Path]:
    """Convenience function to find Liquid templates.

    Args:
        root_path: Root directory to search
        pattern: Glob pattern for files
        exclude_patterns: Patterns to exclude

    Returns:
        List of template paths
    """
    ops = FileOperations()
    return ops.find_liquid_files(Path(root_path), pattern, exclude_patterns)


def batch_files(
    paths: Iterable[Path | str],
    max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
) -> Iterator[list[FileInput]]:
    """Convenience function to read templates in size-bounded batches.

    Args:
        paths: Templates to read
        max_buffer_size: Maximum bytes of content per batch

    Yields:
        Lists of FileInput
    """
    ops = FileOperations(max_buffer_size=max_buffer_size)
    yield from ops.batch_files(Path(p) for p in paths)
