import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..models import FileRecord


class FileSystemAccessor:
    """Builds file records from local paths for the organizer."""

    def __init__(self, root_directory: Optional[Union[str, Path]] = None):
        """Initialize the file system accessor.

        Args:
            root_directory: Directory used by scan_directory, optional when
                only explicit paths are read
        """
        self.root_directory = Path(root_directory) if root_directory else None
        if self.root_directory is not None:
            if not self.root_directory.exists():
                raise ValueError(f"Directory does not exist: {root_directory}")
            if not self.root_directory.is_dir():
                raise ValueError(f"Path is not a directory: {root_directory}")

        self.logger = logging.getLogger(__name__)

    def records_from_paths(self, paths: Iterable[Union[str, Path]]) -> List[FileRecord]:
        """Create records for explicitly selected files, keeping their order.

        Args:
            paths: File paths, as chosen by the user

        Returns:
            List of FileRecord objects, missing or non-file paths skipped
        """
        records = []

        for path in paths:
            file_path = Path(path).expanduser()
            if not file_path.is_file():
                self.logger.error(f"Not a file, skipping: {file_path}")
                continue
            try:
                records.append(self._create_file_record(file_path))
            except OSError as e:
                self.logger.error(f"Error reading file {file_path}: {e}")

        self.logger.info(f"Selected {len(records)} files")
        return records

    def scan_directory(
        self, recursive: bool = True, include_hidden: bool = False
    ) -> List[FileRecord]:
        """Scan the root directory and return records for its files.

        Args:
            recursive: Whether to scan subdirectories
            include_hidden: Whether to include dotfiles and dot-directories

        Returns:
            List of FileRecord objects sorted by relative path
        """
        if self.root_directory is None:
            raise ValueError("No root directory to scan")

        pattern = "**/*" if recursive else "*"

        self.logger.info(f"Scanning directory: {self.root_directory}")

        paths = []
        for file_path in self.root_directory.glob(pattern):
            relative = file_path.relative_to(self.root_directory)
            if not include_hidden and any(
                part.startswith(".") for part in relative.parts
            ):
                continue
            if file_path.is_file():
                paths.append(file_path)

        paths.sort(key=lambda p: p.relative_to(self.root_directory).as_posix())
        records = self.records_from_paths(paths)

        self.logger.info(f"Found {len(records)} files")
        return records

    def _create_file_record(self, file_path: Path) -> FileRecord:
        """Create a FileRecord from a file path.

        Args:
            file_path: Path to the file

        Returns:
            FileRecord with file metadata
        """
        stat = file_path.stat()

        try:
            modified_at = datetime.fromtimestamp(stat.st_mtime)
        except (OverflowError, OSError, ValueError):
            self.logger.warning(f"Invalid modification time for {file_path}, using now")
            modified_at = datetime.now()

        return FileRecord(
            name=file_path.name,
            path=str(file_path.resolve()),
            size=stat.st_size,
            modified_at=modified_at,
        )
