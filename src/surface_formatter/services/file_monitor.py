"""File modification monitoring for concurrent edit detection."""

from pathlib import Path
from typing import Dict


class FileMonitor:
    """
    Track file modification times to detect external changes.

    Used to detect when a template is edited by someone else between reading
    it and writing the formatted text back.

    Example:
        >>> monitor = FileMonitor()
        >>> monitor.record(Path("templates/card.sface"))
        >>> # Later, before write:
        >>> if monitor.is_modified(Path("templates/card.sface")):
        ...     raise FileModifiedError("templates/card.sface")
    """

    def __init__(self) -> None:
        """Initialize empty file tracker."""
        self._mtimes: Dict[Path, int] = {}

    def record(self, path: Path) -> None:
        """
        Record current modification time for a file.

        Args:
            path: File path to track

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        self._mtimes[path] = path.stat().st_mtime_ns

    def is_modified(self, path: Path) -> bool:
        """
        Check if file has been modified since last record.

        Args:
            path: File path to check

        Returns:
            True if file modified or not yet tracked, False otherwise

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        current_mtime = path.stat().st_mtime_ns
        if path not in self._mtimes:
            return True
        return current_mtime != self._mtimes[path]

    def refresh(self, path: Path) -> None:
        """
        Update recorded modification time after a successful write.

        Args:
            path: File path to refresh

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        self._mtimes[path] = path.stat().st_mtime_ns
