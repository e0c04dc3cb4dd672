"""File operations for formatting templates on disk.

Formatted text is written back with an atomic temp-file-rename so an
interrupted run never leaves a half-written template behind.
"""

import difflib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from surface_formatter.exceptions import FileModifiedError
from surface_formatter.formatter import Formatter
from surface_formatter.services.file_monitor import FileMonitor
from surface_formatter.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class FormatResult:
    """Outcome of formatting one file.

    Attributes:
        path: File that was formatted
        original: Text read from disk
        formatted: Formatted text (with a single trailing newline)
        changed: True if formatting changed the text
    """

    path: Path
    original: str
    formatted: str

    @property
    def changed(self) -> bool:
        return self.original != self.formatted


def atomic_write(
    path: Path,
    content: str,
    file_monitor: Optional[FileMonitor] = None
) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    1. Early modification check (before write)
    2. Write to temporary file
    3. fsync to ensure data is on disk
    4. Late modification check (after write, before rename)
    5. Atomic rename to replace original file

    Args:
        path: Target file path
        content: Content to write
        file_monitor: Optional FileMonitor for concurrent modification detection

    Raises:
        FileModifiedError: If file was modified during write operation
        OSError: On file I/O errors
    """
    if file_monitor and file_monitor.is_modified(path):
        raise FileModifiedError(
            str(path),
            "File was modified before write (early check)"
        )

    # Same directory, so the rename stays on one filesystem
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        temp_path.write_text(content, encoding='utf-8')

        with open(temp_path, 'r+', encoding='utf-8') as f:
            f.flush()
            os.fsync(f.fileno())

        if file_monitor and file_monitor.is_modified(path):
            raise FileModifiedError(
                str(path),
                "File was modified during write (late check)"
            )

        temp_path.replace(path)

        if file_monitor:
            file_monitor.refresh(path)

        logger.debug(
            "atomic_write_success",
            path=str(path),
            size=len(content)
        )

    except FileModifiedError:
        if temp_path.exists():
            temp_path.unlink()
        raise

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error(
            "atomic_write_failed",
            path=str(path),
            error=str(e)
        )
        raise


def format_file(path: Path, formatter: Formatter, check: bool = False) -> FormatResult:
    """
    Format a template file in place.

    The file is only rewritten when formatting changes it. Formatted files
    end with exactly one newline.

    Args:
        path: Template file
        formatter: Formatter to apply
        check: If True, never write; only report whether the file would change

    Returns:
        FormatResult describing the original and formatted text

    Raises:
        FormatterError: If the template cannot be formatted (file untouched)
        FileModifiedError: If the file changed on disk while being formatted
        OSError: On file I/O errors
    """
    monitor = FileMonitor()
    monitor.record(path)

    original = path.read_text(encoding="utf-8")
    formatted = formatter.format_string(original) + "\n"
    result = FormatResult(path=path, original=original, formatted=formatted)

    if result.changed and not check:
        atomic_write(path, formatted, monitor)
        logger.info("file_reformatted", path=str(path))
    elif result.changed:
        logger.warning("file_would_be_reformatted", path=str(path))
    else:
        logger.info("file_unchanged", path=str(path))

    return result


def generate_unified_diff(
    original: str,
    formatted: str,
    fromfile: str = "original",
    tofile: str = "formatted",
    context_lines: int = 3,
) -> str:
    """Generate unified diff between original and formatted content.

    Args:
        original: Original content
        formatted: Formatted content
        fromfile: Label for original file
        tofile: Label for formatted file
        context_lines: Number of context lines to show

    Returns:
        Unified diff as string (empty if the texts are identical)
    """
    original_lines = original.splitlines(keepends=True)
    formatted_lines = formatted.splitlines(keepends=True)

    diff_lines = difflib.unified_diff(
        original_lines,
        formatted_lines,
        fromfile=fromfile,
        tofile=tofile,
        n=context_lines,
    )

    # Lines without a newline (end of file) still get one so the diff splits cleanly
    return "".join(line if line.endswith("\n") else line + "\n" for line in diff_lines)
