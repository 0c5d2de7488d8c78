"""Import progress observers.

Observers receive status text, progress fraction, failure, and finish
signals from one import run. Any UI or logging layer can implement the
protocol; ``LoggingImportObserver`` emits structured log events.
"""

from __future__ import annotations

from typing import Protocol

from core.logging_config import get_logger
from core.types import ImportResult

_LOGGER = get_logger(__name__)


class ImportObserver(Protocol):
    """Receiver of import run signals."""

    def on_status_changed(self, status: str) -> None: ...

    def on_progress_changed(self, progress: float) -> None: ...

    def on_failed(self, message: str) -> None: ...

    def on_finished(self, result: ImportResult) -> None: ...


class NullImportObserver:
    """Observer that ignores every signal."""

    def on_status_changed(self, status: str) -> None:
        return None

    def on_progress_changed(self, progress: float) -> None:
        return None

    def on_failed(self, message: str) -> None:
        return None

    def on_finished(self, result: ImportResult) -> None:
        return None


class LoggingImportObserver:
    """Observer that logs every signal as a structured event."""

    def on_status_changed(self, status: str) -> None:
        """Log the new status line."""
        _LOGGER.info("import_status", status=status)

    def on_progress_changed(self, progress: float) -> None:
        """Log the new progress fraction."""
        _LOGGER.info("import_progress", progress=round(progress, 3))

    def on_failed(self, message: str) -> None:
        """Log the run failure message."""
        _LOGGER.error("import_failed", message=message)

    def on_finished(self, result: ImportResult) -> None:
        """Log the terminal run outcome."""
        _LOGGER.info(
            "import_finished",
            state=result.state,
            imported_fields=list(result.imported_fields),
            message=result.message,
        )
