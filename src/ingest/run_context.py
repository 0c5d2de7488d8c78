"""Per-run import state.

One ``ImportRunContext`` exists per orchestrator run. Mutations only
change state; ``publish`` pushes changed values to the observer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.constants import IMPORT_STEPS_PER_PAGE
from core.errors import SheetportSetupError
from core.types import ALLOWED_RUN_TRANSITIONS, ImportResult, ImportRunState
from ingest.observer import ImportObserver


@dataclass
class ImportRunContext:
    """Mutable progress, status, and cancellation state of one run."""

    page_count: int
    observer: ImportObserver
    state: ImportRunState = "idle"
    progress: float = 0.0
    status: str = ""
    cancel_requested: bool = False
    failure_message: str | None = None
    imported_fields: list[str] = field(default_factory=list)
    _published_progress: float = field(default=0.0, init=False, repr=False)
    _published_status: str = field(default="", init=False, repr=False)

    def request_cancel(self) -> None:
        """Ask the run to stop before its next target."""
        self.cancel_requested = True

    def transition(self, next_state: ImportRunState) -> None:
        """Move to the next run state.

        Raises:
            SheetportSetupError: If the transition is not allowed.
        """
        if next_state not in ALLOWED_RUN_TRANSITIONS[self.state]:
            raise SheetportSetupError(
                f"Invalid import run transition {self.state} -> {next_state}."
            )
        self.state = next_state

    def describe(self, status: str) -> None:
        """Set the human-readable current step."""
        self.status = status

    def advance_step(self) -> None:
        """Advance progress by one step of one page."""
        if self.page_count <= 0:
            return
        step = 1.0 / (IMPORT_STEPS_PER_PAGE * self.page_count)
        self.progress = min(1.0, max(self.progress, self.progress + step))

    def publish(self) -> None:
        """Notify the observer of status and progress changes since last publish."""
        if self.status != self._published_status:
            self._published_status = self.status
            self.observer.on_status_changed(self.status)
        if self.progress != self._published_progress:
            self._published_progress = self.progress
            self.observer.on_progress_changed(self.progress)

    def to_result(self) -> ImportResult:
        """Build the terminal result of this run."""
        return ImportResult(
            state=self.state,
            imported_fields=tuple(self.imported_fields),
            message=self.failure_message,
        )
