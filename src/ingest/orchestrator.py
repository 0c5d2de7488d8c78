"""Import orchestration across the target fields of a content object.

This module validates all targets up front, then imports their pages one
after another. The first setup, transport, or parse error fails the run
and skips the remaining targets. Cancellation is checked between targets.
"""

from __future__ import annotations

from typing import Sequence

from core.errors import SheetportError, SheetportSetupError
from core.logging_config import get_logger
from core.record_schema import RecordRegistry
from core.types import ImportResult, TargetDescriptor
from ingest.observer import ImportObserver, NullImportObserver
from ingest.page_importer import PageImporter, PageTextSource
from ingest.run_context import ImportRunContext
from ingest.target_setup import validate_targets

_LOGGER = get_logger(__name__)


class ImportOrchestrator:
    """Single-use runner that imports pages into one content object."""

    def __init__(
        self,
        document_id: str,
        content: object,
        registry: RecordRegistry,
        fetcher: PageTextSource,
        observer: ImportObserver | None = None,
    ) -> None:
        self._document_id = document_id
        self._content = content
        self._registry = registry
        self._fetcher = fetcher
        self._observer: ImportObserver = observer or NullImportObserver()
        self._started = False

    def new_context(self) -> ImportRunContext:
        """Create a run context bound to this orchestrator's observer."""
        return ImportRunContext(page_count=0, observer=self._observer)

    def run(
        self,
        targets: Sequence[TargetDescriptor],
        context: ImportRunContext | None = None,
    ) -> ImportResult:
        """Import every target page in caller order.

        Args:
            targets: Target fields to populate.
            context: Optional caller-owned context, e.g. to request cancellation.

        Returns:
            Terminal run result. Observers receive ``on_finished`` exactly once.

        Raises:
            SheetportSetupError: If this orchestrator or context was already used.
        """
        if self._started:
            raise SheetportSetupError(
                "ImportOrchestrator instances run once. Create a new orchestrator per import."
            )
        run_context = context or self.new_context()
        if run_context.state != "idle":
            raise SheetportSetupError(
                f"Import run context is already {run_context.state}. Use a fresh context."
            )
        self._started = True
        run_context.page_count = len(targets)
        try:
            if not self._document_id or not self._document_id.strip():
                raise SheetportSetupError("Document id is not specified.")
            resolved_targets = validate_targets(targets, self._registry, self._content)
        except SheetportSetupError as error:
            return _fail(run_context, str(error))

        run_context.transition("running")
        _LOGGER.info(
            "import_started",
            document_id=self._document_id,
            fields=[target.field_name for target in targets],
        )
        importer = PageImporter(self._document_id, self._content, self._fetcher, run_context)
        for target in resolved_targets:
            if run_context.cancel_requested:
                return _cancel(run_context)
            try:
                importer.import_page(target)
            except SheetportError as error:
                return _fail(run_context, str(error))
            run_context.imported_fields.append(target.descriptor.field_name)
        return _complete(run_context)


def _fail(context: ImportRunContext, message: str) -> ImportResult:
    context.transition("failed")
    context.failure_message = message
    _LOGGER.error("import_aborted", message=message, imported_fields=context.imported_fields)
    context.observer.on_failed(message)
    return _finish(context)


def _cancel(context: ImportRunContext) -> ImportResult:
    context.transition("cancelled")
    context.failure_message = "Import cancelled before all targets were processed."
    _LOGGER.warning("import_cancelled", imported_fields=context.imported_fields)
    return _finish(context)


def _complete(context: ImportRunContext) -> ImportResult:
    context.transition("completed")
    context.progress = 1.0
    context.describe("Import complete")
    context.publish()
    _LOGGER.info("import_completed", imported_fields=context.imported_fields)
    return _finish(context)


def _finish(context: ImportRunContext) -> ImportResult:
    result = context.to_result()
    context.observer.on_finished(result)
    return result
