"""Python SDK for page imports.

This module exposes high-level APIs that run an import into a content
object and serialize the populated content afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import requests

from core.config import SheetportConfig
from core.import_plan import ImportPlan
from core.record_schema import RecordRegistry
from core.types import ImportResult, SerializationOptions, TargetDescriptor
from ingest.observer import ImportObserver
from ingest.orchestrator import ImportOrchestrator
from ingest.page_fetcher import PageFetcher
from ingest.run_context import ImportRunContext
from store.content_serializer import serialize_content


@dataclass(frozen=True)
class PlanRunResult:
    """Outcome of running one import plan.

    Attributes:
        result: Terminal import result.
        content: Content object populated by the run.
        output_path: Serialized file path, when serialization ran.
    """

    result: ImportResult
    content: object
    output_path: Path | None


class SheetportClient:
    """Primary SDK entry point for page imports."""

    def __init__(self, config: SheetportConfig | None = None, session: Any | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            session: Optional ``requests``-compatible session used for every fetch.
        """
        self._config = config or SheetportConfig.from_env()
        self._session = session

    @property
    def config(self) -> SheetportConfig:
        return self._config

    def import_content(
        self,
        document_id: str,
        content: object,
        registry: RecordRegistry,
        targets: Sequence[TargetDescriptor],
        observer: ImportObserver | None = None,
        context: ImportRunContext | None = None,
    ) -> ImportResult:
        """Import target pages into a content object.

        Args:
            document_id: Spreadsheet document identifier.
            content: Object whose target fields receive records.
            registry: Record schemas for target element types.
            targets: Target fields in import order.
            observer: Optional progress observer.
            context: Optional caller-owned run context.

        Returns:
            Terminal import result.
        """
        session = self._session or requests.Session()
        try:
            fetcher = PageFetcher(self._config, session)
            orchestrator = ImportOrchestrator(document_id, content, registry, fetcher, observer)
            return orchestrator.run(targets, context)
        finally:
            if self._session is None:
                session.close()

    def serialize(self, content: object, options: SerializationOptions) -> Path:
        """Write populated content to disk.

        Raises:
            SheetportSerializationError: If the output cannot be written.
        """
        return serialize_content(content, options)

    def run_plan(
        self,
        plan: ImportPlan,
        observer: ImportObserver | None = None,
        serialize: bool = True,
    ) -> PlanRunResult:
        """Run an import plan and serialize on success.

        Args:
            plan: Validated import plan.
            observer: Optional progress observer.
            serialize: Whether to write the plan serialization output.

        Returns:
            Import result, populated content, and output path.
        """
        content = plan.content_type()
        result = self.import_content(
            plan.document_id, content, plan.registry, plan.targets, observer
        )
        output_path = None
        if result.succeeded and serialize and plan.serialization is not None:
            output_path = self.serialize(content, plan.serialization)
        return PlanRunResult(result=result, content=content, output_path=output_path)
