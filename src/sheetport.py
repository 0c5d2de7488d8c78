"""Public SDK surface for Sheetport.

This module provides a stable import path for library users.
It re-exports the client, schema registration, and typed models.
"""

from __future__ import annotations

from core.config import SheetportConfig
from core.import_plan import ImportPlan, load_import_plan
from core.record_schema import FieldSpec, RecordRegistry, RecordSchema
from core.types import ImportResult, PageSource, SerializationOptions, TargetDescriptor
from ingest.observer import ImportObserver, LoggingImportObserver
from ingest.orchestrator import ImportOrchestrator
from ingest.run_context import ImportRunContext
from store.import_sdk import PlanRunResult, SheetportClient

__all__ = [
    "FieldSpec",
    "ImportObserver",
    "ImportOrchestrator",
    "ImportPlan",
    "ImportResult",
    "ImportRunContext",
    "LoggingImportObserver",
    "PageSource",
    "PlanRunResult",
    "RecordRegistry",
    "RecordSchema",
    "SerializationOptions",
    "SheetportClient",
    "SheetportConfig",
    "TargetDescriptor",
    "load_import_plan",
]
