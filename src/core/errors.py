"""Sheetport exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class SheetportError(Exception):
    """Base exception for all Sheetport failures."""


class SheetportConfigError(SheetportError):
    """Raised for invalid runtime configuration."""


class SheetportSetupError(SheetportError):
    """Raised for invalid targets or usage before any page is fetched."""


class SheetportFetchError(SheetportError):
    """Raised when a page cannot be downloaded."""


class SheetportParseError(SheetportError):
    """Raised when page text cannot be aligned with its headers."""


class SheetportImportError(SheetportError):
    """Raised when a parsed page cannot populate its target field."""


class SheetportPlanError(SheetportError):
    """Raised for invalid or unsupported import plan files."""


class SheetportSerializationError(SheetportError):
    """Raised when imported content cannot be written to disk."""
