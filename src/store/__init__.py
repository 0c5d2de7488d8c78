"""Serialization of imported content.

This package writes populated content objects to JSON or binary files
once an import run has completed.
"""
