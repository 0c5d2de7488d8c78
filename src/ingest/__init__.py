"""Spreadsheet page import pipeline.

This package downloads CSV pages, splits and filters their rows, and
coerces cells into record fields of a caller-supplied content object.
"""
