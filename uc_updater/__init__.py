"""Ungoogled Chromium update checker."""

__version__ = "0.1.0"
