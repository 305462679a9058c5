"""Textual preview application for gridplace."""

from gridplace.tui.app import GridPreviewApp, run_app

__all__ = ["GridPreviewApp", "run_app"]
