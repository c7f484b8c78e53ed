"""Textual host for the interactive jq panel."""

from .app import JsonQueryApp

__all__ = ["JsonQueryApp"]
