"""Renderers turning a search result into a report."""

from .text_report import to_text
from .json_report import to_json

__all__ = ["to_text", "to_json"]
