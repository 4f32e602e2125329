"""
Output rendering.

Turns stored markdown into HTML for the views.
"""

from .renderer import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
