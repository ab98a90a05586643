"""🖼️ Result rendering - interactive HTML pages and Rich console tables."""

from .console import build_table, print_table
from .html import Section, build_section, format_cell, render_html_table, render_page

__all__ = [
    "Section",
    "build_section",
    "build_table",
    "format_cell",
    "print_table",
    "render_html_table",
    "render_page",
]
