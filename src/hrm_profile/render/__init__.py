"""
Program Rendering
=================

Renderers for decoded programs:

- **text**: the game's copy/paste text format, with optional inspection
  columns and DEFINE COMMENT blocks
- **svg**: a picture of the program in the style of the game's editor
"""

from hrm_profile.render.text import (
    DEFAULT_WRAP_WIDTH,
    TextOptions,
    encode_comment,
    render_comments_text,
    render_entry,
    render_instructions_text,
    render_tab_text,
    wrap,
)
from hrm_profile.render.svg import render_svg, render_tab_svg

__all__ = [
    "DEFAULT_WRAP_WIDTH",
    "TextOptions",
    "encode_comment",
    "render_comments_text",
    "render_entry",
    "render_instructions_text",
    "render_tab_text",
    "wrap",
    "render_svg",
    "render_tab_svg",
]
