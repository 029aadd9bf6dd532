"""Markup rendering."""

from .markup import SELF_CLOSING_TAGS, is_self_closing, render_attribute, render_to_html

__all__ = ["render_to_html", "render_attribute", "is_self_closing", "SELF_CLOSING_TAGS"]
