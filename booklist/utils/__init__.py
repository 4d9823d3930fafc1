# booklist/utils/__init__.py
"""
Utility functions for the book list pipeline.
"""

from .text import slugify, ucfirst, strip_tags, clean_html_segment

__all__ = [
    "slugify",
    "ucfirst",
    "strip_tags",
    "clean_html_segment"
]
