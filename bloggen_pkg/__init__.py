"""
bloggen - turns directories of markdown posts into a static blog.

Each post directory holds a ``post.md`` with YAML front matter and an
optional ``images/`` folder. Posts are rendered with mistune, their code
blocks highlighted with Pygments, and written through Jinja2 templates,
newest first.
"""

__version__ = "1.0.0"

from .core import Bloggen, BuildResult
from .generator import PostGenerator
from .highlighter import CodeHighlightRewriter
from .loader import PostLoader
from .markdown_renderer import MarkdownRenderer

__all__ = ['Bloggen', 'BuildResult', 'PostGenerator', 'CodeHighlightRewriter',
           'PostLoader', 'MarkdownRenderer']
