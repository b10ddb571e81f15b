"""
Syntax highlighting of code blocks inside rendered HTML.

Highlighting is an enhancement that must never fail a build. Each block
produces either a ``Highlighted`` result carrying Pygments markup or an
``Unhighlighted`` result carrying the original text and the reason, and
the rewriter keeps going either way.
"""

import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from .errors import HighlightError, ParseError, SerializeError

CODE_SELECTOR = 'code[class*="language-"]'
LANGUAGE_PREFIX = 'language-'
WRAPPER_PREFIX = '<html><head></head><body>'
WRAPPER_SUFFIX = '</body></html>'
CODE_TAG_RE = re.compile(r'<(/?)code\b[^>]*>', re.IGNORECASE)
NEWLINE_RE = re.compile('\n')

# Lexer options that keep the source text exactly as written
LEXER_OPTIONS = {'stripnl': False, 'ensurenl': False}


@dataclass(frozen=True)
class Highlighted:
    html: str
    language: str = ''


@dataclass(frozen=True)
class Unhighlighted:
    text: str
    reason: str = ''


def code_language(element):
    """Return the name following ``language-`` in the element's classes."""
    for css_class in element.get('class') or []:
        if css_class.startswith(LANGUAGE_PREFIX):
            return css_class[len(LANGUAGE_PREFIX):]
    return ''


def _lexer_for(code, language):
    if language:
        try:
            return get_lexer_by_name(language, **LEXER_OPTIONS)
        except ClassNotFound:
            pass
    try:
        return guess_lexer(code, **LEXER_OPTIONS)
    except ClassNotFound as e:
        raise HighlightError(f"no lexer for language {language!r}") from e


def highlight_code(code, language=''):
    """Highlight ``code`` as HTML spans, degrading to the plain text."""
    try:
        lexer = _lexer_for(code, language)
        html = highlight(code, lexer, HtmlFormatter(nowrap=True))
    except HighlightError as e:
        return Unhighlighted(code, str(e))
    except Exception as e:
        # Lexers are third-party code; any failure only costs the colours
        return Unhighlighted(code, f"{type(e).__name__}: {e}")
    return Highlighted(html, language)


def line_offsets(text):
    """Offsets at which each line of ``text`` starts."""
    offsets = [0]
    offsets.extend(match.end() for match in NEWLINE_RE.finditer(text))
    return offsets


def inner_span(text, offsets, element):
    """
    Locate the contents of a parsed code element in the source text.

    Returns ``(start, end)`` offsets between the element's start and end
    tags, or None when the parser kept no position or the tags cannot be
    matched up.
    """
    if element.sourceline is None or element.sourcepos is None:
        return None
    if element.sourceline > len(offsets):
        return None
    start = offsets[element.sourceline - 1] + element.sourcepos
    depth = 0
    contents_start = None
    for match in CODE_TAG_RE.finditer(text, start):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return contents_start, match.start()
        else:
            if contents_start is None:
                if match.start() != start:
                    return None
                contents_start = match.end()
            depth += 1
    return None


def splice(text, edits):
    """Replace the ordered, non-overlapping ``((start, end), html)`` edits in ``text``."""
    pieces = []
    last = 0
    for (start, end), html in edits:
        pieces.append(text[last:start])
        pieces.append(html)
        last = end
    pieces.append(text[last:])
    return ''.join(pieces)


def strip_wrapper_tags(html):
    """Remove one parser-added document wrapper from a serialized fragment."""
    html = html.replace(WRAPPER_PREFIX, '', 1)
    return html.replace(WRAPPER_SUFFIX, '', 1)


class CodeHighlightRewriter:
    """Replace the content of ``language-`` tagged code elements with highlighted HTML."""

    def __init__(self, parser='html.parser', highlighter=highlight_code, encoding='utf-8', logger=None):
        self.parser = parser
        self.highlighter = highlighter
        self.encoding = encoding
        self.logger = logger or logging.getLogger('CodeHighlightRewriter')

    def decode(self, html):
        if not isinstance(html, bytes):
            return html
        try:
            return html.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(f"error while parsing html: {e}") from e

    def parse(self, text):
        """Parse HTML text into a document."""
        try:
            return BeautifulSoup(text, self.parser)
        except (FeatureNotFound, ParserRejectedMarkup, TypeError) as e:
            raise ParseError(f"error while parsing html: {e}") from e

    def rewrite(self, html):
        """Return ``html`` with every tagged code block highlighted."""
        rewritten, _ = self.rewrite_with_report(html)
        return rewritten

    def rewrite_with_report(self, html):
        """
        Highlight every tagged code block.

        Returns the rewritten fragment and one ``Highlighted`` or
        ``Unhighlighted`` result per matched element, in document order.
        Only the contents of matched elements are re-serialized; the rest
        of the source is copied through unchanged. Tagged code nested in
        another tagged code element is highlighted as part of the outer one.
        """
        text = self.decode(html)
        doc = self.parse(text)
        matches = doc.select(CODE_SELECTOR)
        matched_ids = {id(element) for element in matches}
        offsets = line_offsets(text)

        results = []
        rewritten = []
        for element in matches:
            if any(id(parent) in matched_ids for parent in element.parents):
                continue
            span = inner_span(text, offsets, element)
            result = self.highlighter(element.get_text(), code_language(element))
            self.replace_contents(element, result)
            results.append(result)
            rewritten.append((span, element))

        try:
            if all(span is not None for span, _ in rewritten):
                serialized = splice(text, [(span, element.decode_contents()) for span, element in rewritten])
            else:
                # Positions unknown: fall back to serializing the whole tree
                serialized = doc.decode()
        except (RecursionError, ValueError, TypeError) as e:
            raise SerializeError(f"error while generating html: {e}") from e
        return strip_wrapper_tags(serialized), results

    def replace_contents(self, element, result):
        element.clear()
        if isinstance(result, Highlighted):
            if result.html:
                fragment = BeautifulSoup(result.html, 'html.parser')
                for child in list(fragment.contents):
                    element.append(child.extract())
            return
        self.logger.debug(f"Leaving code block unhighlighted: {result.reason}")
        element.append(result.text)
