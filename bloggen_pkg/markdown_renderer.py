"""Markdown to HTML conversion."""

import mistune


class MarkdownRenderer:
    """
    Render markdown bytes to HTML bytes with mistune.

    Rendering is best effort: mistune never rejects input, so neither does
    this class. Fenced code blocks with an info string are emitted as
    ``<pre><code class="language-<lang>">`` for the highlighting pass.
    """

    PLUGINS = ['table', 'task_lists', 'strikethrough', 'url']

    def __init__(self, encoding='utf-8'):
        self.encoding = encoding
        self.markdown_parser = self.create_markdown_parser()

    def create_markdown_parser(self):
        """Create a Mistune markdown parser with a custom renderer."""
        class CustomRenderer(mistune.HTMLRenderer):
            def __init__(self):
                super().__init__(escape=False)

            def block_code(self, code, info=None):
                escaped_code = mistune.escape(code)
                lang = info.strip().split(None, 1)[0] if info and info.strip() else ''
                if lang:
                    return '<pre><code class="language-{}">{}</code></pre>\n'.format(
                        mistune.escape(lang), escaped_code)
                return '<pre><code>{}</code></pre>\n'.format(escaped_code)

        return mistune.create_markdown(
            renderer=CustomRenderer(),
            plugins=self.PLUGINS
        )

    def markdown_filter(self, text):
        """Convert markdown text to HTML text."""
        return self.markdown_parser(text)

    def render(self, markdown_bytes):
        """Convert markdown bytes (or text) to HTML bytes."""
        if isinstance(markdown_bytes, bytes):
            text = markdown_bytes.decode(self.encoding, errors='replace')
        else:
            text = markdown_bytes
        return self.markdown_filter(text).encode(self.encoding)
