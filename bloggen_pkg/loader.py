"""Loading posts from their source directories."""

import logging
import os
from datetime import date, datetime, timezone

import yaml

from .assets import PostAssetCollector
from .errors import DirectoryNotFound, FileSystemError, ParseError
from .highlighter import CodeHighlightRewriter
from .markdown_renderer import MarkdownRenderer
from .models import Meta, Post

POST_FILE_NAME = 'post.md'
DATE_FORMATS = [
    '%Y-%m-%dT%H:%M:%S%z', '%Y-%m-%d %H:%M:%S%z',
    '%Y-%m-%d %H:%M:%S', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d', '%b %d, %Y',
]


def as_naive_utc(value):
    """Convert an aware datetime to naive UTC so all post dates compare."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(value):
    """Parse a front matter date, returning None when it is not recognised."""
    if isinstance(value, datetime):
        return as_naive_utc(value)
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                return as_naive_utc(datetime.strptime(value.strip(), fmt))
            except ValueError:
                continue
    return None


def split_front_matter(content):
    """Split ``---`` delimited YAML front matter from the markdown body."""
    parts = content.split('---', 2)
    if len(parts) >= 3 and not parts[0].strip():
        try:
            metadata = yaml.safe_load(parts[1]) or {}
        except yaml.YAMLError as e:
            raise ParseError(f"invalid YAML front matter: {e}") from e
        if not isinstance(metadata, dict):
            raise ParseError("front matter must be a mapping")
        return metadata, parts[2].lstrip('\n')
    return {}, content


def build_meta(metadata, default_title):
    raw_date = metadata.get('date')
    parsed_date = parse_date(raw_date)
    if parsed_date is None:
        raise ParseError(f"missing or unparseable date: {raw_date!r}")
    tags = metadata.get('tags') or []
    if isinstance(tags, str):
        tags = [tag.strip() for tag in tags.split(',') if tag.strip()]
    return Meta(
        title=str(metadata.get('title') or default_title),
        date=raw_date,
        parsed_date=parsed_date,
        short=str(metadata.get('short') or metadata.get('description') or ''),
        tags=[str(tag) for tag in tags],
    )


class PostLoader:
    """Read ``post.md`` from a post directory and produce a rendered ``Post``."""

    def __init__(self, renderer=None, rewriter=None, asset_collector=None, logger=None):
        self.renderer = renderer or MarkdownRenderer()
        self.rewriter = rewriter or CodeHighlightRewriter()
        self.asset_collector = asset_collector or PostAssetCollector()
        self.logger = logger or logging.getLogger('PostLoader')

    def read_post_file(self, path):
        file_path = os.path.join(path, POST_FILE_NAME)
        try:
            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                return f.read()
        except OSError as e:
            raise FileSystemError("reading file", file_path, e) from e

    def get_html(self, markdown_content, source):
        """Render markdown and highlight its code blocks."""
        html = self.renderer.render(markdown_content)
        try:
            return self.rewriter.rewrite(html)
        except ParseError as e:
            raise ParseError(f"error during syntax highlighting of {source}: {e}") from e

    def load_post(self, path):
        """Load the post stored in directory ``path``; its name is the directory name."""
        name = os.path.basename(os.path.normpath(path))
        content = self.read_post_file(path)
        source = os.path.join(path, POST_FILE_NAME)
        try:
            metadata, markdown_content = split_front_matter(content)
            meta = build_meta(metadata, name)
        except ParseError as e:
            raise ParseError(f"error reading metadata of {source}: {e}") from e

        html = self.get_html(markdown_content, source)
        images_dir, images = self.asset_collector.find_images(path)
        self.logger.debug(f"Loaded post {name} with {len(images)} image(s)")
        return Post(name=name, html=html, meta=meta, images_dir=images_dir, images=images)

    def find_post_dirs(self, content_dir):
        """Return the sorted subdirectories of ``content_dir`` holding a ``post.md``."""
        try:
            entries = self.asset_collector.filesystem.list_directory(content_dir)
        except DirectoryNotFound:
            return []
        return [
            os.path.join(content_dir, entry)
            for entry in entries
            if os.path.isfile(os.path.join(content_dir, entry, POST_FILE_NAME))
        ]
