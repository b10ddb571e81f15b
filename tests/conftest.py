"""Test configuration and fixtures for bloggen tests."""

import pytest
import tempfile
import shutil
import os
from datetime import datetime
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bloggen_pkg.models import Meta, Post, SiteInformation


POST_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <title>{{ title }}</title>
</head>
<body>
    <article>{{ content }}</article>
    <a href="{{ relative_path }}index.html">Home</a>
</body>
</html>"""

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
<body>
<ul>
{% for post in posts %}    <li><a href="{{ relative_path }}{{ post.name }}/">{{ post.meta.title }}</a></li>
{% endfor %}</ul>
<p>Page {{ page_num }} of {{ max_page_num }}</p>
</body>
</html>"""


def write_post(content_dir, slug, title, date, body="Some text.", images=None):
    """Create ``content_dir/slug/post.md`` and optional image files."""
    post_dir = Path(content_dir) / slug
    post_dir.mkdir(parents=True, exist_ok=True)
    (post_dir / 'post.md').write_text(f"""---
title: {title}
date: {date}
tags: [notes]
---

{body}
""", encoding='utf-8')
    if images:
        images_dir = post_dir / 'images'
        images_dir.mkdir()
        for name, data in images.items():
            (images_dir / name).write_bytes(data)
    return str(post_dir)


def make_post(name, parsed_date, html="<p>Hello</p>", images_dir="", images=None, title=None):
    """Build a ``Post`` without touching the file system."""
    meta = Meta(title=title or name.title(), date=parsed_date.date().isoformat(), parsed_date=parsed_date)
    return Post(name=name, html=html, meta=meta, images_dir=images_dir, images=images or [])


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_content_dir(temp_dir, sample_image_data):
    """Create a content directory with three posts."""
    content_dir = Path(temp_dir) / 'content'
    content_dir.mkdir()

    write_post(content_dir, 'hello-world', 'Hello World', '2023-01-01', body="""# Hello

Some **bold** text.

```go
fmt.Println(1)
```
""", images={'pic.png': sample_image_data})
    write_post(content_dir, 'summer-notes', 'Summer Notes', '2023-06-01')
    write_post(content_dir, 'year-end', 'Year End', '2022-12-31')

    # Not a post: no post.md inside
    (content_dir / 'drafts').mkdir()
    return str(content_dir)


@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a templates directory with post and listing templates."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()
    (templates_dir / 'post.html').write_text(POST_TEMPLATE)
    (templates_dir / 'index.html').write_text(INDEX_TEMPLATE)
    return str(templates_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    """Create a mock output directory."""
    output_dir = Path(temp_dir) / 'output'
    output_dir.mkdir()
    return str(output_dir)


@pytest.fixture
def mock_staging_dir(temp_dir):
    """Create a temp staging area with artifacts for the hello-world post."""
    staging_dir = Path(temp_dir) / 'temp'
    artifacts = staging_dir / 'hello-world' / 'artifacts'
    artifacts.mkdir(parents=True)
    (artifacts / 'demo.zip').write_bytes(b'PK\x03\x04')
    (artifacts / 'notes.txt').write_text('extra notes')
    return str(staging_dir)


@pytest.fixture
def site_info(mock_output_dir, mock_staging_dir):
    return SiteInformation(
        blog_title='Test Blog',
        blog_url='https://example.com',
        blog_description='A blog for tests',
        temp_folder=mock_staging_dir,
        dest_folder=mock_output_dir,
        posts_per_page=2,
    )


@pytest.fixture
def sample_image_data():
    """Sample image data for testing."""
    # Create a minimal PNG image (1x1 pixel)
    png_data = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00\x90wS\xde\x00\x00\x00\tpHYs\x00\x00\x0b\x13\x00\x00\x0b\x13\x01\x00\x9a\x9c\x18\x00\x00\x00\nIDATx\x9cc\xf8\x00\x00\x00\x01\x00\x01\x00\x00\x00\x00IEND\xaeB`\x82'
    return png_data


@pytest.fixture
def dated_posts():
    """Posts published on 2023-01-01, 2023-06-01 and 2022-12-31."""
    return [
        make_post('new-year', datetime(2023, 1, 1)),
        make_post('summer', datetime(2023, 6, 1)),
        make_post('year-end', datetime(2022, 12, 31)),
    ]
