"""Data carried through a single generation pass."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional


@dataclass
class Meta:
    """Front matter of a post."""
    title: str
    date: Any
    parsed_date: datetime
    short: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass
class Post:
    name: str
    html: str
    meta: Meta
    images_dir: str = ""
    images: List[str] = field(default_factory=list)


@dataclass
class SiteInformation:
    blog_title: Optional[str] = None
    blog_url: Optional[str] = None
    blog_description: Optional[str] = None
    temp_folder: str = "temp"
    dest_folder: str = "output"
    posts_per_page: int = 5


@dataclass
class HTMLPage:
    """
    Everything needed to render one output file.

    ``content`` is trusted HTML and is handed to the template as
    ``markupsafe.Markup`` so autoescaping leaves it alone.
    """
    path: str
    page_title: str
    page_num: int
    max_page_num: int
    is_post: bool
    template: Any
    content: str
    site_info: SiteInformation
    posts: List[Post] = field(default_factory=list)
