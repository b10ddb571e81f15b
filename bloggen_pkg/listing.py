"""Paginated listing pages over the ordered posts."""

import logging
import math
import os

from .fs import FileSystem, change_path_to_url
from .models import HTMLPage
from .page import PageWriter

PAGE_DIR_NAME = 'page'


def paginate(posts, posts_per_page):
    """Split ``posts`` into pages of ``posts_per_page``; there is always at least one page."""
    posts_per_page = max(1, int(posts_per_page))
    total_pages = max(1, math.ceil(len(posts) / posts_per_page))
    return [posts[i * posts_per_page:(i + 1) * posts_per_page] for i in range(total_pages)]


def listing_page_dir(destination, page_num):
    """Page 1 lives at the destination root, later pages under ``page/<n>``."""
    if page_num == 1:
        return destination
    return os.path.join(destination, PAGE_DIR_NAME, str(page_num))


class ListingGenerator:
    """Write the listing pages for posts that are already in listing order."""

    def __init__(self, posts, site_info, template, destination,
                 filesystem=None, page_writer=None, logger=None):
        self.posts = posts
        self.site_info = site_info
        self.template = template
        self.destination = destination
        self.filesystem = filesystem or FileSystem()
        self.page_writer = page_writer or PageWriter()
        self.logger = logger or logging.getLogger('ListingGenerator')

    def generate(self):
        """Write every listing page and return the number written."""
        pages = paginate(self.posts, self.site_info.posts_per_page)
        self.logger.info(f"Building {len(pages)} listing page(s)")
        for page_num, page_posts in enumerate(pages, start=1):
            path = listing_page_dir(self.destination, page_num)
            self.filesystem.create_folder_if_not_exist(path)
            self.page_writer(HTMLPage(
                path=change_path_to_url(path),
                page_title=self.site_info.blog_title or '',
                page_num=page_num,
                max_page_num=len(pages),
                is_post=False,
                template=self.template,
                content='',
                site_info=self.site_info,
                posts=page_posts,
            ))
        return len(pages)
