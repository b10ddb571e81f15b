"""Writing one post's output directory."""

import logging
import os

from .assets import IMAGES_DIR_NAME, PostAssetCollector
from .fs import FileSystem, change_path_to_url
from .models import HTMLPage
from .page import PageWriter


class PostGenerator:
    """
    Generate the output of a single post under ``destination/<post.name>``.

    The steps run in order and the first failure propagates; files already
    written by earlier steps are left in place. File operations go through
    ``filesystem`` and the page is written by ``page_writer``, both of which
    can be swapped out.
    """

    def __init__(self, post, site_info, template, destination,
                 filesystem=None, page_writer=None, asset_collector=None, logger=None):
        self.post = post
        self.site_info = site_info
        self.template = template
        self.destination = destination
        self.filesystem = filesystem or FileSystem()
        self.page_writer = page_writer or PageWriter()
        self.asset_collector = asset_collector or PostAssetCollector(self.filesystem)
        self.logger = logger or logging.getLogger('PostGenerator')

    def generate(self):
        """Build the post directory and return its path."""
        post = self.post
        self.logger.info(f"Generating Post: {post.meta.title}...")
        static_path = os.path.join(self.destination, post.name)
        self.filesystem.create_folder_if_not_exist(static_path)

        if post.images_dir:
            self.copy_images_dir(post.images_dir, static_path)

        page = HTMLPage(
            path=change_path_to_url(static_path),
            page_title=post.meta.title,
            page_num=0,
            max_page_num=0,
            is_post=True,
            template=self.template,
            content=post.html,
            site_info=self.site_info,
        )
        self.page_writer(page)

        self.copy_additional_artifacts(static_path, post.name)
        self.logger.info(f"Finished generating Post: {post.meta.title}...")
        return static_path

    def copy_images_dir(self, source, destination):
        """Copy the post's image files from ``source`` into ``destination/images``."""
        path = os.path.join(destination, IMAGES_DIR_NAME)
        self.filesystem.create_folder_if_not_exist(path)
        for name in self.post.images:
            self.filesystem.copy_file(os.path.join(source, name), path)

    def copy_additional_artifacts(self, path, post_name):
        """Copy staged artifacts flat into ``path``; no staging directory means nothing to copy."""
        artifacts = self.asset_collector.find_artifacts(self.site_info.temp_folder, post_name)
        for src in artifacts:
            self.filesystem.copy_file(src, path)
        if artifacts:
            self.logger.debug(f"Copied {len(artifacts)} artifact(s) for {post_name}")
