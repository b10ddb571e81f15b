"""Lookup of the images and staged artifacts that belong to a post."""

import os

from .errors import DirectoryNotFound
from .fs import FileSystem

IMAGES_DIR_NAME = 'images'
ARTIFACTS_DIR_NAME = 'artifacts'


class PostAssetCollector:
    """
    Locate a post's images and artifacts without copying anything.

    A missing directory means the post has no assets of that kind. Any
    other failure to read a directory propagates as ``FileSystemError``.
    """

    def __init__(self, filesystem=None):
        self.filesystem = filesystem or FileSystem()

    def find_images(self, post_source_path):
        """Return ``(images_dir_path, filenames)``, or ``("", [])`` without an images directory."""
        dir_path = os.path.join(post_source_path, IMAGES_DIR_NAME)
        try:
            names = self.filesystem.list_directory(dir_path)
        except DirectoryNotFound:
            return "", []
        images = [name for name in names if os.path.isfile(os.path.join(dir_path, name))]
        return dir_path, images

    def find_artifacts(self, temp_root, post_name):
        """Return full paths of the files staged under ``temp_root/post_name/artifacts``."""
        src = os.path.join(temp_root, post_name, ARTIFACTS_DIR_NAME)
        try:
            names = self.filesystem.list_directory(src)
        except DirectoryNotFound:
            return []
        paths = (os.path.join(src, name) for name in names)
        return [path for path in paths if os.path.isfile(path)]
