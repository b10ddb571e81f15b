"""
File system collaborators used by the post pipeline.

Every ``OSError`` is re-raised as a ``FileSystemError`` naming the path
that failed. Listing a directory that does not exist raises the narrower
``DirectoryNotFound`` so callers can decide whether absence matters.
"""

import os
import shutil

from .errors import DirectoryNotFound, FileSystemError


class FileSystem:
    """Directory creation, listing and single file copies."""

    def create_folder_if_not_exist(self, path):
        """Create ``path`` and its parents unless it is already a directory."""
        if os.path.isdir(path):
            return
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FileSystemError("creating directory at", path, e) from e

    def list_directory(self, path):
        """Return the sorted entry names of ``path``."""
        try:
            return sorted(os.listdir(path))
        except FileNotFoundError as e:
            raise DirectoryNotFound("reading directory", path, e) from e
        except OSError as e:
            raise FileSystemError("reading directory", path, e) from e

    def copy_file(self, src, dest_dir):
        """Copy ``src`` into ``dest_dir`` keeping its filename."""
        dest_path = os.path.join(dest_dir, os.path.basename(src))
        try:
            shutil.copy2(src, dest_path)
        except OSError as e:
            raise FileSystemError(f"copying {src} to", dest_path, e) from e
        return dest_path


def change_path_to_url(path):
    """Turn a file system path into a forward-slash URL path."""
    return path.replace(os.sep, '/').replace('\\', '/')


def calculate_relative_path(root_dir, current_output_dir):
    """Calculate relative path from current directory to root."""
    rel_path = os.path.relpath(root_dir, current_output_dir)
    # Trailing '/' keeps asset links like "{{ relative_path }}css/site.css" valid
    if rel_path == '.':
        return ''
    return change_path_to_url(rel_path) + '/'
