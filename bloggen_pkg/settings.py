"""
Settings loader for the bloggen post generator.
Supports configuration from bloggen.yml, bloggen.yaml, or bloggen.json files.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .models import SiteInformation


class BloggenSettings:
    """Load and manage bloggen configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'content',
        'templates': 'templates',
        'output': 'output',
        'temp': 'temp',
        'posts_per_page': 5,
        'site_title': None,
        'site_url': None,
        'site_description': None,
        'log_dir': None,
        'workers': None,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['bloggen.yml', 'bloggen.yaml', 'bloggen.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None
        self.logger = logging.getLogger('BloggenSettings')

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if loaded_settings:
                # Merge with defaults, giving preference to loaded settings
                self.settings.update(loaded_settings)
                self.logger.info(f"Loaded configuration from: {config_file}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    loaded = yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    loaded = json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}") from e
        except (IOError, OSError) as e:
            raise IOError(f"Error reading configuration file {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")
        return loaded

    def merge_overrides(self, overrides: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with explicit overrides.
        Overrides that are None leave the configured value in place.

        Args:
            overrides: Dictionary of setting overrides

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value
        self.settings = merged
        return merged.copy()

    def to_site_information(self) -> SiteInformation:
        """Build the site information handed to templates."""
        return SiteInformation(
            blog_title=self.settings['site_title'],
            blog_url=self.settings['site_url'],
            blog_description=self.settings['site_description'],
            temp_folder=self.settings['temp'],
            dest_folder=self.settings['output'],
            posts_per_page=max(1, int(self.settings['posts_per_page'])),
        )
