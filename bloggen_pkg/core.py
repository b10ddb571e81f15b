import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from .errors import BloggenError
from .fs import FileSystem
from .generator import PostGenerator
from .listing import ListingGenerator
from .loader import PostLoader
from .ordering import sort_posts
from .page import PageWriter, create_environment, load_template
from .settings import BloggenSettings

POST_TEMPLATE = 'post.html'
LISTING_TEMPLATE = 'index.html'

# Workloads below this size are generated on the calling thread
PARALLEL_THRESHOLD = 12


@dataclass
class BuildResult:
    posts_generated: int = 0
    posts_failed: int = 0
    listing_pages: int = 0
    # Slugs of the posts that failed to load or generate
    failures: List[str] = field(default_factory=list)


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Site build completed in",
            "Total posts generated:",
            "Total posts failed:",
            "Total listing pages:",
            "Loaded configuration from:",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(log_dir=None):
    """
    Attach console and optional file handlers to the bloggen loggers.

    The console only shows the build summary and problems; the file
    handler, written under ``log_dir`` when given, records everything.
    """
    names = ['Bloggen', 'BloggenSettings', 'PostGenerator', 'PostLoader',
             'ListingGenerator', 'PageWriter', 'CodeHighlightRewriter']
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.addFilter(InfoFilter())
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    file_handler = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime('bloggen_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    for name in names:
        logger = logging.getLogger(name)
        if logger.handlers:
            continue
        logger.setLevel(logging.DEBUG if file_handler else logging.INFO)
        logger.addHandler(console_handler)
        if file_handler:
            logger.addHandler(file_handler)


class Bloggen:
    """
    Build a blog: every post directory under ``content_dir`` becomes
    ``output_dir/<slug>/index.html`` and the posts are listed newest first.

    Settings come from ``bloggen.yml``/``bloggen.yaml``/``bloggen.json`` in
    ``config_dir``; keyword arguments that are not None override them.
    """

    def __init__(self, content_dir=None, templates_dir=None, output_dir=None, temp_dir=None,
                 posts_per_page=None, site_title=None, site_url=None, site_description=None,
                 log_dir=None, workers=None, config_dir=None, configure_logging=True,
                 filesystem=None, loader=None):
        self.config = BloggenSettings(config_dir)
        self.config.load_settings()
        settings = self.config.merge_overrides({
            'content': content_dir,
            'templates': templates_dir,
            'output': output_dir,
            'temp': temp_dir,
            'posts_per_page': posts_per_page,
            'site_title': site_title,
            'site_url': site_url,
            'site_description': site_description,
            'log_dir': log_dir,
            'workers': workers,
        })
        self.content_dir = settings['content']
        self.templates_dir = settings['templates']
        self.output_dir = settings['output']
        self.workers = settings['workers']
        self.site_info = self.config.to_site_information()

        if configure_logging:
            setup_logging(settings['log_dir'])
        self.logger = logging.getLogger('Bloggen')

        if not os.path.isdir(self.templates_dir):
            raise FileNotFoundError(f"Templates directory not found: {self.templates_dir}")

        self.filesystem = filesystem or FileSystem()
        self.loader = loader or PostLoader()
        self.page_writer = PageWriter()
        self.env = create_environment(self.templates_dir)
        self.posts = []

    def load_posts(self, result):
        """Load every post directory, logging and counting the ones that fail."""
        posts = []
        for post_dir in self.loader.find_post_dirs(self.content_dir):
            try:
                posts.append(self.loader.load_post(post_dir))
            except BloggenError as e:
                self.logger.error(f"Error loading post {post_dir}: {e}")
                result.posts_failed += 1
                result.failures.append(os.path.basename(os.path.normpath(post_dir)))
        return sort_posts(posts)

    def generate_post(self, post, template):
        generator = PostGenerator(
            post, self.site_info, template, self.output_dir,
            filesystem=self.filesystem, page_writer=self.page_writer,
        )
        return generator.generate()

    def build_posts(self, posts, result):
        """Generate each post, in parallel once there are enough of them."""
        if not posts:
            self.logger.warning("No posts found to generate.")
            return
        template = load_template(self.env, POST_TEMPLATE)
        if len(posts) >= PARALLEL_THRESHOLD:
            self.logger.info(f"Using a thread pool for {len(posts)} posts")
            self._build_with_pool(posts, template, result)
        else:
            self.logger.info(f"Using single-threaded processing for {len(posts)} posts")
            for post in posts:
                self._record(post, result, lambda: self.generate_post(post, template))

    def _build_with_pool(self, posts, template, result):
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(self.generate_post, post, template): post for post in posts}
            for future in as_completed(futures):
                self._record(futures[future], result, future.result)

    def _record(self, post, result, run):
        try:
            run()
        except BloggenError as e:
            self.logger.error(f"Error generating post {post.name}: {e}")
            result.posts_failed += 1
            result.failures.append(post.name)
        else:
            result.posts_generated += 1

    def build_listing(self, posts):
        template = load_template(self.env, LISTING_TEMPLATE)
        listing = ListingGenerator(
            posts, self.site_info, template, self.output_dir,
            filesystem=self.filesystem, page_writer=self.page_writer,
        )
        return listing.generate()

    def build(self):
        """Build the whole site and return a ``BuildResult``."""
        start_time = time.time()
        result = BuildResult()
        self.filesystem.create_folder_if_not_exist(self.output_dir)

        self.posts = self.load_posts(result)
        self.build_posts(self.posts, result)
        generated = [post for post in self.posts if post.name not in result.failures]
        result.listing_pages = self.build_listing(generated)

        elapsed_time = time.time() - start_time
        self.logger.info(f"Site build completed in {elapsed_time:.2f} seconds")
        self.logger.info(f"Total posts generated: {result.posts_generated}")
        self.logger.info(f"Total posts failed: {result.posts_failed}")
        self.logger.info(f"Total listing pages: {result.listing_pages}")
        return result
