"""Rendering of pages through Jinja2 templates."""

import logging
import os

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, TemplateSyntaxError
from jinja2.exceptions import TemplateError as JinjaTemplateError
from markupsafe import Markup

from .errors import FileSystemError, TemplateError
from .fs import calculate_relative_path

INDEX_FILE_NAME = 'index.html'


def create_environment(templates_dir):
    """Create an autoescaping Jinja2 environment over ``templates_dir``."""
    return Environment(loader=FileSystemLoader(templates_dir), autoescape=True)


def load_template(env, template_name):
    """Fetch ``template_name`` from ``env``, raising ``TemplateError`` when unusable."""
    try:
        return env.get_template(template_name)
    except (TemplateNotFound, TemplateSyntaxError) as e:
        raise TemplateError(f"error loading template {template_name}: {e}") from e


class PageWriter:
    """Render an ``HTMLPage`` and write it as ``<page.path>/index.html``."""

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger('PageWriter')

    def __call__(self, page):
        return self.write_html(page)

    def render(self, page):
        relative_path = calculate_relative_path(page.site_info.dest_folder, page.path)
        try:
            return page.template.render(
                title=page.page_title,
                content=Markup(page.content),
                page_num=page.page_num,
                max_page_num=page.max_page_num,
                is_post=page.is_post,
                path=page.path,
                relative_path=relative_path,
                site=page.site_info,
                posts=page.posts,
            )
        except JinjaTemplateError as e:
            raise TemplateError(f"error rendering page {page.path}: {e}") from e

    def write_html(self, page):
        """Write the rendered page and return the file path."""
        rendered_html = self.render(page)
        output_file_path = os.path.join(page.path, INDEX_FILE_NAME)
        try:
            with open(output_file_path, 'w', encoding='utf-8') as output_file:
                output_file.write(rendered_html)
        except OSError as e:
            raise FileSystemError("writing file", output_file_path, e) from e
        self.logger.debug(f"Generated HTML: {output_file_path}")
        return output_file_path
