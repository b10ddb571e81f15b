"""Listing order of posts: newest first."""


def post_precedes(first, second):
    """Return True when ``first`` must be listed before ``second``."""
    return first.meta.parsed_date > second.meta.parsed_date


def sort_posts(posts):
    """
    Return ``posts`` ordered by publish date, newest first.

    Posts published at the same moment are ordered by slug so repeated
    builds list them identically.
    """
    by_name = sorted(posts, key=lambda p: p.name)
    return sorted(by_name, key=lambda p: p.meta.parsed_date, reverse=True)
