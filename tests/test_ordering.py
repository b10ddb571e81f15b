"""Tests for post ordering."""

import os
from datetime import datetime

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bloggen_pkg.ordering import post_precedes, sort_posts
from conftest import make_post


class TestOrdering:
    """Test cases for newest-first ordering."""

    def test_sorted_newest_first(self, dated_posts):
        ordered = sort_posts(dated_posts)
        assert [p.meta.parsed_date for p in ordered] == [
            datetime(2023, 6, 1), datetime(2023, 1, 1), datetime(2022, 12, 31)
        ]

    def test_sort_returns_new_list(self, dated_posts):
        original = list(dated_posts)
        sort_posts(dated_posts)
        assert dated_posts == original

    def test_post_precedes(self):
        newer = make_post('newer', datetime(2023, 6, 1))
        older = make_post('older', datetime(2023, 1, 1))
        assert post_precedes(newer, older)
        assert not post_precedes(older, newer)

    def test_equal_dates_do_not_precede(self):
        a = make_post('a', datetime(2023, 1, 1))
        b = make_post('b', datetime(2023, 1, 1))
        assert not post_precedes(a, b)
        assert not post_precedes(b, a)

    def test_equal_dates_ordered_by_name(self):
        posts = [
            make_post('zeta', datetime(2023, 1, 1)),
            make_post('alpha', datetime(2023, 1, 1)),
            make_post('latest', datetime(2024, 1, 1)),
            make_post('mid', datetime(2023, 1, 1)),
        ]
        assert [p.name for p in sort_posts(posts)] == ['latest', 'alpha', 'mid', 'zeta']
        assert [p.name for p in sort_posts(list(reversed(posts)))] == ['latest', 'alpha', 'mid', 'zeta']

    def test_empty(self):
        assert sort_posts([]) == []
