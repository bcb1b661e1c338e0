"""
Tests for the in-process TTL recipe cache.
"""

from unittest.mock import patch

from cookbook.utils.cache import (
    get_cache_size,
    get_cached,
    make_recipe_cache_key,
    make_search_cache_key,
    set_cached,
)


class TestCacheKeys:

    def test_ingredient_order_and_case_do_not_matter(self):
        a = make_search_cache_key({"ingredients": "Rice, chicken", "number": "20", "ignorePantry": "true"})
        b = make_search_cache_key({"ingredients": "chicken,rice", "number": "20", "ignorePantry": "true"})
        assert a == b

    def test_filters_change_the_key(self):
        base = {"ingredients": "rice", "number": "20", "ignorePantry": "true"}
        assert make_search_cache_key(base) != make_search_cache_key({**base, "diet": "vegan"})
        assert make_search_cache_key(base) != make_search_cache_key({**base, "ignorePantry": "false"})

    def test_recipe_key_includes_nutrition_flag(self):
        assert make_recipe_cache_key(1, True) != make_recipe_cache_key(1, False)
        assert make_recipe_cache_key("1", True) == make_recipe_cache_key(1, True)


class TestCacheStorage:

    def test_set_and_get(self):
        set_cached(("recipe", 1, True), {"id": 1})
        assert get_cached(("recipe", 1, True)) == {"id": 1}
        assert get_cache_size() == 1

    def test_missing_key(self):
        assert get_cached(("recipe", 2, True)) is None

    def test_expired_entry_is_dropped(self):
        set_cached(("recipe", 1, True), {"id": 1})
        with patch("cookbook.utils.cache.RECIPE_CACHE_TTL_SECONDS", -1):
            assert get_cached(("recipe", 1, True)) is None
        assert get_cache_size() == 0
