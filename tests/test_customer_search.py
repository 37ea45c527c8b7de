"""
Búsqueda paginada de clientes por nombre y apellido.
"""

from uuid import uuid4

import pytest


@pytest.fixture
def customers(manager):
    people = [
        ("Alice", "Smith"),
        ("Bob", "Smithers"),
        ("Carol", "Jones"),
        ("alicia", "Goldsmith"),
        ("Aaron", "Smith"),
    ]
    for first, last in people:
        manager.create_customer(uuid4(), first, last)
    return people


def names(page):
    return [(c.first_name, c.last_name) for c in page.items]


class TestCustomerSearch:

    def test_ordered_by_last_then_first_name(self, manager, customers):
        page = manager.search_customers(None, None, 1, 20)

        assert page.total_count == 5
        assert names(page) == [
            ("alicia", "Goldsmith"),
            ("Carol", "Jones"),
            ("Aaron", "Smith"),
            ("Alice", "Smith"),
            ("Bob", "Smithers"),
        ]

    def test_last_name_contains_ignores_case(self, manager, customers):
        page = manager.search_customers(None, "SMITH", 1, 20)

        assert page.total_count == 4
        assert ("Carol", "Jones") not in names(page)

    def test_first_name_contains_ignores_case(self, manager, customers):
        page = manager.search_customers("alic", None, 1, 20)

        assert sorted(names(page)) == [("Alice", "Smith"), ("alicia", "Goldsmith")]

    def test_both_filters(self, manager, customers):
        page = manager.search_customers("alic", "goldsmith", 1, 20)

        assert names(page) == [("alicia", "Goldsmith")]

    @pytest.mark.parametrize("short_filter", ["Smi", "S", "", "   "])
    def test_short_filters_are_ignored(self, manager, customers, short_filter):
        page = manager.search_customers(short_filter, short_filter, 1, 20)

        assert page.total_count == 5

    def test_like_wildcards_are_literal(self, manager, customers):
        page = manager.search_customers(None, "%%%%", 1, 20)

        assert page.total_count == 0

    def test_pagination(self, manager, customers):
        first = manager.search_customers(None, None, 1, 2)
        last = manager.search_customers(None, None, 3, 2)
        past_end = manager.search_customers(None, None, 4, 2)

        assert first.total_pages == 3
        assert names(first) == [("alicia", "Goldsmith"), ("Carol", "Jones")]
        assert names(last) == [("Bob", "Smithers")]
        assert past_end.items == []
        assert past_end.total_count == 5

    def test_accented_names_ignore_case(self, manager, customers):
        manager.create_customer(uuid4(), "Álvaro", "NÚÑEZ")

        assert names(manager.search_customers(None, "núñez", 1, 20)) == [("Álvaro", "NÚÑEZ")]
        assert names(manager.search_customers("ÁLVA", "Núñez", 1, 20)) == [("Álvaro", "NÚÑEZ")]
