"""
Tests for derive_group_name().

Default group names are built from the last word of each member name,
joined with ", ", and never exceed the length budget.
"""

import pytest

from chat.services import derive_group_name


class TestDeriveGroupName:
    """
    Verifies:
    - Short lists are joined in order
    - Overflow collapses into a " +N more" suffix
    - The result never exceeds max_length
    """

    def test_joins_last_names_in_order(self):
        assert derive_group_name(["Ada Lovelace", "Alan Turing"]) == "Lovelace, Turing"

    def test_single_word_names(self):
        assert derive_group_name(["Cher", "Prince", "Madonna"]) == "Cher, Prince, Madonna"

    @pytest.mark.parametrize("names", [[], ["", "   "]])
    def test_no_usable_names_falls_back(self, names):
        assert derive_group_name(names) == "New group"

    def test_overflow_counts_remaining_names(self):
        names = [
            "Alice Anderson",
            "Bob Brown",
            "Carol Clark",
            "Dan Davidson",
            "Eve Edwards",
            "Frank Fitzgerald",
            "Gina Gonzalez",
        ]

        name = derive_group_name(names)

        assert name == "Anderson, Brown, Clark, Davidson +3 more"
        assert len(name) <= 40

    def test_drops_names_to_make_room_for_suffix(self):
        """
        A name that fits on its own is dropped when the suffix would not.

        Why it matters: The length budget holds for the whole string,
        suffix included.
        """
        name = derive_group_name(["A Aaaaa", "B Bbbbb", "C Ccccc", "D Ddddd"], max_length=20)

        assert name == "Aaaaa, Bbbbb +2 more"

    def test_single_long_name_is_truncated(self):
        assert derive_group_name(["X" * 50]) == "X" * 40

    def test_long_first_name_is_truncated_before_suffix(self):
        name = derive_group_name(["Aaaaaaaaaaaa", "Bob"], max_length=10)

        assert name == "Aa +1 more"

    @pytest.mark.parametrize("count", [3, 8, 25, 100])
    def test_never_exceeds_budget(self, count):
        names = [f"Member Surname{i:03d}" for i in range(count)]

        assert len(derive_group_name(names)) <= 40

    def test_is_deterministic(self):
        names = ["Grace Hopper", "Barbara Liskov", "Frances Allen", "Radia Perlman"]

        assert derive_group_name(names) == derive_group_name(list(names))
