"""
Tests for the inclusion filter and alphabetic bucketing.
"""
import pytest

from contactdeck.services.contacts import Configuration
from contactdeck.services.contacts.filtering import (
    CATCH_ALL_KEY, bucket_key, group_by_alphabet, is_included, sort_by_given_name
)

from conftest import make_contact


def ids(contacts):
    return [c.id for c in contacts]


class TestIsIncluded:

    def test_default_configuration_includes_everything(self):
        assert is_included(make_contact("a", "Ann"), Configuration.default())

    def test_excluded_id_wins_over_filter(self):
        config = Configuration(exclude_ids={"a"}, filter=lambda c: True)
        assert not is_included(make_contact("a", "Ann"), config)

    def test_filter_decides_when_not_excluded(self):
        config = Configuration(exclude_ids={"x"}, filter=lambda c: c.given_name.startswith("A"))
        assert is_included(make_contact("a", "Ann"), config)
        assert not is_included(make_contact("b", "Bob"), config)

    def test_filter_called_on_every_evaluation(self):
        calls = []

        def record(contact):
            calls.append(contact.id)
            return True

        config = Configuration(filter=record)
        contact = make_contact("a", "Ann")
        is_included(contact, config)
        is_included(contact, config)
        assert calls == ["a", "a"]

    def test_exclude_ids_frozen(self):
        config = Configuration(exclude_ids=["a", "b"])
        assert config.exclude_ids == frozenset({"a", "b"})


class TestBucketKey:

    def test_letters_are_uppercased(self):
        assert bucket_key("alice") == "A"
        assert bucket_key("Bob") == "B"

    def test_short_names_go_to_catch_all(self):
        assert bucket_key("") == CATCH_ALL_KEY
        assert bucket_key("x") == CATCH_ALL_KEY

    def test_non_ascii_and_symbols_go_to_catch_all(self):
        assert bucket_key("Øystein") == CATCH_ALL_KEY
        assert bucket_key("#weird") == CATCH_ALL_KEY
        assert bucket_key("9lives") == CATCH_ALL_KEY


class TestGroupByAlphabet:

    def test_mixed_names(self):
        names = ["alice", "Bob", "#weird", "", "x", "Øystein"]
        contacts = [make_contact(f"id-{i}", n) for i, n in enumerate(names)]

        groups = group_by_alphabet(contacts, Configuration.default())

        assert {k: [c.given_name for c in v] for k, v in groups.items()} == {
            "A": ["alice"],
            "B": ["Bob"],
            "#": ["#weird", "", "x", "Øystein"],
        }

    def test_exclusion_keeps_bucket_order(self):
        contacts = [
            make_contact("1", "Abe"),
            make_contact("2", "Amy"),
            make_contact("3", "Ann"),
            make_contact("4", "Art"),
        ]
        groups = group_by_alphabet(contacts, Configuration(exclude_ids={"2"}))
        assert ids(groups["A"]) == ["1", "3", "4"]

    def test_no_empty_buckets(self):
        groups = group_by_alphabet(
            [make_contact("1", "Abe"), make_contact("2", "Bea")],
            Configuration(exclude_ids={"2"})
        )
        assert list(groups) == ["A"]

    def test_empty_input(self):
        assert group_by_alphabet([], Configuration.default()) == {}


class TestSortByGivenName:

    def test_sort_is_stable_code_point_order(self):
        contacts = [
            make_contact("1", "bob"),
            make_contact("2", "Ann"),
            make_contact("3", "ann"),
            make_contact("4", "Ann"),
        ]
        assert ids(sort_by_given_name(contacts)) == ["2", "4", "3", "1"]

    def test_missing_given_name_sorts_first(self):
        contacts = [make_contact("1", "Ann"), make_contact("2", None)]
        assert ids(sort_by_given_name(contacts)) == ["2", "1"]


class TestConfiguration:

    def test_string_exclude_ids_rejected(self):
        with pytest.raises(TypeError):
            Configuration(exclude_ids="id-2")
