"""Tests for kmp_catalog.view — filter, search and sort derivation."""

import pytest

from kmp_catalog.models import collect_categories, collect_platforms
from kmp_catalog.view import SortKey, SortOrder, ViewState, derive


def _derive(records, state):
    return derive(records, state, collect_platforms(records), collect_categories(records))


@pytest.fixture
def platform_records(make_record):
    return [
        make_record(id="1", name="one", platforms=("A",)),
        make_record(id="2", name="two", platforms=("B",)),
        make_record(id="3", name="three", platforms=("A", "B")),
    ]


class TestFiltering:
    def test_all_selected_keeps_everything(self, platform_records):
        state = ViewState.initial(["A", "B"], ["Core"])
        assert len(_derive(platform_records, state)) == 3

    def test_select_single_platform(self, platform_records):
        state = ViewState.initial(["A", "B"], ["Core"]).toggle_platform("B")
        ids = sorted(r.id for r in _derive(platform_records, state))
        assert ids == ["1", "3"]

    def test_no_platform_selected_hides_everything(self, platform_records):
        state = ViewState.initial(["A", "B"], ["Core"]).select_all_platforms(
            False, ["A", "B"]
        )
        assert _derive(platform_records, state) == []

    def test_records_without_badges_visible_when_unfiltered(self, make_record):
        records = [make_record(id="1", platforms=("A",)), make_record(id="2")]
        state = ViewState.initial(["A"], ["Core"])
        assert len(_derive(records, state)) == 2

    def test_category_filter(self, make_record):
        records = [
            make_record(id="1", category="UI"),
            make_record(id="2", category="Network"),
            make_record(id="3", category="UI"),
        ]
        state = ViewState.initial([], ["Network", "UI"]).toggle_category("Network")
        assert sorted(r.id for r in _derive(records, state)) == ["1", "3"]

    def test_platform_and_category_combined(self, make_record):
        records = [
            make_record(id="1", category="UI", platforms=("A",)),
            make_record(id="2", category="Network", platforms=("A",)),
            make_record(id="3", category="UI", platforms=("B",)),
        ]
        state = (
            ViewState.initial(["A", "B"], ["Network", "UI"])
            .toggle_platform("B")
            .toggle_category("Network")
        )
        assert [r.id for r in _derive(records, state)] == ["1"]


class TestSearch:
    def test_case_insensitive_name(self, make_record):
        records = [make_record(id="1", name="Ktor"), make_record(id="2", name="Koin")]
        state = ViewState.initial([], ["Core"]).with_search("KTO")
        assert [r.id for r in _derive(records, state)] == ["1"]

    def test_matches_description_substring(self, make_record):
        records = [
            make_record(id="1", name="a", description="HTTP client"),
            make_record(id="2", name="b", description="Dependency injection"),
        ]
        state = ViewState.initial([], ["Core"]).with_search("injec")
        assert [r.id for r in _derive(records, state)] == ["2"]

    def test_empty_term_keeps_all(self, make_record):
        records = [make_record(id="1"), make_record(id="2")]
        state = ViewState.initial([], ["Core"]).with_search("")
        assert len(_derive(records, state)) == 2


class TestSorting:
    def test_stars_descending_treats_missing_as_zero(self, make_record):
        records = [
            make_record(id="1", stars=10),
            make_record(id="2", stars=None),
            make_record(id="3", stars=5),
        ]
        state = ViewState.initial([], ["Core"])
        assert state.sort_key is SortKey.STARS
        assert state.sort_order is SortOrder.DESC
        assert [r.stars for r in _derive(records, state)] == [10, 5, None]

    def test_stars_ascending(self, make_record):
        records = [
            make_record(id="1", stars=10),
            make_record(id="2", stars=None),
            make_record(id="3", stars=5),
        ]
        state = ViewState.initial([], ["Core"]).toggle_sort(SortKey.STARS)
        assert [r.stars for r in _derive(records, state)] == [None, 5, 10]

    def test_name_sort_case_insensitive(self, make_record):
        records = [
            make_record(id="1", name="beta"),
            make_record(id="2", name="Alpha"),
            make_record(id="3", name="gamma"),
        ]
        state = ViewState.initial([], ["Core"]).toggle_sort("name")
        assert [r.name for r in _derive(records, state)] == ["Alpha", "beta", "gamma"]

    def test_name_sort_places_accented_letters_with_base_letter(self, make_record):
        records = [
            make_record(id="1", name="Zebra"),
            make_record(id="2", name="\u00c9mile"),
            make_record(id="3", name="eagle"),
        ]
        state = ViewState.initial([], ["Core"]).toggle_sort(SortKey.NAME)
        assert [r.name for r in _derive(records, state)] == [
            "eagle",
            "\u00c9mile",
            "Zebra",
        ]

    def test_sub_category_descending(self, make_record):
        records = [
            make_record(id="1", sub_category="b"),
            make_record(id="2", sub_category=""),
            make_record(id="3", sub_category="a"),
        ]
        state = (
            ViewState.initial([], ["Core"])
            .toggle_sort(SortKey.SUB_CATEGORY)
            .toggle_sort(SortKey.SUB_CATEGORY)
        )
        assert [r.id for r in _derive(records, state)] == ["1", "3", "2"]

    def test_deterministic_for_equal_keys(self, make_record):
        records = [make_record(id=str(i), category="Same") for i in range(5)]
        state = ViewState.initial([], ["Same"]).toggle_sort(SortKey.CATEGORY)
        first = [r.id for r in _derive(records, state)]
        second = [r.id for r in _derive(list(records), state)]
        assert first == second == ["0", "1", "2", "3", "4"]


class TestTransitions:
    def test_toggle_same_column_round_trip(self):
        state = ViewState.initial([], []).toggle_sort(SortKey.NAME)
        assert (state.sort_key, state.sort_order) == (SortKey.NAME, SortOrder.ASC)
        state = state.toggle_sort(SortKey.NAME)
        assert state.sort_order is SortOrder.DESC
        state = state.toggle_sort(SortKey.NAME)
        assert state.sort_order is SortOrder.ASC

    def test_new_column_resets_to_ascending(self):
        state = ViewState.initial([], [])
        assert state.sort_order is SortOrder.DESC
        state = state.toggle_sort(SortKey.CATEGORY)
        assert state.sort_key is SortKey.CATEGORY
        assert state.sort_order is SortOrder.ASC

    def test_toggle_platform_independent_of_categories(self):
        state = ViewState.initial(["A", "B"], ["X", "Y"])
        toggled = state.toggle_platform("A")
        assert toggled.selected_platforms == {"B"}
        assert toggled.selected_categories == {"X", "Y"}
        assert toggled.toggle_platform("A").selected_platforms == {"A", "B"}

    def test_toggle_category_independent_of_platforms(self):
        state = ViewState.initial(["A"], ["X", "Y"]).toggle_category("Y")
        assert state.selected_categories == {"X"}
        assert state.selected_platforms == {"A"}

    def test_select_all(self):
        state = ViewState.initial(["A", "B"], ["X"])
        cleared = state.select_all_categories(False, ["X"])
        assert cleared.selected_categories == frozenset()
        assert cleared.select_all_categories(True, ["X"]).selected_categories == {"X"}

    def test_states_are_immutable(self):
        state = ViewState.initial(["A"], ["X"])
        state.toggle_platform("A").with_search("q")
        assert state.selected_platforms == {"A"}
        assert state.search_term == ""
