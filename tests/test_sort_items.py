from dataclasses import dataclass

from graph_projector.core.errors import InvalidArgumentError, PropertyNotFoundError
from graph_projector.core.expand.expander import Expander
from graph_projector.core.model import SortDirection
from graph_projector.core.sort.sort_items import sort_items


@dataclass
class Row:
    key: int
    id: str


class Incomparable:
    def __init__(self, key):
        self.key = key

    def __lt__(self, other):
        raise AssertionError("comparison should not happen")


def test_sort_ascending_by_mapping_key():
    got = sort_items([{"x": 3}, {"x": 1}, {"x": 2}], "x", SortDirection.ASCENDING)
    assert got == [{"x": 1}, {"x": 2}, {"x": 3}]


def test_sort_descending():
    got = sort_items([{"x": 3}, {"x": 1}, {"x": 2}], "x", SortDirection.DESCENDING)
    assert got == [{"x": 3}, {"x": 2}, {"x": 1}]


def test_sort_is_stable_in_both_directions():
    rows = [Row(1, "a"), Row(0, "b"), Row(1, "c"), Row(0, "d")]
    asc = sort_items(rows, "key", SortDirection.ASCENDING)
    desc = sort_items(rows, "key", SortDirection.DESCENDING)
    assert [r.id for r in asc] == ["b", "d", "a", "c"]
    assert [r.id for r in desc] == ["a", "c", "b", "d"]


def test_sort_returns_new_list_and_leaves_input_alone():
    rows = [Row(2, "a"), Row(1, "b")]
    got = sort_items(rows, "key", SortDirection.ASCENDING)
    assert got is not rows
    assert [r.id for r in rows] == ["a", "b"]
    assert got[0] is rows[1]


def test_short_sequences_are_returned_unchanged():
    empty: list = []
    single = [Incomparable(1)]
    assert sort_items(empty, "key", SortDirection.ASCENDING) is empty
    assert sort_items(single, "missing", SortDirection.ASCENDING) is single


def test_unknown_direction_always_fails():
    for source in ([], [{"x": 1}, {"x": 2}], 42):
        try:
            sort_items(source, "x", SortDirection.UNKNOWN)
            assert False, "expected InvalidArgumentError"
        except InvalidArgumentError as e:
            assert e.code == "E_SORT_UNKNOWN_DIRECTION"


def test_direction_strings_are_accepted():
    got = sort_items([{"x": 1}, {"x": 2}], "x", "Descending")
    assert got == [{"x": 2}, {"x": 1}]
    try:
        sort_items([{"x": 1}, {"x": 2}], "x", "sideways")
        assert False, "expected InvalidArgumentError"
    except InvalidArgumentError as e:
        assert e.code == "E_SORT_UNKNOWN_DIRECTION"


def test_non_iterable_source_fails():
    for source in (42, "text", {"x": 1}):
        try:
            sort_items(source, "x", SortDirection.ASCENDING)
            assert False, "expected InvalidArgumentError"
        except InvalidArgumentError as e:
            assert e.code == "E_SORT_NOT_ITERABLE"


def test_missing_property_fails():
    try:
        sort_items([Row(1, "a"), Row(2, "b")], "nope", SortDirection.ASCENDING)
        assert False, "expected PropertyNotFoundError"
    except PropertyNotFoundError as e:
        assert e.code == "E_SORT_PROPERTY_NOT_FOUND"
        assert "nope" in str(e)


def test_generator_source_is_read_once():
    got = sort_items((r for r in [Row(2, "a"), Row(1, "b")]), "key", SortDirection.ASCENDING)
    assert [r.id for r in got] == ["b", "a"]


def test_expander_sort_delegates():
    got = Expander().sort([{"x": 2}, {"x": 1}], "x", SortDirection.ASCENDING)
    assert got == [{"x": 1}, {"x": 2}]


def test_later_item_missing_property_fails():
    rows = [{"x": 2}, {"y": 1}, {"x": 0}]
    for direction in (SortDirection.ASCENDING, SortDirection.DESCENDING):
        try:
            sort_items(rows, "x", direction)
            assert False, "expected PropertyNotFoundError"
        except PropertyNotFoundError as e:
            assert e.code == "E_SORT_PROPERTY_NOT_FOUND"
            assert e.path == "x"


def test_none_property_values_are_kept_as_values():
    # A present-but-None value is not a missing property.
    got = sort_items([{"x": None}, {"x": None}], "x", SortDirection.ASCENDING)
    assert got == [{"x": None}, {"x": None}]
