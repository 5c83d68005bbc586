#
# Sundry - Collections Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import json
import weakref
from enum import Enum

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sundry.collections import Collection, arrayable_items
from sundry.fluent import Fluent


class Size(Enum):
    SMALL = "s"


class JsonPoint:
    def to_json(self, **kwargs):
        return json.dumps({"x": 1, "y": 2})


# Tests ----------------------------------------------------------------------------------------------------------------

class TestArrayableItems:
    @pytest.mark.parametrize(
        "items, expected",
        [
            pytest.param(None, [], id="none"),
            pytest.param("abc", ["abc"], id="str"),
            pytest.param(5, [5], id="scalar"),
            pytest.param(Size.SMALL, [Size.SMALL], id="enum"),
            pytest.param((1, 2), [1, 2], id="tuple"),
            pytest.param(range(3), [0, 1, 2], id="iterable"),
            pytest.param({"a": 1}, {"a": 1}, id="mapping"),
            pytest.param(Collection([1]), [1], id="collection"),
            pytest.param(Fluent({"a": 1}), {"a": 1}, id="arrayable"),
            pytest.param(JsonPoint(), {"x": 1, "y": 2}, id="jsonable"),
        ],
    )
    def test_normalizes(self, items, expected):
        """Normalize supported inputs into a list or dict."""
        assert arrayable_items(items) == expected

    def test_rejects_weak_containers(self):
        """Refuse weak containers."""
        with pytest.raises(TypeError, match="weak"):
            arrayable_items(weakref.WeakValueDictionary())

    def test_collection_copy(self):
        """Copy the items of another collection."""
        source = Collection([1])
        Collection(source).push(2)
        assert source.all() == [1]


class TestCollectionAccess:
    def test_basics(self):
        """Expose items, counts and iteration over values."""
        collection = Collection({"a": 1, "b": 2})
        assert collection.all() == {"a": 1, "b": 2}
        assert collection.count() == len(collection) == 2
        assert list(collection) == [1, 2]
        assert collection["a"] == 1
        assert 2 in collection
        assert collection.keys().all() == ["a", "b"]
        assert collection.values().all() == [1, 2]
        assert collection.items() == [("a", 1), ("b", 2)]

    def test_emptiness(self):
        """Report empty and non-empty collections."""
        assert Collection().is_empty()
        assert Collection([0]).is_not_empty()

    def test_first_and_last(self):
        """Find first and last items, with callbacks and lazy defaults."""
        collection = Collection([1, 2, 3, 4])
        assert collection.first() == 1
        assert collection.last() == 4
        assert collection.first(lambda v: v > 2) == 3
        assert collection.last(lambda v, k: k < 2) == 2
        assert collection.first(lambda v: v > 9, lambda: "none") == "none"
        assert Collection().last() is None

    def test_contains(self):
        """Check values and predicates."""
        collection = Collection(["a", "b"])
        assert collection.contains("a")
        assert collection.contains(lambda v: v == "b")
        assert not collection.contains("z")

    def test_equality(self):
        """Compare with collections and raw items."""
        assert Collection([1]) == Collection([1])
        assert Collection([1]) == [1]
        assert repr(Collection([1])) == "Collection([1])"


class TestCollectionTransformations:
    def test_map_keeps_keys(self):
        """Map values and keep keys."""
        assert Collection({"a": 1}).map(lambda v, k: f"{k}{v}").all() == {"a": "a1"}
        assert Collection(["x"]).map(str.upper).all() == ["X"]

    def test_filter_and_reject(self):
        """Keep or drop items by predicate."""
        collection = Collection([0, 1, 2, 3])
        assert collection.filter().all() == [1, 2, 3]
        assert collection.filter(lambda v: v % 2).all() == [1, 3]
        assert collection.reject(lambda v: v % 2).all() == [0, 2]

    def test_each_stops_on_false(self):
        """Stop iterating when the callback returns False."""
        seen = []
        Collection([1, 2, 3]).each(lambda v: seen.append(v) or (False if v == 2 else None))
        assert seen == [1, 2]

    @pytest.mark.parametrize(
        "depth, expected",
        [
            pytest.param(1, [1, 2, [3, [4]]], id="depth-1"),
            pytest.param(float("inf"), [1, 2, 3, 4], id="full"),
        ],
    )
    def test_flatten(self, depth, expected):
        """Flatten nested lists up to depth."""
        assert Collection([1, [2, [3, [4]]]]).flatten(depth).all() == expected

    def test_flatten_mappings(self):
        """Flatten mapping values."""
        assert Collection([{"a": 1, "b": [2]}]).flatten().all() == [1, 2]

    def test_merge(self):
        """Concatenate lists and update dicts."""
        assert Collection([1]).merge([2]).all() == [1, 2]
        assert Collection({"a": 1}).merge({"a": 2, "b": 3}).all() == {"a": 2, "b": 3}
        assert Collection(["x"]).merge({"k": "v"}).all() == {0: "x", "k": "v"}

    def test_push(self):
        """Append in place, using integer keys for dicts."""
        assert Collection([1]).push(2, 3).all() == [1, 2, 3]
        assert Collection({"a": 1}).push("b").all() == {"a": 1, 1: "b"}

    def test_shuffle_with_seed(self):
        """Shuffle reproducibly with a seed and keep the values."""
        collection = Collection(list(range(10)))
        assert collection.shuffle(7) == collection.shuffle(7)
        assert sorted(collection.shuffle(7).all()) == list(range(10))

    def test_implode(self):
        """Join values, optionally plucking a key."""
        assert Collection([1, 2]).implode("-") == "1-2"
        assert Collection([{"n": "a"}, {"n": "b"}]).implode(", ", "n") == "a, b"

    def test_pipe_and_times(self):
        """Pass the collection to a callback and build ranges."""
        assert Collection([1, 2]).pipe(len) == 2
        assert Collection.times(3).all() == [1, 2, 3]
        assert Collection.times(2, lambda i: i * 10).all() == [10, 20]
        assert Collection.times(0).all() == []


class TestCollectionConversion:
    def test_conversions(self):
        """Convert to list, dict and JSON."""
        collection = Collection(["a", "b"])
        assert collection.to_list() == ["a", "b"]
        assert collection.to_dict() == {0: "a", 1: "b"}
        assert json.loads(Collection({"a": 1}).to_json()) == {"a": 1}
