#
# Sundry - Arr Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from types import SimpleNamespace

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sundry import arr


# Tests ----------------------------------------------------------------------------------------------------------------

class TestAccessible:
    @pytest.mark.parametrize(
        "target, expected",
        [
            pytest.param({"a": 1}, True, id="dict"),
            pytest.param([1, 2], True, id="list"),
            pytest.param((1, 2), True, id="tuple"),
            pytest.param("abc", False, id="str"),
            pytest.param(b"abc", False, id="bytes"),
            pytest.param(5, False, id="int"),
            pytest.param(None, False, id="none"),
        ],
    )
    def test_accessible(self, target, expected):
        """Accept mappings and list-like sequences only."""
        assert arr.accessible(target) is expected


class TestExists:
    @pytest.mark.parametrize(
        "target, key, expected",
        [
            pytest.param({"a": None}, "a", True, id="none-value"),
            pytest.param({"a": {"b": 1}}, "a.b", False, id="no-path-traversal"),
            pytest.param([10, 20], "1", True, id="list-index-str"),
            pytest.param([10, 20], 2, False, id="list-out-of-range"),
            pytest.param([10, 20], "01", False, id="non-canonical-index"),
            pytest.param({1: "x"}, "1", True, id="int-key-from-str"),
        ],
    )
    def test_exists(self, target, key, expected):
        """Check literal keys and indexes."""
        assert arr.exists(target, key) is expected


class TestValue:
    def test_plain_and_callable(self):
        """Return plain defaults as is and invoke callables with args."""
        assert arr.value(5) == 5
        assert arr.value(lambda: "lazy") == "lazy"
        assert arr.value(lambda a, b: a + b, 1, 2) == 3


class TestGet:
    @pytest.mark.parametrize(
        "key, expected",
        [
            pytest.param("user.name", "Ada", id="nested"),
            pytest.param("user.roles.0", "admin", id="list-index"),
            pytest.param("user.roles.1", None, id="index-out-of-range"),
            pytest.param("user.missing", None, id="missing"),
            pytest.param("user.name.first", None, id="through-scalar"),
        ],
    )
    def test_paths(self, user_bag_data, key, expected):
        """Resolve dotted paths through mappings and lists."""
        assert arr.get(user_bag_data, key) == expected

    def test_literal_key_wins(self):
        """Prefer an exact literal key over path traversal."""
        assert arr.get({"a.b": 1, "a": {"b": 2}}, "a.b") == 1

    @pytest.mark.parametrize("key", [pytest.param(None, id="none"), pytest.param("", id="empty")])
    def test_empty_key_returns_target(self, user_bag_data, key):
        """Return the target itself for an empty path."""
        assert arr.get(user_bag_data, key) is user_bag_data

    def test_callable_default_is_lazy(self):
        """Invoke a callable default only on a miss."""
        calls = []

        def default():
            calls.append(1)
            return "fallback"

        assert arr.get({"a": 1}, "a", default) == 1
        assert calls == []
        assert arr.get({"a": 1}, "b", default) == "fallback"
        assert calls == [1]

    def test_not_accessible_target(self):
        """Return the default when the target cannot be walked."""
        assert arr.get("text", "a", "x") == "x"

    def test_none_value_is_returned(self):
        """Return a stored None instead of the default."""
        assert arr.get({"a": None}, "a", "x") is None


class TestHas:
    def test_single_and_many(self, user_bag_data):
        """Require every path to exist."""
        assert arr.has(user_bag_data, "user.name")
        assert arr.has(user_bag_data, ["user.name", "user.roles.0"])
        assert not arr.has(user_bag_data, ["user.name", "user.age"])

    def test_none_value_counts(self):
        """Treat a key holding None as present."""
        assert arr.has({"a": {"b": None}}, "a.b")

    @pytest.mark.parametrize(
        "target, keys",
        [
            pytest.param({}, "a", id="empty-target"),
            pytest.param({"a": 1}, [], id="empty-keys"),
            pytest.param({"a": 1}, None, id="none-keys"),
        ],
    )
    def test_empty_is_false(self, target, keys):
        """Never report presence for empty targets or key lists."""
        assert not arr.has(target, keys)

    def test_has_any(self, user_bag_data):
        """Require at least one path to exist."""
        assert arr.has_any(user_bag_data, ["user.age", "user.name"])
        assert not arr.has_any(user_bag_data, ["user.age", "team"])
        assert not arr.has_any(user_bag_data, [])


class TestSet:
    def test_creates_intermediates(self):
        """Create missing dicts along the path."""
        assert arr.set({}, "a.b.c", 1) == {"a": {"b": {"c": 1}}}

    def test_overwrites_scalar_intermediate(self):
        """Replace a scalar met on the way with a dict."""
        assert arr.set({"a": 1}, "a.b", 2) == {"a": {"b": 2}}

    def test_returns_same_target(self):
        """Mutate in place and return the target."""
        data = {}
        assert arr.set(data, "x", 1) is data

    def test_list_index_and_append(self, user_bag_data):
        """Write list items by index and append at the length index."""
        arr.set(user_bag_data, "user.roles.0", "owner")
        arr.set(user_bag_data, "user.roles.1", "dev")
        assert user_bag_data["user"]["roles"] == ["owner", "dev"]

    def test_list_converted_for_non_index_segment(self):
        """Convert a list to a position-keyed dict to add a named key."""
        data = {"items": ["a", "b"]}
        arr.set(data, "items.extra", "c")
        assert data == {"items": {0: "a", 1: "b", "extra": "c"}}

    def test_existing_int_key_is_reused(self):
        """Address an int key through its numeric segment."""
        data = {1: {"name": "x"}}
        arr.set(data, "1.name", "y")
        assert data == {1: {"name": "y"}}

    def test_literal_dotted_key_wins(self):
        """Overwrite a literal dotted key instead of nesting, matching get."""
        data = {"a.b": 1}
        arr.set(data, "a.b", 2)
        assert data == {"a.b": 2}
        assert arr.get(data, "a.b") == 2

    def test_empty_path_replaces_content(self):
        """Replace the whole content for an empty path and a mapping value."""
        data = {"old": 1}
        arr.set(data, "", {"new": 2})
        assert data == {"new": 2}

    def test_empty_path_rejects_non_mapping(self):
        """Reject a non-mapping value for an empty path."""
        with pytest.raises(TypeError, match="empty path"):
            arr.set({}, None, 5)

    def test_immutable_target(self):
        """Reject targets that cannot be written."""
        with pytest.raises(TypeError, match="MutableMapping"):
            arr.set((1, 2), "0", 5)


class TestForget:
    def test_nested_path(self, user_bag_data):
        """Remove a nested key."""
        arr.forget(user_bag_data, "user.roles")
        assert user_bag_data == {"user": {"name": "Ada"}}

    def test_list_item(self, user_bag_data):
        """Remove a list item by index."""
        arr.forget(user_bag_data, "user.roles.0")
        assert user_bag_data["user"]["roles"] == []

    def test_literal_key_first(self):
        """Remove an exact literal key before trying the path."""
        data = {"a.b": 1, "a": {"b": 2}}
        arr.forget(data, "a.b")
        assert data == {"a": {"b": 2}}

    def test_absent_is_noop(self, user_bag_data):
        """Ignore paths that do not resolve."""
        arr.forget(user_bag_data, ["user.age", "team.name", "user.name.first"])
        assert user_bag_data == {"user": {"name": "Ada", "roles": ["admin"]}}

    def test_remove_alias(self):
        """Expose remove as an alias of forget."""
        assert arr.remove is arr.forget


class TestAddPull:
    @pytest.mark.parametrize(
        "data, expected",
        [
            pytest.param({}, {"a": {"b": 1}}, id="missing"),
            pytest.param({"a": {"b": None}}, {"a": {"b": 1}}, id="none"),
            pytest.param({"a": {"b": 0}}, {"a": {"b": 0}}, id="falsy-kept"),
        ],
    )
    def test_add(self, data, expected):
        """Set only when the path is missing or holds None."""
        assert arr.add(data, "a.b", 1) == expected

    def test_pull(self, user_bag_data):
        """Return the value and remove it."""
        assert arr.pull(user_bag_data, "user.name") == "Ada"
        assert "name" not in user_bag_data["user"]
        assert arr.pull(user_bag_data, "user.name", "gone") == "gone"


class TestDataGet:
    def test_walks_attributes(self):
        """Walk object attributes as well as mappings and lists."""
        data = {"user": SimpleNamespace(name="Ada", tags=["x", "y"])}
        assert arr.data_get(data, "user.name") == "Ada"
        assert arr.data_get(data, "user.tags.1") == "y"

    def test_missing_attribute(self):
        """Return the default for a missing attribute."""
        assert arr.data_get({"user": SimpleNamespace()}, "user.name", "anon") == "anon"

    def test_root_object(self):
        """Start from a plain object."""
        assert arr.data_get(SimpleNamespace(a=SimpleNamespace(b=2)), "a.b") == 2


class TestObjectGet:
    def test_dotted_attributes(self):
        """Resolve nested attributes."""
        obj = SimpleNamespace(profile=SimpleNamespace(name="Ada"))
        assert arr.object_get(obj, "profile.name") == "Ada"
        assert arr.object_get(obj, "") is obj

    def test_none_attribute_is_missing(self):
        """Treat None attributes as missing."""
        assert arr.object_get(SimpleNamespace(profile=None), "profile.name", "x") == "x"
