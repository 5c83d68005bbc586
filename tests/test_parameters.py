#
# Sundry - Parameters Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import json
from enum import Enum

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sundry.errors import InvalidEnumValueError, InvalidFilterError, ParameterError, UnexpectedValueError
from sundry.filters import FilterFlag, FilterKind
from sundry.parameters import ParameterBag


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Level(Enum):
    LOW = 1
    HIGH = 2


# Tests ----------------------------------------------------------------------------------------------------------------

class TestScenario:
    def test_user_scenario(self, user_bag_data):
        """Read, write and remove nested user data by dotted path."""
        bag = ParameterBag(user_bag_data)

        assert bag.get("user.name") == "Ada"
        assert bag.get("user.missing", "x") == "x"

        bag.set("user.age", 30)
        assert bag.get("user.age") == 30

        bag.remove("user.roles")
        assert not bag.has("user.roles")

    def test_missing_paths(self, user_bag_data):
        """Report absent paths as missing and return the default."""
        bag = ParameterBag(user_bag_data)
        for path in ("team", "user.email", "user.roles.3", "user.name.first"):
            assert not bag.has(path)
            assert bag.get(path, "D") == "D"

    def test_remove_is_idempotent(self, user_bag_data):
        """Removing an absent path twice neither raises nor mutates."""
        bag = ParameterBag(user_bag_data)
        bag.remove("user.email").remove("user.email")
        assert bag.all() == {"user": {"name": "Ada", "roles": ["admin"]}}

    def test_set_round_trips_literal_dotted_key(self):
        """Read back a value written under a literal dotted key."""
        bag = ParameterBag({"a.b": 1})
        bag.set("a.b", 2)
        assert bag.get("a.b") == 2
        assert bag.all() == {"a.b": 2}

    def test_literal_key_precedence(self):
        """Return the literal "a.b" value before traversing "a"."""
        bag = ParameterBag({"a.b": "literal", "a": {"b": "nested"}})
        assert bag.get("a.b") == "literal"


class TestMappingProtocol:
    def test_item_access(self, user_bag_data):
        """Route item access through dotted paths."""
        bag = ParameterBag(user_bag_data)
        assert bag["user.roles.0"] == "admin"
        bag["user.city"] = "London"
        assert bag.get("user.city") == "London"
        del bag["user.city"]
        assert "user.city" not in bag
        assert "user.name" in bag

    def test_missing_item_raises(self):
        """Raise KeyError for missing keys on read and delete."""
        bag = ParameterBag()
        with pytest.raises(KeyError):
            bag["missing"]
        with pytest.raises(KeyError):
            del bag["missing"]

    def test_iteration_and_len(self, user_bag_data):
        """Iterate and count top-level keys only."""
        bag = ParameterBag({**user_bag_data, "debug": True})
        assert list(bag) == ["user", "debug"]
        assert len(bag) == 2
        assert list(bag.keys()) == ["user", "debug"]

    def test_contains_non_key_types(self):
        """Report unhashable or foreign key types as absent."""
        assert [1] not in ParameterBag({"a": 1})

    def test_rejects_non_mapping(self):
        """Refuse to build from a non-mapping."""
        with pytest.raises(TypeError, match="Mapping"):
            ParameterBag([("a", 1)])


class TestBasicOperations:
    def test_all(self, user_bag_data):
        """Return everything or the container at a key."""
        bag = ParameterBag(user_bag_data)
        assert bag.all() == user_bag_data
        assert bag.all("user.roles") == ["admin"]
        assert bag.all("missing") == []

    def test_all_rejects_scalar(self, user_bag_data):
        """Raise when the value at key is not a container."""
        with pytest.raises(UnexpectedValueError) as exc_info:
            ParameterBag(user_bag_data).all("user.name")
        assert exc_info.value.key == "user.name"

    def test_replace_and_add(self):
        """Replace all parameters, then add only missing ones."""
        bag = ParameterBag({"old": 1}).replace({"a": 1, "b": None})
        bag.add({"a": 2, "b": 3, "c.d": 4})
        assert bag.all() == {"a": 1, "b": 3, "c": {"d": 4}}

    def test_get_many(self):
        """Fetch several keys with per-key defaults."""
        bag = ParameterBag({"a": 1, "n": {"b": 2}})
        assert bag.get_many(["a", "n.b", "z"]) == {"a": 1, "n.b": 2, "z": None}
        assert bag.get_many({"a": 0, "z": "dz"}) == {"a": 1, "z": "dz"}

    def test_push_and_prepend(self, user_bag_data):
        """Add values at either end of a list parameter."""
        bag = ParameterBag(user_bag_data)
        bag.push("user.roles", "dev").prepend("user.roles", "owner")
        assert bag.get("user.roles") == ["owner", "admin", "dev"]
        bag.push("tags", "new")
        assert bag.get("tags") == ["new"]

    def test_push_onto_scalar(self, user_bag_data):
        """Refuse to push onto a scalar."""
        with pytest.raises(UnexpectedValueError):
            ParameterBag(user_bag_data).push("user.name", "x")

    def test_copy_is_independent(self):
        """Copy top-level keys into a new bag."""
        bag = ParameterBag({"a": 1})
        clone = bag.copy()
        clone.set("b", 2)
        assert "b" not in bag
        assert isinstance(clone, ParameterBag)

    def test_to_json(self, user_bag_data):
        """Serialize parameters to JSON."""
        assert json.loads(ParameterBag(user_bag_data).to_json()) == user_bag_data


class TestTypedGetters:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(42, 42, id="int"),
            pytest.param("42", 42, id="str"),
            pytest.param(" -3 ", -3, id="signed-trimmed"),
            pytest.param(7.0, 7, id="integral-float"),
        ],
    )
    def test_get_int(self, value, expected):
        """Accept canonical integer forms."""
        assert ParameterBag({"k": value}).get_int("k") == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("abc", id="word"),
            pytest.param("4.2", id="decimal-str"),
            pytest.param("042", id="leading-zero"),
            pytest.param(True, id="bool"),
            pytest.param([1], id="list"),
            pytest.param(None, id="none"),
        ],
    )
    def test_get_int_rejects(self, value):
        """Raise UnexpectedValueError naming the key for anything else."""
        with pytest.raises(UnexpectedValueError) as exc_info:
            ParameterBag({"k": value}).get_int("k")
        assert exc_info.value.key == "k"
        assert isinstance(exc_info.value, ValueError)

    def test_get_int_default(self):
        """Validate and return the default for missing keys."""
        assert ParameterBag().get_int("k") == 0
        assert ParameterBag().get_int("k", 5) == 5

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("1.5", 1.5, id="str"),
            pytest.param(2, 2.0, id="int"),
            pytest.param("1e2", 100.0, id="exponent"),
        ],
    )
    def test_get_float(self, value, expected):
        """Accept numbers and decimal strings."""
        assert ParameterBag({"k": value}).get_float("k") == expected

    def test_get_float_rejects_bool(self):
        """Refuse booleans as floats."""
        with pytest.raises(UnexpectedValueError):
            ParameterBag({"k": False}).get_float("k")

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(True, True, id="bool"),
            pytest.param("yes", True, id="yes"),
            pytest.param("Off", False, id="off"),
            pytest.param(0, False, id="zero"),
            pytest.param("", False, id="empty"),
        ],
    )
    def test_get_boolean(self, value, expected):
        """Accept booleans, 0/1 and the boolean words."""
        assert ParameterBag({"k": value}).get_boolean("k") is expected

    def test_get_boolean_rejects(self):
        """Raise on other words."""
        with pytest.raises(UnexpectedValueError):
            ParameterBag({"k": "maybe"}).get_boolean("k")

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("Ada", "Ada", id="str"),
            pytest.param(36, "36", id="int"),
            pytest.param(True, "true", id="bool"),
        ],
    )
    def test_get_string(self, value, expected):
        """Render scalars as strings."""
        assert ParameterBag({"k": value}).get_string("k") == expected

    @pytest.mark.parametrize(
        "value",
        [pytest.param(["a"], id="list"), pytest.param({"a": 1}, id="dict"), pytest.param(None, id="none")],
    )
    def test_get_string_rejects(self, value):
        """Raise for values without a textual form."""
        with pytest.raises(UnexpectedValueError):
            ParameterBag({"k": value}).get_string("k")

    def test_character_class_getters(self):
        """Keep only letters, letters and digits, or digits."""
        bag = ParameterBag({"k": "ab-12_c!3"})
        assert bag.get_alpha("k") == "abc"
        assert bag.get_alnum("k") == "ab12c3"
        assert bag.get_digits("k") == "123"

    def test_get_array(self):
        """Return containers and reject scalars."""
        bag = ParameterBag({"list": [1], "map": {"a": 1}, "s": "x"})
        assert bag.get_array("list") == [1]
        assert bag.get_array("map") == {"a": 1}
        assert bag.get_array("missing") == []
        with pytest.raises(UnexpectedValueError):
            bag.get_array("s")


class TestGetEnum:
    @pytest.mark.parametrize(
        "value, enum_class, expected",
        [
            pytest.param("red", Color, Color.RED, id="str-value"),
            pytest.param(Color.GREEN, Color, Color.GREEN, id="member"),
            pytest.param(2, Level, Level.HIGH, id="int-value"),
        ],
    )
    def test_resolves(self, value, enum_class, expected):
        """Resolve members by value."""
        assert ParameterBag({"k": value}).get_enum("k", enum_class) is expected

    def test_missing_returns_default(self):
        """Return the default for missing keys."""
        assert ParameterBag().get_enum("k", Color) is None
        assert ParameterBag().get_enum("k", Color, Color.RED) is Color.RED

    def test_invalid_value(self):
        """Wrap the lookup failure with key, enum class and cause."""
        with pytest.raises(InvalidEnumValueError) as exc_info:
            ParameterBag({"k": "blue"}).get_enum("k", Color)

        error = exc_info.value
        assert error.key == "k"
        assert error.enum_class is Color
        assert isinstance(error.__cause__, ValueError)
        assert isinstance(error, UnexpectedValueError)
        assert "Color" in str(error)


class TestFilter:
    def test_scalar(self):
        """Validate a scalar parameter."""
        assert ParameterBag({"port": "8080"}).filter("port", kind=FilterKind.VALIDATE_INT) == 8080

    def test_container_defaults_to_require_array(self):
        """Filter each element of a container parameter."""
        assert ParameterBag({"ids": ["1", "2"]}).filter("ids", kind=FilterKind.VALIDATE_INT) == [1, 2]

    def test_invalid_without_null_flag(self):
        """Raise when the value is invalid and NULL_ON_FAILURE is not set."""
        with pytest.raises(UnexpectedValueError, match="NULL_ON_FAILURE") as exc_info:
            ParameterBag({"port": "http"}).filter("port", kind=FilterKind.VALIDATE_INT)
        assert exc_info.value.key == "port"

    def test_invalid_with_null_flag(self):
        """Return None when NULL_ON_FAILURE is set."""
        bag = ParameterBag({"port": "http"})
        assert bag.filter("port", kind=FilterKind.VALIDATE_INT, options=FilterFlag.NULL_ON_FAILURE) is None

    def test_options_mapping(self):
        """Pass flags and kind options through a mapping."""
        bag = ParameterBag({"n": "50"})
        options = {"flags": FilterFlag.NULL_ON_FAILURE, "options": {"max_range": 10}}
        assert bag.filter("n", kind=FilterKind.VALIDATE_INT, options=options) is None

    def test_default_for_missing_key(self):
        """Filter the default when the key is missing."""
        assert ParameterBag().filter("port", "80", kind=FilterKind.VALIDATE_INT) == 80

    def test_callback(self):
        """Apply a callback filter."""
        bag = ParameterBag({"name": "ada"})
        assert bag.filter("name", kind=FilterKind.CALLBACK, options={"options": str.title}) == "Ada"

    def test_callback_requires_callable(self):
        """Raise InvalidFilterError naming the key when the callback is missing."""
        with pytest.raises(InvalidFilterError) as exc_info:
            ParameterBag({"name": "ada"}).filter("name", kind=FilterKind.CALLBACK)
        assert exc_info.value.key == "name"

    def test_invalid_filter_arguments_carry_key(self):
        """Attach the key to errors raised by the filter itself."""
        with pytest.raises(InvalidFilterError) as exc_info:
            ParameterBag({"code": "x"}).filter("code", kind=FilterKind.VALIDATE_REGEXP)
        assert exc_info.value.key == "code"
        assert isinstance(exc_info.value, ParameterError)

    def test_unknown_kind_carries_key(self):
        """Report an unknown filter kind as InvalidFilterError naming the key."""
        with pytest.raises(InvalidFilterError, match="unknown filter kind") as exc_info:
            ParameterBag({"k": "1"}).filter("k", kind="nope")
        assert exc_info.value.key == "k"

    def test_non_flag_flags_carry_key(self):
        """Report flags that are not a FilterFlag as InvalidFilterError naming the key."""
        with pytest.raises(InvalidFilterError, match="must be a FilterFlag") as exc_info:
            ParameterBag({"k": "1"}).filter("k", kind=FilterKind.VALIDATE_INT, options={"flags": 0})
        assert exc_info.value.key == "k"

    def test_unfilterable_value(self):
        """Refuse values that are neither scalars nor containers."""
        with pytest.raises(UnexpectedValueError, match="cannot be filtered"):
            ParameterBag({"obj": object()}).filter("obj")
