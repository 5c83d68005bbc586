#
# Sundry - Placeholders Tests
#

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sundry.errors import CircularReferenceError, ParameterError, ParameterNotFoundError, UnexpectedValueError
from sundry.parameters import ParameterBag
from sundry.placeholders import PlaceholderBag


# Tests ----------------------------------------------------------------------------------------------------------------

class TestResolve:
    def test_embedded_and_whole(self):
        """Interpolate embedded placeholders and keep the type of whole ones."""
        bag = PlaceholderBag({
            "root": "/srv",
            "logs": "%root%/logs",
            "ports": [80, 443],
            "listen": "%ports%",
            "workers": 4,
            "label": "workers=%workers%",
        })
        bag.resolve()

        assert bag.get("logs") == "/srv/logs"
        assert bag.get("listen") == [80, 443]
        assert bag.get("label") == "workers=4"

    def test_chained_references(self):
        """Resolve references to values that hold references."""
        bag = PlaceholderBag({"a": "%b%", "b": "%c%/x", "c": "base"}).resolve()
        assert bag.all() == {"a": "base/x", "b": "base/x", "c": "base"}

    def test_dotted_reference(self):
        """Reference nested parameters by dotted key."""
        bag = PlaceholderBag({"db": {"host": "localhost"}, "dsn": "pg://%db.host%/app"}).resolve()
        assert bag.get("dsn") == "pg://localhost/app"

    def test_nested_containers(self):
        """Resolve placeholders inside lists and mappings."""
        bag = PlaceholderBag({"name": "ada", "paths": ["/home/%name%", {"tmp": "/tmp/%name%"}]}).resolve()
        assert bag.get("paths") == ["/home/ada", {"tmp": "/tmp/ada"}]

    def test_escaped_percent(self):
        """Turn %% into a literal percent sign."""
        bag = PlaceholderBag({"ratio": "100%%", "text": "%%name%%"}).resolve()
        assert bag.get("ratio") == "100%"
        assert bag.get("text") == "%name%"

    def test_is_resolved_and_idempotent(self):
        """Resolve once and mark the bag resolved."""
        bag = PlaceholderBag({"a": "x", "b": "%a%"})
        assert not bag.is_resolved()
        bag.resolve()
        assert bag.is_resolved()
        assert bag.resolve().get("b") == "x"

    def test_is_a_parameter_bag(self):
        """Provide the typed getters of ParameterBag."""
        bag = PlaceholderBag({"port": "8080", "url": "http://host:%port%"}).resolve()
        assert isinstance(bag, ParameterBag)
        assert bag.get_int("port") == 8080


class TestResolveErrors:
    def test_missing_reference(self):
        """Raise ParameterNotFoundError naming the referenced key."""
        with pytest.raises(ParameterNotFoundError) as exc_info:
            PlaceholderBag({"a": "%missing%"}).resolve()
        assert exc_info.value.key == "missing"
        assert isinstance(exc_info.value, ParameterError)

    @pytest.mark.parametrize(
        "parameters",
        [
            pytest.param({"a": "%a%"}, id="self"),
            pytest.param({"a": "%b%", "b": "%a%"}, id="pair"),
            pytest.param({"a": "x-%b%", "b": "y-%a%"}, id="embedded"),
        ],
    )
    def test_circular_reference(self, parameters):
        """Detect reference cycles and report the path."""
        with pytest.raises(CircularReferenceError) as exc_info:
            PlaceholderBag(parameters).resolve()
        assert len(exc_info.value.path) >= 2
        assert " -> " in str(exc_info.value)

    @pytest.mark.parametrize(
        "value",
        [pytest.param(["x"], id="list"), pytest.param(True, id="bool"), pytest.param(None, id="none")],
    )
    def test_embedded_non_scalar(self, value):
        """Refuse to embed non-string, non-number values inside a longer string."""
        with pytest.raises(UnexpectedValueError):
            PlaceholderBag({"v": value, "s": "value=%v%"}).resolve()


class TestEscaping:
    def test_escape_and_unescape(self):
        """Double and restore percent signs, recursively."""
        bag = PlaceholderBag()
        value = {"a": "50%", "b": ["%x%"], "c": 1}
        escaped = bag.escape_value(value)
        assert escaped == {"a": "50%%", "b": ["%%x%%"], "c": 1}
        assert bag.unescape_value(escaped) == value

    def test_escaped_value_survives_resolution(self):
        """Keep escaped placeholders literal through resolve()."""
        bag = PlaceholderBag()
        bag.set("literal", bag.escape_value("%not_a_ref%"))
        assert bag.resolve().get("literal") == "%not_a_ref%"

    def test_resolve_string_directly(self):
        """Resolve a standalone string against the bag."""
        bag = PlaceholderBag({"user": "ada"})
        assert bag.resolve_string("hi %user%") == "hi ada"
        assert bag.resolve_value("%user%") == "ada"
