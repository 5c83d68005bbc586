#
# Sundry - Errors Tests
#

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sundry.errors import (
    CircularReferenceError,
    DriverError,
    InvalidEnumValueError,
    InvalidFilterError,
    ParameterError,
    ParameterNotFoundError,
    UnexpectedValueError,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestHierarchy:
    @pytest.mark.parametrize(
        "error, base",
        [
            pytest.param(ParameterError, ValueError, id="parameter"),
            pytest.param(UnexpectedValueError, ParameterError, id="unexpected"),
            pytest.param(ParameterNotFoundError, ParameterError, id="not-found"),
            pytest.param(InvalidFilterError, ParameterError, id="filter"),
            pytest.param(InvalidEnumValueError, UnexpectedValueError, id="enum"),
            pytest.param(CircularReferenceError, ParameterError, id="circular"),
            pytest.param(DriverError, RuntimeError, id="driver"),
        ],
    )
    def test_bases(self, error, base):
        """Derive from the documented bases."""
        assert issubclass(error, base)


class TestAttributes:
    def test_parameter_error(self):
        """Carry the message and the key."""
        error = UnexpectedValueError("bad value", key="port")
        assert (str(error), error.message, error.key) == ("bad value", "bad value", "port")

    def test_enum_error(self):
        """Carry the enum class."""
        error = InvalidEnumValueError("no case", key="color", enum_class=int)
        assert error.enum_class is int

    def test_circular_reference(self):
        """Describe the reference path."""
        error = CircularReferenceError("a", ["a", "b", "a"])
        assert error.key == "a"
        assert error.path == ["a", "b", "a"]
        assert str(error) == "circular reference detected for parameter 'a' (a -> b -> a)"

    def test_driver_error(self):
        """Carry the driver name."""
        assert DriverError("boom", driver="file").driver == "file"
        assert DriverError("boom").driver is None
