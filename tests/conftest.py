#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sundry.dates import DateTime, date_factory
from sundry.random import factories
from sundry.strings import flush_cache


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_process_state():
    """Restore generator overrides, the frozen clock, the date factory and the case cache after each test."""
    yield
    factories.reset()
    DateTime.set_test_now()
    date_factory.use_default()
    flush_cache()


@pytest.fixture
def user_bag_data() -> dict:
    """Nested parameters with a list, as used across bag and accessor tests."""
    return {"user": {"name": "Ada", "roles": ["admin"]}}
