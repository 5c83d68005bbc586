#
# Sundry - Random Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import string
import time
from datetime import datetime, timezone
from uuid import UUID

# Third party ----------------------------------------------------------------------------------------------------------
import pytest
from ulid import ULID

# Local ----------------------------------------------------------------------------------------------------------------
from sundry import random as R
from sundry.random import RandomConf


# Tests ----------------------------------------------------------------------------------------------------------------

class TestRandomString:
    @pytest.mark.parametrize("length", [0, 1, 16, 100])
    def test_length_and_alphabet(self, length):
        """Generate alpha-numeric strings of the requested length."""
        value = R.random_string(length)
        assert len(value) == length
        assert set(value) <= set(string.ascii_letters + string.digits)

    def test_default_length(self):
        """Use the configured default length."""
        assert len(R.random_string()) == RandomConf.RANDOM_LENGTH

    def test_factory_override(self):
        """Use and drop a custom factory."""
        R.create_random_strings_using(lambda length: "x" * length)
        assert R.random_string(3) == "xxx"
        R.create_random_strings_normally()
        assert R.random_string(12) != "x" * 12

    def test_sequence(self):
        """Return sequence items in order, then fall back."""
        R.create_random_strings_using_sequence(["a", "b"], when_missing=lambda length: "fallback")
        assert [R.random_string() for _ in range(3)] == ["a", "b", "fallback"]

    def test_sequence_mapping(self):
        """Take positions from a mapping."""
        R.create_random_strings_using_sequence({1: "second"}, when_missing=lambda length: "-")
        assert [R.random_string() for _ in range(3)] == ["-", "second", "-"]


class TestPassword:
    def test_default(self):
        """Include every enabled pool."""
        value = R.password()
        assert len(value) == RandomConf.PASSWORD_LENGTH
        assert any(c in RandomConf.LETTERS for c in value)
        assert any(c in RandomConf.NUMBERS for c in value)
        assert any(c in RandomConf.SYMBOLS for c in value)
        assert " " not in value

    def test_pools(self):
        """Restrict characters to the enabled pools."""
        value = R.password(20, letters=False, symbols=False)
        assert value.isdigit()
        assert " " in R.password(4, spaces=True)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            pytest.param({"letters": False, "numbers": False, "symbols": False}, "at least one", id="no-pool"),
            pytest.param({"length": 2}, "at least 3", id="too-short"),
        ],
    )
    def test_invalid(self, kwargs, message):
        """Reject impossible requests."""
        with pytest.raises(ValueError, match=message):
            R.password(**kwargs)


class TestUuids:
    def test_random(self):
        """Generate version 4 UUIDs."""
        value = R.uuid()
        assert isinstance(value, UUID)
        assert value.version == 4
        assert R.uuid() != value

    def test_ordered(self):
        """Generate version 7 UUIDs carrying the current millisecond."""
        before = time.time_ns() // 1_000_000
        value = R.ordered_uuid()
        after = time.time_ns() // 1_000_000
        assert value.version == 7
        assert before <= value.int >> 80 <= after

    def test_ordered_sorts_by_time(self):
        """Sort later UUIDs after earlier ones."""
        first = R.ordered_uuid()
        time.sleep(0.002)
        assert R.ordered_uuid() > first

    def test_freeze(self):
        """Freeze UUIDs globally or for a callback."""
        frozen = R.freeze_uuids()
        assert R.uuid() == frozen
        assert R.ordered_uuid() == frozen

        R.create_uuids_normally()
        seen = []
        value = R.freeze_uuids(lambda v: seen.append(R.uuid()))
        assert seen == [value]
        assert R.uuid() != value

    def test_sequence(self):
        """Return sequence items, then the fallback."""
        a, b = UUID(int=1), UUID(int=2)
        R.create_uuids_using_sequence([a], when_missing=lambda: b)
        assert [R.uuid(), R.uuid()] == [a, b]


class TestUlids:
    def test_fresh_and_at_moment(self):
        """Generate ULIDs now or at a given moment."""
        assert isinstance(R.ulid(), ULID)
        moment = datetime(2024, 4, 7, 12, 0, tzinfo=timezone.utc)
        assert R.ulid(moment).datetime == moment

    def test_rejects_non_datetime(self):
        """Raise TypeError for other moments."""
        with pytest.raises(TypeError):
            R.ulid("2024-04-07")

    def test_freeze_and_sequence(self):
        """Freeze ULIDs and replay sequences."""
        frozen = R.freeze_ulids()
        assert R.ulid() == frozen
        R.create_ulids_normally()

        fixed = ULID.from_str("01ARZ3NDEKTSV4RRFFQ69G5FAV")
        R.create_ulids_using_sequence([fixed])
        assert R.ulid() == fixed
        assert R.ulid() != fixed
