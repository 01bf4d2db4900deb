"""Tests for preference validation."""

from datetime import time

from schedule_builder.models import Preferences
from schedule_builder.validators import validate_preferences, validate_time_window


class TestValidateTimeWindow:
    """Tests for validate_time_window function."""

    def test_unset_is_valid(self):
        assert validate_time_window(Preferences()) == (True, None)

    def test_consistent_window(self):
        """Test a window that leaves room for classes."""
        prefs = Preferences(start_after=time(8, 0), start_before=time(12, 0), end_before=time(17, 0))
        assert validate_time_window(prefs) == (True, None)

    def test_start_after_not_before_start_before(self):
        """Test start_after at or after start_before."""
        prefs = Preferences(start_after=time(14, 0), start_before=time(10, 0))
        is_valid, error = validate_time_window(prefs)
        assert not is_valid
        assert "start_before (10:00)" in error

        prefs = Preferences(start_after=time(10, 0), start_before=time(10, 0))
        assert not validate_time_window(prefs)[0]

    def test_start_after_not_before_end_before(self):
        """Test start_after at or after end_before."""
        prefs = Preferences(start_after=time(17, 0), end_before=time(16, 0))
        is_valid, error = validate_time_window(prefs)
        assert not is_valid
        assert "end_before (16:00)" in error


class TestValidatePreferences:
    """Tests for validate_preferences function."""

    def test_contradictory_window(self):
        prefs = Preferences(start_after=time(15, 0), start_before=time(9, 0))
        assert len(validate_preferences(prefs)) == 1

    def test_valid(self):
        assert validate_preferences(Preferences(start_after=time(9, 0))) == []

    def test_both_styles_are_accepted(self):
        """Test that breaks and compact together are not a contradiction."""
        prefs = Preferences(prefer_breaks=True, prefer_compact=True)
        assert validate_preferences(prefs) == []
