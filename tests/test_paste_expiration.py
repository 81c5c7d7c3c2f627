"""Tests for sealbin.paste.expiration."""

from datetime import datetime, timedelta, timezone

import pytest

from sealbin.errors import ValidationError
from sealbin.paste.expiration import (
    EXPIRATION_OPTIONS,
    ExpirationState,
    calculate_custom_expiration,
    calculate_expiration_date,
    expiration_state,
    format_expiration_time,
    is_expired,
)

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# calculate_expiration_date
# ---------------------------------------------------------------------------

class TestCalculateExpirationDate:
    @pytest.mark.parametrize(
        "option, delta",
        [
            ("1h", timedelta(hours=1)),
            ("1d", timedelta(days=1)),
            ("1w", timedelta(days=7)),
            ("1m", timedelta(days=30)),
        ],
    )
    def test_fixed_offsets(self, option, delta):
        assert calculate_expiration_date(option, now=NOW) == NOW + delta

    def test_never(self):
        assert calculate_expiration_date("never", now=NOW) is None

    def test_custom_passes_date_through(self):
        target = NOW + timedelta(days=3)
        assert calculate_expiration_date("custom", target, now=NOW) == target

    def test_custom_naive_date_treated_as_utc(self):
        naive = datetime(2026, 5, 1, 8, 30)
        result = calculate_expiration_date("custom", naive)
        assert result == naive.replace(tzinfo=timezone.utc)

    def test_custom_without_date_is_permanent(self):
        assert calculate_expiration_date("custom", None) is None

    def test_unknown_option(self):
        with pytest.raises(ValidationError):
            calculate_expiration_date("2y")

    def test_defaults_to_current_time(self):
        before = datetime.now(timezone.utc)
        result = calculate_expiration_date("1h")
        after = datetime.now(timezone.utc)
        assert before + timedelta(hours=1) <= result <= after + timedelta(hours=1)

    def test_options_cover_every_value(self):
        values = [v for v, _ in EXPIRATION_OPTIONS]
        assert values == ["1h", "1d", "1w", "1m", "never", "custom"]


class TestCalculateCustomExpiration:
    @pytest.mark.parametrize(
        "unit, delta",
        [
            ("minutes", timedelta(minutes=5)),
            ("hours", timedelta(hours=5)),
            ("days", timedelta(days=5)),
            ("weeks", timedelta(weeks=5)),
            ("months", timedelta(days=150)),
            ("years", timedelta(days=365 * 5)),
        ],
    )
    def test_units(self, unit, delta):
        assert calculate_custom_expiration(5, unit, now=NOW) == NOW + delta

    def test_unknown_unit(self):
        with pytest.raises(ValidationError):
            calculate_custom_expiration(1, "fortnights", now=NOW)

    @pytest.mark.parametrize("amount", [0, -3])
    def test_non_positive_amount(self, amount):
        with pytest.raises(ValidationError):
            calculate_custom_expiration(amount, "days", now=NOW)


# ---------------------------------------------------------------------------
# is_expired / expiration_state
# ---------------------------------------------------------------------------

class TestIsExpired:
    def test_past(self):
        assert is_expired(NOW - timedelta(seconds=1), now=NOW) is True

    def test_future(self):
        assert is_expired(NOW + timedelta(seconds=3600), now=NOW) is False

    def test_none_never_expires(self):
        assert is_expired(None, now=NOW) is False

    def test_boundary_is_not_expired(self):
        assert is_expired(NOW, now=NOW) is False

    def test_wall_clock(self):
        assert is_expired(datetime.now(timezone.utc) - timedelta(seconds=1))
        assert not is_expired(datetime.now(timezone.utc) + timedelta(hours=1))

    def test_naive_input(self):
        naive_past = (NOW - timedelta(minutes=1)).replace(tzinfo=None)
        assert is_expired(naive_past, now=NOW)


class TestExpirationState:
    def test_permanent(self):
        assert expiration_state(None, now=NOW) is ExpirationState.PERMANENT

    def test_active(self):
        assert expiration_state(NOW + timedelta(days=1), now=NOW) is ExpirationState.ACTIVE

    def test_expired(self):
        assert expiration_state(NOW - timedelta(days=1), now=NOW) is ExpirationState.EXPIRED


# ---------------------------------------------------------------------------
# format_expiration_time
# ---------------------------------------------------------------------------

class TestFormatExpirationTime:
    def test_never(self):
        assert format_expiration_time(None, now=NOW) == "Never expires"

    def test_expired(self):
        assert format_expiration_time(NOW - timedelta(seconds=1), now=NOW) == "Expired"

    @pytest.mark.parametrize(
        "delta, label",
        [
            (timedelta(days=400), "Expires in 1 year"),
            (timedelta(days=800), "Expires in 2 years"),
            (timedelta(days=45), "Expires in 1 month"),
            (timedelta(days=2, hours=3), "Expires in 2 days"),
            (timedelta(days=1), "Expires in 1 day"),
            (timedelta(hours=1), "Expires in 1 hour"),
            (timedelta(hours=5, minutes=59), "Expires in 5 hours"),
            (timedelta(minutes=59, seconds=59), "Expires in 59 minutes"),
            (timedelta(minutes=1), "Expires in 1 minute"),
            (timedelta(seconds=45), "Expires in 45 seconds"),
            (timedelta(seconds=1), "Expires in 1 second"),
        ],
    )
    def test_largest_unit(self, delta, label):
        assert format_expiration_time(NOW + delta, now=NOW) == label

    def test_sub_second(self):
        assert format_expiration_time(NOW + timedelta(milliseconds=500), now=NOW) == "Expires soon"

    def test_exactly_now(self):
        assert format_expiration_time(NOW, now=NOW) == "Expires soon"
