"""Expiration normalization into signed seconds from now."""
import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction

import pytest

from s3_expiry.errors import InvalidExpiration
from s3_expiry.time_utils import epoch, expiration_in, fixed_clock, parse_instant


def test_seconds_pass_through(clock):
    assert expiration_in(3600, clock=clock) == 3600


def test_zero_means_expires_now(clock):
    assert expiration_in(0, clock=clock) == 0


def test_fractional_seconds_floor(clock):
    assert expiration_in(1.9, clock=clock) == 1
    assert expiration_in(3600.5, clock=clock) == 3600


def test_relative_bucket_upper_bound(clock):
    assert expiration_in(10_000_000, clock=clock) == 10_000_000
    assert expiration_in(1e7, clock=clock) == 10_000_000


def test_epoch_seconds(clock):
    assert expiration_in(1_704_070_800, clock=clock) == 3600
    assert expiration_in(1_704_063_600, clock=clock) == -3600


def test_epoch_seconds_floor_applied_once():
    clock = fixed_clock(datetime(2024, 1, 1, 0, 0, 0, 500_000, tzinfo=timezone.utc))
    # 3600 s after the whole second minus the half second already elapsed
    assert expiration_in(1_704_070_800, clock=clock) == 3599


def test_epoch_milliseconds(clock, frozen_now_ms):
    assert expiration_in(frozen_now_ms + 5_000, clock=clock) == 5
    assert expiration_in(frozen_now_ms + 4_999, clock=clock) == 4
    assert expiration_in(frozen_now_ms - 1, clock=clock) == -1


@pytest.mark.parametrize("k", [1, 59, 3600, 86_400 * 30])
def test_millisecond_round_trip(clock, frozen_now_ms, k):
    assert expiration_in(frozen_now_ms + k * 1000, clock=clock) == k


@pytest.mark.parametrize(
    "value, expected",
    [
        (10_000_001, -1_694_067_199),
        (10_000_000_000, 8_295_932_800),
        (10_000_000_001, -1_694_067_200),
        (10_000_000_000_000, 8_295_932_800),
        (1e13, 8_295_932_800),
    ],
)
def test_bucket_boundaries(clock, value, expected):
    assert expiration_in(value, clock=clock) == expected


@pytest.mark.parametrize(
    "value",
    [-1, -0.001, 10_000_000_000_001, 1e16, 2e15, math.nan, math.inf, -math.inf],
)
def test_numbers_outside_buckets_rejected(clock, value):
    with pytest.raises(InvalidExpiration) as excinfo:
        expiration_in(value, clock=clock)
    assert str(excinfo.value) == "Invalid expiration"


def test_datetime_in_future_and_past(clock, frozen_now):
    assert expiration_in(frozen_now + timedelta(hours=1), clock=clock) == 3600
    assert expiration_in(frozen_now - timedelta(hours=1), clock=clock) == -3600


def test_sub_second_datetime_floors(clock, frozen_now):
    assert expiration_in(frozen_now + timedelta(milliseconds=999), clock=clock) == 0
    assert expiration_in(frozen_now - timedelta(milliseconds=1), clock=clock) == -1


def test_naive_datetime_is_utc(clock):
    assert expiration_in(datetime(2024, 1, 1, 1, 0, 0), clock=clock) == 3600


def test_datetime_with_offset(clock):
    plus_two = timezone(timedelta(hours=2))
    assert expiration_in(datetime(2024, 1, 1, 3, 0, 0, tzinfo=plus_two), clock=clock) == 3600


def test_agrees_with_epoch(clock):
    instant = epoch(2_000_000_000_000, clock=clock)
    assert expiration_in(instant, clock=clock) == 295_932_800


@pytest.mark.parametrize(
    "text",
    ["2024-01-01T01:00:00Z", "2024-01-01T02:00:00+01:00", "  2024-01-01T01:00:00.000Z  "],
)
def test_date_strings(clock, text):
    assert expiration_in(text, clock=clock) == 3600


def test_past_date_string_is_negative(clock):
    assert expiration_in("2023-12-31T23:00:00Z", clock=clock) == -3600


@pytest.mark.parametrize("text", ["not a date string", "", "2024-13-45T99:00:00Z"])
def test_unparsable_strings_rejected(clock, text):
    with pytest.raises(InvalidExpiration) as excinfo:
        expiration_in(text, clock=clock)
    assert excinfo.value.value == text
    assert excinfo.value.wrapped is not None


@pytest.mark.parametrize("value", [None, True, [3600], {"seconds": 3600}, object()])
def test_other_shapes_rejected(clock, value):
    with pytest.raises(InvalidExpiration):
        expiration_in(value, clock=clock)  # type: ignore[arg-type]


def test_clock_read_once_per_call(frozen_now, frozen_now_ms):
    reads = []

    def counting_clock():
        reads.append(1)
        return frozen_now

    expiration_in(frozen_now_ms + 5_000, clock=counting_clock)
    expiration_in("2024-01-01T01:00:00Z", clock=counting_clock)
    epoch(60, clock=counting_clock)
    assert len(reads) == 3


def test_relative_seconds_do_not_read_clock():
    def exploding_clock():
        raise AssertionError("clock read")

    assert expiration_in(60, clock=exploding_clock) == 60


def test_default_clock_is_wall_clock():
    future = datetime.now(tz=timezone.utc) + timedelta(hours=1)
    assert expiration_in(future) in (3599, 3600)


@pytest.mark.parametrize(
    "text, number",
    [
        ("3600", 3600),
        ("3600.5", 3600.5),
        ("10000000", 10_000_000),
        ("1704070800", 1_704_070_800),
        ("15000000000", 15_000_000_000),
        (" 1704067205000 ", 1_704_067_205_000),
    ],
)
def test_numeric_strings_use_the_same_buckets(clock, text, number):
    assert expiration_in(text, clock=clock) == expiration_in(number, clock=clock)


def test_numeric_string_in_millisecond_bucket(clock):
    assert expiration_in("15000000000", clock=clock) == -1_689_067_200


@pytest.mark.parametrize("text", ["-1", "2e15", "10000000000001"])
def test_numeric_strings_outside_buckets_rejected(clock, text):
    with pytest.raises(InvalidExpiration):
        expiration_in(text, clock=clock)


def test_parse_instant_rejects_plain_numbers():
    with pytest.raises(InvalidExpiration):
        parse_instant("15000000000")


def test_decimal_and_fraction(clock, frozen_now_ms):
    assert expiration_in(Decimal("3600.9"), clock=clock) == 3600
    assert expiration_in(Fraction(7, 2), clock=clock) == 3
    # floors toward negative infinity, not toward zero
    assert expiration_in(Decimal(frozen_now_ms - 1), clock=clock) == -1
    assert expiration_in(Decimal("1704070800.5"), clock=clock) == 3600


@pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), Decimal("-1")])
def test_non_finite_decimal_rejected(clock, value):
    with pytest.raises(InvalidExpiration):
        expiration_in(value, clock=clock)


def test_numpy_scalars(clock, frozen_now_ms):
    np = pytest.importorskip("numpy")
    assert expiration_in(np.int64(3600), clock=clock) == 3600
    assert expiration_in(np.int64(frozen_now_ms + 5_000), clock=clock) == 5
    assert expiration_in(np.float64(60.5), clock=clock) == 60
