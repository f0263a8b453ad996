from datetime import datetime, timezone
from decimal import Decimal

import pytest

from metrics import (
    ACTIVE_MIN_SUN,
    NETWORK_LABEL,
    WHALE_MIN_SUN,
    classify_tier,
    derive_metrics,
    estimate_fiat_value,
    format_balance,
    format_count,
    format_scan_time,
    format_timestamp,
)
from models import AccountSnapshot, Tier, TokenHolding


@pytest.mark.parametrize(
    "sun, expected",
    [
        (0, "0.00 TRX"),
        (5_000_000, "5.00 TRX"),
        (1, "0.000001 TRX"),
        (1_500_000, "1.50 TRX"),
        (1_234_500, "1.2345 TRX"),
        (1_234_567_890_123, "1,234,567.890123 TRX"),
        (1_000_000_000_000, "1,000,000.00 TRX"),
    ],
)
def test_format_balance(sun, expected):
    assert format_balance(sun) == expected


def _numeric(formatted: str) -> Decimal:
    return Decimal(formatted.removesuffix(" TRX").replace(",", ""))


def test_format_balance_is_monotonic():
    samples = [0, 1, 9, 10, 999_999, 1_000_000, 1_000_001, 5_000_000, 123_456_789, 10**13]
    values = [_numeric(format_balance(s)) for s in samples]
    assert values == sorted(values)


def test_format_balance_reformatting_is_stable():
    for sun in [0, 7, 5_000_000, 1_234_567_890_123, 98_765_432_100]:
        formatted = format_balance(sun)
        again = format_balance(int(_numeric(formatted) * 1_000_000))
        assert again == formatted


@pytest.mark.parametrize(
    "sun, expected",
    [
        (0, "$0.00"),
        (5_000_000, "$0.60"),
        (1_000_000, "$0.12"),
        (10_000_000_000_000, "$1,200,000.00"),
    ],
)
def test_estimate_fiat_value(sun, expected):
    assert estimate_fiat_value(sun) == expected


def test_estimate_fiat_value_custom_rate():
    assert estimate_fiat_value(2_000_000, rate=0.5) == "$1.00"


def test_classify_tier_boundaries():
    assert classify_tier(WHALE_MIN_SUN) is Tier.WHALE
    assert classify_tier(WHALE_MIN_SUN - 1) is Tier.ACTIVE
    assert classify_tier(ACTIVE_MIN_SUN) is Tier.ACTIVE
    assert classify_tier(ACTIVE_MIN_SUN - 1) is Tier.STANDARD
    assert classify_tier(0) is Tier.STANDARD


def test_classify_tier_thresholds_are_strictly_above_1000_and_10_trx():
    assert classify_tier(1_000 * 1_000_000) is Tier.ACTIVE
    assert classify_tier(10 * 1_000_000) is Tier.STANDARD


def test_format_timestamp():
    ms = int(datetime(2024, 1, 5, 12, tzinfo=timezone.utc).timestamp() * 1000)
    assert format_timestamp(ms) == "Jan 5, 2024"
    assert format_timestamp(None) == "Unknown"
    assert format_timestamp(0) == "Unknown"


def test_format_scan_time_is_24_hour():
    assert format_scan_time(datetime(2024, 3, 1, 21, 4, 5)) == "21:04:05"
    assert len(format_scan_time()) == 8


def test_format_count():
    assert format_count(0) == "0"
    assert format_count(1234567) == "1,234,567"


def test_derive_metrics_is_deterministic_for_same_snapshot():
    snapshot = AccountSnapshot(
        balance_sun=2_500_000_000,
        transaction_count=4321,
        last_active_ms=int(datetime(2023, 12, 31, tzinfo=timezone.utc).timestamp() * 1000),
        tokens=(TokenHolding(symbol="USDT"), TokenHolding(symbol="BTT")),
    )
    now = datetime(2024, 1, 1, 8, 0, 0)

    first = derive_metrics(snapshot, now=now)
    assert first == derive_metrics(snapshot, now=now)
    assert first.balance == "2,500.00 TRX"
    assert first.usd_value == "$300.00"
    assert first.tier is Tier.WHALE
    assert first.last_active == "Dec 31, 2023"
    assert first.scan_time == "08:00:00"
    assert first.transactions == "4,321"
    assert first.token_count == 2
    assert first.network == NETWORK_LABEL


@pytest.mark.parametrize("epoch_ms", [10**17, -(10**17), 10**400])
def test_format_timestamp_out_of_range_is_unknown(epoch_ms):
    assert format_timestamp(epoch_ms) == "Unknown"


def test_huge_balances_format_without_losing_digits():
    sun = 10**40
    assert format_balance(sun) == f"{10**34:,}.00 TRX"
    assert estimate_fiat_value(sun) == f"${12 * 10**32:,}.00"
    assert classify_tier(sun) is Tier.WHALE

    odd = 12345678901234567890123456789012345
    assert format_balance(odd) == "12,345,678,901,234,567,890,123,456,789.012345 TRX"
