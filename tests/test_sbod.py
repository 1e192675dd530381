from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from scopeoracle.sbod import (
    CompactResult,
    CurrentResult,
    OracleSubmission,
    PullFeedAccountData,
)


def test_account_size_matches_layout():
    assert len(PullFeedAccountData().to_bytes()) == 3200


def test_value_none_when_never_updated():
    result = CurrentResult(value=10**18, std_dev=10**18, slot=0)
    assert result.value_decimal() is None
    assert result.std_dev_decimal() is None


def test_value_scaled_by_precision():
    result = CurrentResult(value=15 * 10**17, std_dev=-(10**18), slot=7)
    assert result.value_decimal() == Decimal("1.5")
    assert result.std_dev_decimal() == Decimal(-1)


def test_full_account_round_trip():
    submissions = [
        OracleSubmission(oracle=bytes([i]) * 32, slot=i, value=-i * 10**20)
        for i in range(32)
    ]
    history = [CompactResult(std_dev=0.5, mean=float(i), slot=i) for i in range(32)]
    feed = PullFeedAccountData(
        submissions=submissions,
        authority=bytes([9]) * 32,
        queue=bytes([8]) * 32,
        feed_hash=bytes([7]) * 32,
        initialized_at=-3,
        permissions=4,
        max_variance=5,
        min_responses=6,
        name=b"BTC/USD".ljust(32, b"\x00"),
        historical_result_idx=2,
        min_sample_size=3,
        last_update_timestamp=1_700_000_000,
        lut_slot=11,
        result=CurrentResult(1, -2, 3, 4, 5, 6, 7, 8, 9, 10),
        max_staleness=250,
        historical_results=history,
    )
    assert PullFeedAccountData.from_bytes(feed.to_bytes()) == feed


def test_result_position_in_layout():
    feed = PullFeedAccountData(result=CurrentResult(value=1, slot=1))
    data = feed.to_bytes()
    assert data[2256] == 1
    assert PullFeedAccountData.from_bytes(data).result.value_decimal() == Decimal("1E-18")


def test_wrong_size_raises():
    with pytest.raises(ValueError):
        PullFeedAccountData.from_bytes(bytes(3199))


def test_wrong_submission_count_raises():
    with pytest.raises(ValueError):
        PullFeedAccountData(submissions=[]).to_bytes()