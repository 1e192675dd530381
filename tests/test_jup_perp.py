import pytest
from hypothesis import given
from hypothesis import strategies as st

from scopeoracle.jup_perp import (
    Assets,
    Custody,
    Fees,
    Limit,
    Pool,
    PoolApr,
)


def _custody(sizes, avg):
    return Custody(assets=Assets(global_short_sizes=sizes, global_short_average_prices=avg))


def test_short_pnl_trader_profit_when_price_drops():
    delta, profit = _custody(1000, 100).get_global_short_pnl(90)
    assert profit is True
    assert delta == 100


def test_short_pnl_trader_loss_when_price_rises():
    delta, profit = _custody(1000, 100).get_global_short_pnl(110)
    assert profit is False
    assert delta == 100


def test_short_pnl_zero_average_is_none():
    assert _custody(1000, 0).get_global_short_pnl(5) is None


@given(
    sizes=st.integers(0, 2**64 - 1),
    avg=st.integers(1, 2**64 - 1),
    price=st.integers(0, 2**64 - 1),
)
def test_short_pnl_invariants(sizes, avg, price):
    delta, profit = _custody(sizes, avg).get_global_short_pnl(price)
    assert profit == (avg > price)
    assert delta * avg <= sizes * abs(avg - price)


def test_pool_name_wire_prefix():
    assert Pool(name="ab").to_bytes()[:6] == b"\x02\x00\x00\x00ab"


def test_pool_round_trip():
    pool = Pool(
        name="JLP",
        custodies=[bytes([1]) * 32, bytes([2]) * 32],
        aum_usd=2**100,
        limit=Limit(2**90, 7, 8),
        fees=Fees(*range(1, 10)),
        pool_apr=PoolApr(-5, 6, 7),
        max_request_execution_sec=45,
        bump=254,
        lp_token_bump=253,
        inception_time=1_700_000_000,
    )
    assert Pool.from_bytes(pool.to_bytes()) == pool


@given(
    name=st.text(max_size=20),
    custodies=st.lists(st.binary(min_size=32, max_size=32), max_size=4),
    aum=st.integers(0, 2**128 - 1),
)
def test_pool_round_trip_property(name, custodies, aum):
    pool = Pool(name=name, custodies=custodies, aum_usd=aum)
    assert Pool.from_bytes(pool.to_bytes()) == pool


def test_pool_truncated_raises():
    data = Pool(name="x").to_bytes()
    with pytest.raises(ValueError):
        Pool.from_bytes(data[:-1])


def test_pool_bad_custody_key_raises():
    with pytest.raises(ValueError):
        Pool(custodies=[b"short"]).to_bytes()