import pytest
from hypothesis import given
from hypothesis import strategies as st

from scopeoracle.state import (
    MAX_ENTRIES,
    MAX_ENTRIES_U16,
    DatedPrice,
    EmaTwap,
    OracleMappings,
    Price,
    TokenMetadata,
    UpdateTokenMetadataMode,
)

u64 = st.integers(min_value=0, max_value=(1 << 64) - 1)
u16 = st.integers(min_value=0, max_value=(1 << 16) - 1)


@given(u64, u64)
def test_price_round_trip(value, exp):
    price = Price(value, exp)
    assert Price.from_bytes(price.to_bytes()) == price


def test_price_wire_format_is_little_endian():
    assert Price(1, 2).to_bytes() == (1).to_bytes(8, "little") + (2).to_bytes(8, "little")


def test_price_rejects_negative():
    with pytest.raises(ValueError):
        Price(-1, 0)


def test_price_wrong_length():
    with pytest.raises(ValueError):
        Price.from_bytes(bytes(15))


def test_dated_price_default_index():
    assert DatedPrice().index == MAX_ENTRIES_U16
    assert DatedPrice().price == Price(0, 0)


def test_dated_price_encodes_to_56_bytes():
    assert len(DatedPrice().to_bytes()) == 56


@given(u64, u64, u64, u64, u16)
def test_dated_price_round_trip(value, exp, slot, ts, index):
    dated = DatedPrice(Price(value, exp), slot, ts, index)
    assert DatedPrice.from_bytes(dated.to_bytes()) == dated


def test_dated_price_index_at_end():
    data = DatedPrice(index=7).to_bytes()
    assert data[-2:] == (7).to_bytes(2, "little")


def test_dated_price_wrong_length():
    with pytest.raises(ValueError):
        DatedPrice.from_bytes(bytes(DatedPrice.SIZE + 1))


@given(st.binary(max_size=32), u64, u64)
def test_token_metadata_round_trip(name, max_age, groups):
    meta = TokenMetadata(name, max_age, groups)
    decoded = TokenMetadata.from_bytes(meta.to_bytes())
    assert decoded == meta
    assert decoded.name.rstrip(b"\x00") == name.rstrip(b"\x00")


def test_token_metadata_name_too_long():
    with pytest.raises(ValueError):
        TokenMetadata(b"x" * 33)


def test_token_metadata_name_padded():
    assert TokenMetadata(b"SOL").name == b"SOL" + bytes(29)


def test_ema_twap_defaults():
    twap = EmaTwap()
    assert (twap.last_update_slot, twap.last_update_unix_timestamp, twap.current_ema_1h) == (0, 0, 0)


def test_oracle_mappings_twap():
    mappings = OracleMappings()
    assert len(mappings.twap_enabled) == MAX_ENTRIES
    assert mappings.is_twap_enabled(3) is False
    mappings.twap_enabled[3] = 1
    mappings.twap_source[3] = 42
    assert mappings.is_twap_enabled(3) is True
    assert mappings.get_twap_source(3) == 42


def test_oracle_mappings_out_of_range():
    with pytest.raises(IndexError):
        OracleMappings().is_twap_enabled(MAX_ENTRIES)


@pytest.mark.parametrize("mode", list(UpdateTokenMetadataMode))
def test_update_mode_conversions(mode):
    assert UpdateTokenMetadataMode(mode.to_u64()) is mode
    assert mode.to_u16() == mode.to_u64()


def test_update_mode_invalid():
    with pytest.raises(ValueError):
        UpdateTokenMetadataMode(3)