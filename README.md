# scopeoracle

Account layouts, error codes and fixed-point arithmetic for an on-chain price
oracle, in plain Python with no runtime dependencies.

## Modules

- `scopeoracle.errors`: `ScopeErrorCode`, an `IntEnum` of every error the oracle
  can report, numbered in order; `ScopeErrorCode.message()` gives its
  description. `ScopeError` is the exception raised with such a code; its
  `code` attribute holds the `ScopeErrorCode` and its text is the message.
- `scopeoracle.state`: the oracle's records.
  - `Price` (integer `value` scaled by `10 ** exp`, both unsigned 64-bit) and
    `DatedPrice` (a price with `last_updated_slot`, `unix_timestamp` and
    `index`, which defaults to 512), each with `to_bytes()` / `from_bytes()`
    for their fixed little-endian layout.
  - `TokenMetadata` (a 32-byte zero-padded `name`, `max_age_price_slots`,
    `group_ids_bitset`) with `to_bytes()` / `from_bytes()`.
  - `EmaTwap`, the moving-average state of one entry.
  - `OracleMappings`, with `is_twap_enabled(entry_id)` and
    `get_twap_source(entry_id)`.
  - `UpdateTokenMetadataMode` (`NAME`, `MAX_PRICE_AGE_SLOTS`, `GROUP_IDS`) with
    `to_u16()` and `to_u64()`.
- `scopeoracle.token_metadata`: `update_token_metadata(metadata, mode, value)`
  applies one update to a `TokenMetadata` in place and returns it. Ages and
  group ids are read from the first 8 bytes of `value` as a little-endian
  integer; a name must be at most 32 bytes. An unknown mode raises
  `ScopeError` with `INVALID_TOKEN_UPDATE_MODE`; a malformed value raises
  `ValueError`. `list_set_bit_positions(bits)` lists the positions of the set
  bits, least significant first.
- `scopeoracle.u64x64_math`: Q64.64 arithmetic. `pow(base, exp)` raises a
  Q64.64 number to a signed integer power and raises `OverflowError` when the
  result cannot be represented (including exponents of magnitude 0x80000 or
  more). `get_x64_price_from_id(active_id, bin_step)` gives
  `(1 + bin_step / 10000) ** active_id` as Q64.64. `LbPair.from_bytes(data)`
  decodes a liquidity-book pair account body.
- `scopeoracle.jup_perp`: perpetuals pool records. `Pool` has `to_bytes()` and
  `from_bytes()` for its variable-length layout. `Custody.get_global_short_pnl
  (current_price)` returns `(traders_pnl_delta, traders_in_profit)`, or `None`
  when the computation overflows 128 bits or the average price is zero.
  `PriceCalcMode` and `OracleType` are the related enumerations.
- `scopeoracle.sbod`: pull-feed account layout. `PullFeedAccountData.from_bytes`
  decodes a 3200-byte account body, and `to_bytes()` encodes one.
  `CurrentResult.value_decimal()` and `std_dev_decimal()` return
  `decimal.Decimal` values with 18 decimals, or `None` if the feed's slot is 0.

All `from_bytes` methods take the account body without its 8-byte
discriminator.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Examples

```python
from scopeoracle.u64x64_math import get_x64_price_from_id

# Q64.64 price for bin 100 with a 10 bps step
price_q64 = get_x64_price_from_id(100, 10)
print(price_q64 / 2**64)
```

```python
from scopeoracle.state import DatedPrice, Price, TokenMetadata, UpdateTokenMetadataMode
from scopeoracle.token_metadata import update_token_metadata

dated = DatedPrice(price=Price(value=6462236900000, exp=8), last_updated_slot=10)
assert DatedPrice.from_bytes(dated.to_bytes()) == dated

meta = update_token_metadata(TokenMetadata(), UpdateTokenMetadataMode.NAME, b"SOL")
print(meta.name.rstrip(b"\x00"))
```

## What it does not do

The package decodes and encodes account data and computes on values you pass
in. It does not fetch accounts from a network, send transactions, keep any
storage, or run as a command or service. It does not compute prices from
lending reserves, and it does not refresh prices or update TWAPs.

## Running the tests

```
pytest
```