"""Perpetuals pool and custody records used to value pool liquidity tokens."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import Optional, Tuple

PROGRAM_ID = "PERPHjGBqRHArX4DySjwM6UJHiR3sWAatqfdBS2qQJu"
PERPETUAL_ACC = "H4ND9aYttUVLFmNypZqLjZ52FYiGvdEB45GmwNoKEjTj"
PRICE_DECIMALS = 6

_U128_MAX = (1 << 128) - 1
_PUBKEY_LEN = 32

_LIMIT_TAIL = struct.Struct("<Q")
_FEES = struct.Struct("<9Q")
_POOL_APR = struct.Struct("<qQQ")
_POOL_TAIL = struct.Struct("<qBBq")
_U32 = struct.Struct("<I")


class PriceCalcMode(enum.IntEnum):
    """How prices are chosen when computing assets under management."""

    MIN = 0
    MAX = 1
    IGNORE = 2


class OracleType(enum.IntEnum):
    """Kind of oracle backing a custody."""

    NONE = 0
    TEST = 1
    PYTH = 2


@dataclass
class Limit:
    max_aum_usd: int = 0
    max_individual_lp_token: int = 0
    max_position_usd: int = 0


@dataclass
class Fees:
    increase_position_bps: int = 0
    decrease_position_bps: int = 0
    add_remove_liquidity_bps: int = 0
    swap_bps: int = 0
    tax_bps: int = 0
    stable_swap_bps: int = 0
    stable_swap_tax_bps: int = 0
    liquidation_reward_bps: int = 0
    protocol_share_bps: int = 0


@dataclass
class PoolApr:
    last_updated: int = 0
    fee_apr_bps: int = 0
    realized_fee_usd: int = 0


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self._data):
            raise ValueError("account data is truncated")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def unpack(self, layout: struct.Struct) -> tuple:
        return layout.unpack(self.take(layout.size))

    def u128(self) -> int:
        return int.from_bytes(self.take(16), "little")


def _u128_bytes(value: int) -> bytes:
    return value.to_bytes(16, "little")


@dataclass
class Pool:
    """A perpetuals liquidity pool; ``aum_usd`` is scaled by 6 decimals."""

    name: str = ""
    custodies: list = field(default_factory=list)
    aum_usd: int = 0
    limit: Limit = field(default_factory=Limit)
    fees: Fees = field(default_factory=Fees)
    pool_apr: PoolApr = field(default_factory=PoolApr)
    max_request_execution_sec: int = 0
    bump: int = 0
    lp_token_bump: int = 0
    inception_time: int = 0

    def to_bytes(self) -> bytes:
        """Serialise the account body (without discriminator)."""
        name = self.name.encode("utf-8")
        parts = [_U32.pack(len(name)), name, _U32.pack(len(self.custodies))]
        for custody in self.custodies:
            if len(custody) != _PUBKEY_LEN:
                raise ValueError("custody keys must be 32 bytes")
            parts.append(bytes(custody))
        parts += [
            _u128_bytes(self.aum_usd),
            _u128_bytes(self.limit.max_aum_usd),
            _u128_bytes(self.limit.max_individual_lp_token),
            _LIMIT_TAIL.pack(self.limit.max_position_usd),
            _FEES.pack(
                self.fees.increase_position_bps,
                self.fees.decrease_position_bps,
                self.fees.add_remove_liquidity_bps,
                self.fees.swap_bps,
                self.fees.tax_bps,
                self.fees.stable_swap_bps,
                self.fees.stable_swap_tax_bps,
                self.fees.liquidation_reward_bps,
                self.fees.protocol_share_bps,
            ),
            _POOL_APR.pack(
                self.pool_apr.last_updated,
                self.pool_apr.fee_apr_bps,
                self.pool_apr.realized_fee_usd,
            ),
            _POOL_TAIL.pack(
                self.max_request_execution_sec,
                self.bump,
                self.lp_token_bump,
                self.inception_time,
            ),
        ]
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Pool":
        """Decode the account body (without discriminator)."""
        reader = _Reader(data)
        (name_len,) = reader.unpack(_U32)
        name = reader.take(name_len).decode("utf-8")
        (count,) = reader.unpack(_U32)
        custodies = [reader.take(_PUBKEY_LEN) for _ in range(count)]
        aum_usd = reader.u128()
        limit = Limit(reader.u128(), reader.u128(), *reader.unpack(_LIMIT_TAIL))
        fees = Fees(*reader.unpack(_FEES))
        pool_apr = PoolApr(*reader.unpack(_POOL_APR))
        max_exec, bump, lp_bump, inception = reader.unpack(_POOL_TAIL)
        return cls(
            name=name,
            custodies=custodies,
            aum_usd=aum_usd,
            limit=limit,
            fees=fees,
            pool_apr=pool_apr,
            max_request_execution_sec=max_exec,
            bump=bump,
            lp_token_bump=lp_bump,
            inception_time=inception,
        )


@dataclass
class OracleParams:
    oracle_account: bytes = bytes(_PUBKEY_LEN)
    oracle_type: OracleType = OracleType.NONE
    max_price_error: int = 0
    max_price_age_sec: int = 0


@dataclass
class Assets:
    fees_reserves: int = 0
    owned: int = 0
    locked: int = 0
    guaranteed_usd: int = 0
    global_short_sizes: int = 0
    global_short_average_prices: int = 0


@dataclass
class Custody:
    """Token custody of a pool."""

    pool: bytes = bytes(_PUBKEY_LEN)
    mint: bytes = bytes(_PUBKEY_LEN)
    token_account: bytes = bytes(_PUBKEY_LEN)
    decimals: int = 0
    is_stable: bool = False
    oracle: OracleParams = field(default_factory=OracleParams)
    target_ratio_bps: int = 0
    assets: Assets = field(default_factory=Assets)
    bump: int = 0
    token_account_bump: int = 0

    def get_global_short_pnl(self, current_price: int) -> Optional[Tuple[int, bool]]:
        """Return (traders_pnl_delta, traders_in_profit), or None on math failure.

        ``current_price`` is scaled to PRICE_DECIMALS.
        """
        average_price = self.assets.global_short_average_prices
        price_delta = abs(average_price - current_price)
        nom = self.assets.global_short_sizes * price_delta
        if nom > _U128_MAX or average_price == 0:
            return None
        return nom // average_price, average_price > current_price